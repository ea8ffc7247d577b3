"""HTTP client for the data modeling search API."""

import logging
import os
from typing import Any

import requests

from moviemodeling.constants import DEFAULT_API_URL
from moviemodeling.service.errors import (
    InvalidInputError,
    MalformedResponseError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)


class DataModelingApiClient:
    """Calls ``/api/datamodeling/`` on a running moviemodeling web API.

    Args:
        base_url: API base URL (default: MOVIEMODELING_API_URL env or localhost:5000)
        timeout: Request timeout in seconds
        session: Optional requests session to reuse connections
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        self.base_url = (base_url or os.getenv("MOVIEMODELING_API_URL", DEFAULT_API_URL)).rstrip(
            "/"
        )
        self.timeout = timeout
        self.session = session or requests.Session()

    def search(
        self,
        data_model: str,
        search_value: str,
        search_type: str | None = None,
        doc_id: str | None = None,
    ) -> dict[str, Any] | None:
        """Search a data model through the API.

        Args:
            data_model: Single, Embedded, Reference or Hybrid
            search_value: Title or person name
            search_type: Optional "person"
            doc_id: Optional document id for a point read

        Returns:
            dict | None: {"mediaResults": [...], "requestDiagnostics": {...}},
            or None when the API answered 404

        Raises:
            InvalidInputError: If the API rejected the request (400)
            StoreUnavailableError: On connection errors or other failures
            MalformedResponseError: If the body is not the expected JSON
        """
        params = {"dataModel": data_model, "searchValue": search_value}
        if search_type:
            params["searchType"] = search_type
        if doc_id:
            params["docId"] = doc_id

        try:
            response = self.session.get(
                f"{self.base_url}/api/datamodeling/", params=params, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise StoreUnavailableError(f"API request failed: {e}") from e

        if response.status_code == 404:
            return None
        if response.status_code == 400:
            raise InvalidInputError(self._error_message(response))

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise StoreUnavailableError(self._error_message(response)) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponseError("API returned invalid JSON") from e

        if not isinstance(payload, dict):
            raise MalformedResponseError("API response is not a JSON object")
        return {
            "mediaResults": payload.get("mediaResults", []),
            "requestDiagnostics": payload.get("requestDiagnostics", {}),
        }

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            return response.json().get("error", response.text)
        except (ValueError, AttributeError):
            return response.text
