"""Query router: picks a point read or a filtered query for a search request."""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any

from moviemodeling.constants import MODEL_NAMES, PERSON_SEARCH, POINT_READ, SQL_QUERY
from moviemodeling.service.database.store import DocumentStoreGateway
from moviemodeling.service.errors import InvalidInputError

logger = logging.getLogger(__name__)

TITLE_QUERY = "from '{collection}' where title = $title"
PERSON_QUERY = (
    "from '{collection}' where actors[].name = $search or directors[].name = $search"
)


@dataclass
class RequestDiagnostics:
    """Per-request details returned alongside the results."""

    data_model: str
    submitted_search_value: str
    formatted_search_value: str
    query_type: str
    doc_id: str | None = None
    query_text: str | None = None
    request_charge: str = "0.00"
    activity_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class QueryResponse:
    diagnostics: RequestDiagnostics
    results: list[dict[str, Any]] = field(default_factory=list)

    @property
    def total_cost(self) -> float:
        return float(self.diagnostics.request_charge)

    def to_dict(self) -> dict[str, Any]:
        return {
            "mediaResults": self.results,
            "requestDiagnostics": self.diagnostics.to_dict(),
        }


def resolve_model(model: str | None) -> str:
    """Return the canonical data model name for ``model``, ignoring case.

    Raises:
        InvalidInputError: If the name is not one of the four data models
    """
    if model:
        for name in MODEL_NAMES:
            if name.lower() == model.strip().lower():
                return name
    raise InvalidInputError(
        f"Invalid data model '{model}'. Must be one of: {', '.join(MODEL_NAMES)}."
    )


class QueryRouter:
    """Executes search requests against a document store.

    A request with a document id is served by a point read addressed by
    (id, lowercased search value). Anything else becomes a parameterized
    filtered query whose pages are all drained before returning.
    """

    def __init__(self, store: DocumentStoreGateway):
        self.store = store

    def query(
        self,
        model: str,
        search_value: str,
        search_kind: str | None = None,
        doc_id: str | None = None,
    ) -> QueryResponse | None:
        """Run a search and return results with diagnostics, or None if not found.

        Args:
            model: Data model name (Single, Embedded, Reference or Hybrid)
            search_value: Title or person name to look for
            search_kind: "person" to search actors/directors (Single model only)
            doc_id: Document id; when given, a point read is issued

        Returns:
            QueryResponse | None: Results and diagnostics, None when nothing matched

        Raises:
            InvalidInputError: For an unknown model or a blank search value
            StoreUnavailableError: If the store cannot be reached
        """
        collection = resolve_model(model)
        if search_value is None or not search_value.strip():
            raise InvalidInputError("Please provide a valid search value")

        formatted = search_value.lower()
        if doc_id:
            return self._point_read(collection, search_value, formatted, doc_id)
        return self._filtered_query(collection, search_value, formatted, search_kind)

    def _point_read(
        self, collection: str, submitted: str, formatted: str, doc_id: str
    ) -> QueryResponse | None:
        result = self.store.get_by_key(collection, doc_id, formatted)
        if result.document is None:
            logger.warning(f"Point read not found: {doc_id} / {formatted}")
            return None

        diagnostics = RequestDiagnostics(
            data_model=collection,
            submitted_search_value=submitted,
            formatted_search_value=formatted,
            query_type=POINT_READ,
            doc_id=doc_id,
            request_charge=f"{result.cost:.2f}",
            activity_id=result.operation_id,
        )
        return QueryResponse(diagnostics, [result.document])

    def _filtered_query(
        self, collection: str, submitted: str, formatted: str, search_kind: str | None
    ) -> QueryResponse | None:
        if search_kind == PERSON_SEARCH and collection == "Single":
            query_text = PERSON_QUERY.format(collection=collection)
            parameters = {"search": formatted}
        else:
            query_text = TITLE_QUERY.format(collection=collection)
            parameters = {"title": formatted}

        logger.info(f"Executing query: {query_text}")

        results: list[dict[str, Any]] = []
        total_cost = 0.0
        activity_id = None
        for page in self.store.query_paged(collection, query_text, parameters):
            results.extend(page.documents)
            total_cost += page.cost
            activity_id = page.operation_id

        if not results:
            logger.info("No results found for query")
            return None

        diagnostics = RequestDiagnostics(
            data_model=collection,
            submitted_search_value=submitted,
            formatted_search_value=formatted,
            query_type=SQL_QUERY,
            query_text=query_text,
            request_charge=f"{total_cost:.2f}",
            activity_id=activity_id,
        )
        return QueryResponse(diagnostics, results)
