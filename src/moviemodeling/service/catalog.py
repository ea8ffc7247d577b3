"""Client for the Battle Cabbage media catalog API.

Movies are fetched in pages ordered by ``movie_id`` and decoded into
immutable ``SourceMovie`` records, the canonical input to the model
transformer.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import requests

from moviemodeling.service.database.config import MediaApiConfig
from moviemodeling.service.errors import MalformedResponseError, StoreUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourcePerson:
    person_id: str
    name: str
    image_url: str | None = None


@dataclass(frozen=True)
class SourceReview:
    review_id: str | None
    text: str | None = None
    score: float | None = None


@dataclass(frozen=True)
class SourceMovie:
    """A movie as published by the catalog, with its credits and reviews."""

    external_id: str
    title: str
    movie_id: int | None = None
    tagline: str | None = None
    description: str | None = None
    mpaa_rating: str | None = None
    release_date: str | None = None
    popularity_score: float | None = None
    genre: str | None = None
    poster_url: str | None = None
    actors: tuple[SourcePerson, ...] = field(default_factory=tuple)
    directors: tuple[SourcePerson, ...] = field(default_factory=tuple)
    reviews: tuple[SourceReview, ...] = field(default_factory=tuple)


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _optional_float(value: Any) -> float | None:
    return None if value is None else float(value)


def _parse_person(raw: dict[str, Any], id_key: str, name_key: str) -> SourcePerson:
    return SourcePerson(
        person_id=str(raw[id_key]),
        name=str(raw.get(name_key) or ""),
        image_url=raw.get("image_url"),
    )


def parse_movie(raw: dict[str, Any]) -> SourceMovie:
    """Decode one catalog movie payload.

    Args:
        raw: JSON object as returned by the /movies endpoint

    Returns:
        SourceMovie: The decoded movie

    Raises:
        MalformedResponseError: If required fields are missing or mistyped
    """
    try:
        return SourceMovie(
            external_id=str(raw["external_id"]),
            title=str(raw["title"]),
            movie_id=raw.get("movie_id"),
            tagline=raw.get("tagline"),
            description=raw.get("description"),
            mpaa_rating=raw.get("mpaa_rating"),
            release_date=_optional_str(raw.get("release_date")),
            popularity_score=_optional_float(raw.get("popularity_score")),
            genre=raw.get("genre"),
            poster_url=raw.get("poster_url"),
            actors=tuple(
                _parse_person(a, "actor_id", "actor") for a in raw.get("actors") or []
            ),
            directors=tuple(
                _parse_person(d, "director_id", "director") for d in raw.get("directors") or []
            ),
            reviews=tuple(
                SourceReview(
                    review_id=_optional_str(r.get("critic_review_id")),
                    text=r.get("critic_review"),
                    score=_optional_float(r.get("critic_score")),
                )
                for r in raw.get("reviews") or []
            ),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedResponseError(f"Invalid movie payload: {e}") from e


class CatalogClient:
    """HTTP client for the media catalog's /movies endpoint."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self.base_url = (base_url or MediaApiConfig.get_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else MediaApiConfig.get_timeout()
        self.session = session or requests.Session()

    def fetch_batch(self, skip: int = 0, limit: int = 5) -> list[SourceMovie]:
        """Fetch one page of movies ordered by movie id.

        Args:
            skip: Number of movies to skip
            limit: Maximum number of movies to return

        Returns:
            list[SourceMovie]: Movies in catalog order (possibly empty)

        Raises:
            StoreUnavailableError: If the catalog cannot be reached
            MalformedResponseError: If the response is not a list of movies
        """
        params = {"skip": skip, "limit": limit, "sort_by": "movie_id", "order": "asc"}
        logger.info(f"Fetching {limit} movies from {self.base_url} (skip={skip})")

        try:
            response = self.session.get(
                f"{self.base_url}/movies", params=params, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise StoreUnavailableError(f"Media catalog request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponseError("Media catalog returned invalid JSON") from e

        if payload is None:
            return []
        if not isinstance(payload, list):
            raise MalformedResponseError("Media catalog response is not a list")

        movies = [parse_movie(item) for item in payload]
        logger.info(f"Received {len(movies)} movies")
        return movies
