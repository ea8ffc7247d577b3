"""Pytest configuration and shared fixtures for the test suite."""

from collections.abc import Iterator
from typing import Any

import pytest

from moviemodeling.service.catalog import SourceMovie, SourcePerson, SourceReview
from moviemodeling.service.database.store import Page, PointReadResult


class FakeDocumentStore:
    """In-memory DocumentStoreGateway that records every call.

    Upserts are kept per collection keyed by document id, so re-seeding
    overwrites exactly like the real store. Queries return the pages queued
    with ``queue_pages``, or otherwise a single page matched on ``title``, or
    on actor and director names when ``search`` is bound.
    """

    def __init__(self, upsert_cost: float = 1.0, read_cost: float = 1.0):
        self.collections: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple] = []
        self.upsert_cost = upsert_cost
        self.read_cost = read_cost
        self.fail_on: set[tuple[str, str]] = set()
        self._queued_pages: list[Page] | None = None

    def create_collection_if_absent(self, name: str, partition_key_path: str) -> bool:
        self.calls.append(("create_collection_if_absent", name, partition_key_path))
        if name in self.collections:
            return False
        self.collections[name] = {}
        return True

    def upsert(self, collection: str, document: Any, partition_key: str) -> float:
        self.calls.append(("upsert", collection, document.id, partition_key))
        if (collection, document.id) in self.fail_on:
            raise ConnectionError(f"write to {collection}/{document.id} failed")
        assert document.title == partition_key
        self.collections.setdefault(collection, {})[document.id] = document.to_dict()
        return self.upsert_cost

    def get_by_key(self, collection: str, doc_id: str, partition_key: str) -> PointReadResult:
        self.calls.append(("get_by_key", collection, doc_id, partition_key))
        document = self.collections.get(collection, {}).get(doc_id)
        if document is None or document["title"] != partition_key:
            return PointReadResult(None, self.read_cost, "op-read")
        return PointReadResult(document, self.read_cost, "op-read")

    def query_paged(
        self, collection: str, query_text: str, parameters: dict[str, Any]
    ) -> Iterator[Page]:
        self.calls.append(("query_paged", collection, query_text, dict(parameters)))
        if self._queued_pages is not None:
            yield from self._queued_pages
            return
        documents = self.collections.get(collection, {}).values()
        if "search" in parameters:
            name = parameters["search"]
            matches = [
                doc
                for doc in documents
                if any(p["name"] == name for p in doc.get("actors", []) + doc.get("directors", []))
            ]
        else:
            matches = [doc for doc in documents if doc["title"] == parameters.get("title")]
        yield Page(matches, self.read_cost, "op-query")

    def queue_pages(self, pages: list[Page]) -> None:
        self._queued_pages = pages

    def count(self, collection: str) -> int:
        return len(self.collections.get(collection, {}))


@pytest.fixture
def fake_store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture
def make_movie():
    """Factory fixture to create catalog movies.

    Returns:
        Function that creates a SourceMovie with custom parameters
    """

    def _make_movie(
        external_id: str = "m1",
        title: str = "Dune",
        actors: list[tuple[str, str]] | None = None,
        directors: list[tuple[str, str]] | None = None,
        release_date: str | None = "2021-10-22",
        genre: str | None = "Science Fiction",
        poster_url: str | None = "/posters/dune.jpg",
    ) -> SourceMovie:
        return SourceMovie(
            external_id=external_id,
            title=title,
            tagline="Beyond fear, destiny awaits.",
            description="A noble family becomes embroiled in a war for a desert planet.",
            mpaa_rating="PG-13",
            release_date=release_date,
            popularity_score=87.5,
            genre=genre,
            poster_url=poster_url,
            actors=tuple(SourcePerson(pid, name, f"/people/{pid}.jpg") for pid, name in actors or []),
            directors=tuple(SourcePerson(pid, name) for pid, name in directors or []),
            reviews=(SourceReview("r1", "Spectacular.", 9.0),),
        )

    return _make_movie


@pytest.fixture
def sample_movies(make_movie) -> list[SourceMovie]:
    """Three movies where one actor and one director appear more than once."""
    return [
        make_movie("m1", "Dune", actors=[("7", "Zed"), ("8", "Ann Lee")], directors=[("3", "Vera")]),
        make_movie("m2", "Dune Part Two", actors=[("7", "Zed")], directors=[("3", "Vera")]),
        make_movie("m3", "Arrival", actors=[("9", "Bo")], directors=[("3", "Vera")]),
    ]

