"""Seeding orchestrator: materializes the four data models from catalog movies."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from moviemodeling.constants import MODEL_NAMES, PARTITION_KEY_PATH
from moviemodeling.service.catalog import SourceMovie
from moviemodeling.service.database.config import MediaApiConfig
from moviemodeling.service.database.store import DocumentStoreGateway
from moviemodeling.service.errors import SeedingError
from moviemodeling.service.modeling.transform import (
    HybridAccumulator,
    credits_for,
    to_embedded_person,
    to_movie_document,
    to_reference_person,
)

logger = logging.getLogger(__name__)


class MovieFetcher(Protocol):
    def fetch_batch(self, skip: int = 0, limit: int = 5) -> list[SourceMovie]: ...


@dataclass
class ModelCounts:
    movie_documents: int = 0
    person_documents: int = 0


@dataclass
class SeedingReport:
    """Committed upsert counts per data model.

    Attributes:
        movie_count: Movies whose movie document is committed in every model
            attempted so far
        models: Per-model counts of committed movie and person documents
    """

    movie_count: int = 0
    models: dict[str, ModelCounts] = field(default_factory=dict)

    def committed_movies(self) -> int:
        if not self.models:
            return 0
        return min(counts.movie_documents for counts in self.models.values())

    def person_count(self, model: str) -> int:
        counts = self.models.get(model)
        return counts.person_documents if counts else 0

    def to_dict(self) -> dict:
        return {
            "movie_count": self.movie_count,
            "models": {
                name: {
                    "movie_documents": counts.movie_documents,
                    "person_documents": counts.person_documents,
                }
                for name, counts in self.models.items()
            },
        }


class Seeder:
    """Drives catalog movies through the transformer into the document store.

    Args:
        store: Document store gateway to write to
        base_url: Base URL for poster/image paths (default: MediaApiConfig)
        fetcher: Optional catalog client used by seed_from_catalog
    """

    def __init__(
        self,
        store: DocumentStoreGateway,
        base_url: str | None = None,
        fetcher: MovieFetcher | None = None,
    ):
        self.store = store
        self.base_url = base_url or MediaApiConfig.get_base_url()
        self.fetcher = fetcher

    def ensure_collections(self) -> None:
        for model in MODEL_NAMES:
            created = self.store.create_collection_if_absent(model, PARTITION_KEY_PATH)
            logger.info(f"Collection '{model}' {'created' if created else 'ready'}")

    def seed(self, movies: list[SourceMovie]) -> SeedingReport:
        """Upsert every data model for ``movies``, one model after another.

        Raises:
            SeedingError: If any write fails; the report holds what was committed
        """
        report = SeedingReport()
        self.ensure_collections()

        seeders = {
            "Single": self._seed_single,
            "Embedded": self._seed_embedded,
            "Reference": self._seed_reference,
            "Hybrid": self._seed_hybrid,
        }
        for model in MODEL_NAMES:
            counts = ModelCounts()
            report.models[model] = counts
            try:
                seeders[model](movies, counts)
            except Exception as e:
                report.movie_count = report.committed_movies()
                logger.error(f"Seeding '{model}' failed after {counts} committed: {e}")
                raise SeedingError(model, report, e) from e
            logger.info(
                f"{model}: upserted {counts.movie_documents} movie + "
                f"{counts.person_documents} person documents"
            )
            report.movie_count = report.committed_movies()

        logger.info("Seeding complete")
        return report

    def seed_from_catalog(self, batch_size: int, skip: int = 0) -> SeedingReport:
        """Fetch one batch from the catalog and seed it."""
        if self.fetcher is None:
            raise ValueError("No catalog fetcher configured")

        movies = self.fetcher.fetch_batch(skip=skip, limit=batch_size)
        if not movies:
            logger.info("No movies returned, nothing to seed")
            return SeedingReport()
        return self.seed(movies)

    def _upsert_movie(self, model: str, movie: SourceMovie, counts: ModelCounts) -> None:
        document = to_movie_document(movie, self.base_url)
        self.store.upsert(model, document, document.title)
        counts.movie_documents += 1

    def _seed_single(self, movies: list[SourceMovie], counts: ModelCounts) -> None:
        for movie in movies:
            self._upsert_movie("Single", movie, counts)

    def _seed_embedded(self, movies: list[SourceMovie], counts: ModelCounts) -> None:
        for movie in movies:
            self._upsert_movie("Embedded", movie, counts)
            for person, marker, _ in credits_for(movie):
                document = to_embedded_person(
                    movie, person.person_id, person.name, marker, self.base_url
                )
                self.store.upsert("Embedded", document, document.title)
                counts.person_documents += 1

    def _seed_reference(self, movies: list[SourceMovie], counts: ModelCounts) -> None:
        for movie in movies:
            self._upsert_movie("Reference", movie, counts)
            for person, marker, _ in credits_for(movie):
                document = to_reference_person(
                    movie, person.person_id, person.name, marker, self.base_url
                )
                self.store.upsert("Reference", document, document.title)
                counts.person_documents += 1

    def _seed_hybrid(self, movies: list[SourceMovie], counts: ModelCounts) -> None:
        accumulator = HybridAccumulator(self.base_url)
        for movie in movies:
            self._upsert_movie("Hybrid", movie, counts)
            accumulator.add_movie(movie)

        # Persons are written only once every movie has been mapped.
        for document in accumulator.documents():
            self.store.upsert("Hybrid", document, document.title)
            counts.person_documents += 1
