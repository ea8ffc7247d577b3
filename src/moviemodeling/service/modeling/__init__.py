"""The four data models: transformation, seeding, query routing and benchmarking.

Usage:
    from moviemodeling.service.modeling import QueryRouter, Seeder

    router = QueryRouter(store)
    response = router.query("Single", "Dune", doc_id="m1")
"""

# Re-export public API
from moviemodeling.service.modeling.benchmark import BenchmarkAggregator, BenchmarkSnapshot
from moviemodeling.service.modeling.query import (
    QueryResponse,
    QueryRouter,
    RequestDiagnostics,
    resolve_model,
)
from moviemodeling.service.modeling.seeding import ModelCounts, Seeder, SeedingReport
from moviemodeling.service.modeling.transform import (
    HybridAccumulator,
    to_embedded_person,
    to_movie_document,
    to_reference_person,
)

__all__ = [
    # Transform
    "to_movie_document",
    "to_embedded_person",
    "to_reference_person",
    "HybridAccumulator",
    # Seeding
    "Seeder",
    "SeedingReport",
    "ModelCounts",
    # Query
    "QueryRouter",
    "QueryResponse",
    "RequestDiagnostics",
    "resolve_model",
    # Benchmark
    "BenchmarkAggregator",
    "BenchmarkSnapshot",
]
