"""Shared configuration for route modules."""

from dataclasses import dataclass, field

from moviemodeling.service.modeling.benchmark import BenchmarkAggregator
from moviemodeling.service.modeling.query import QueryRouter


@dataclass
class RouteConfig:
    """Configuration container for Flask route dependencies.

    Holds the query router and the benchmark aggregator so that routes can
    be tested with substitutes.
    """

    router: QueryRouter | None = None
    benchmark: BenchmarkAggregator = field(default_factory=BenchmarkAggregator)
    database_name: str | None = None


# Single shared config instance
_config = RouteConfig()


def get_config() -> RouteConfig:
    """Get the shared route configuration.

    Returns:
        RouteConfig instance with current settings
    """
    return _config


def init_config(
    router: QueryRouter | None = None,
    benchmark: BenchmarkAggregator | None = None,
    database_name: str | None = None,
) -> None:
    """Initialize the shared route configuration.

    Args:
        router: Query router bound to the document store
        benchmark: Aggregator that records every successful query
        database_name: Name of the RavenDB database being served
    """
    if router is not None:
        _config.router = router
    if benchmark is not None:
        _config.benchmark = benchmark
    if database_name is not None:
        _config.database_name = database_name
