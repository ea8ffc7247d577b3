"""Flask route blueprints for the moviemodeling web API."""

from moviemodeling.client.routes.benchmark import benchmark_bp
from moviemodeling.client.routes.config import get_config, init_config
from moviemodeling.client.routes.datamodeling import datamodeling_bp
from moviemodeling.client.routes.health import health_bp

__all__ = [
    "benchmark_bp",
    "datamodeling_bp",
    "health_bp",
    "init_config",
    "get_config",
]
