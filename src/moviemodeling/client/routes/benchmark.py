"""Benchmark statistics API routes."""

import logging

from flask import Blueprint, jsonify

from moviemodeling.client.routes.config import get_config

logger = logging.getLogger(__name__)

benchmark_bp = Blueprint("benchmark", __name__, url_prefix="/api/benchmark")


@benchmark_bp.route("", methods=["GET"])
def get_benchmark():
    """Return query counts, total cost and the per-model cost table."""
    return jsonify(get_config().benchmark.snapshot().to_dict())


@benchmark_bp.route("", methods=["DELETE"])
def clear_benchmark():
    logger.info("🧹 Clearing benchmark statistics")
    benchmark = get_config().benchmark
    benchmark.clear()
    return jsonify(benchmark.snapshot().to_dict())


@benchmark_bp.route("/models", methods=["DELETE"])
def clear_model_costs():
    logger.info("🧹 Clearing per-model costs")
    benchmark = get_config().benchmark
    benchmark.clear_model_costs()
    return jsonify(benchmark.snapshot().to_dict())
