"""Health check API routes."""

import logging

from flask import Blueprint, jsonify

from moviemodeling.client.routes.config import get_config
from moviemodeling.service.database import server_available

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)


@health_bp.route("/healthz", methods=["GET"])
def healthz():
    """Liveness probe."""
    return jsonify({"status": "healthy"})


@health_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint.

    Returns:
        JSON with service status and RavenDB reachability
    """
    config = get_config()
    store_up = server_available()
    if not store_up:
        logger.warning("⚠️ RavenDB is not reachable")
    return jsonify(
        {
            "status": "healthy" if store_up else "degraded",
            "router": "initialized" if config.router else "not initialized",
            "database": config.database_name,
            "ravendb": "reachable" if store_up else "unreachable",
        }
    )
