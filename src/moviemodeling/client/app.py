"""Flask web application exposing the data modeling search API.

This module wires the query router to RavenDB and registers the search,
benchmark and health blueprints.
"""

import logging
import os

from dotenv import load_dotenv
from flask import Flask

from moviemodeling.client.routes import (
    benchmark_bp,
    datamodeling_bp,
    health_bp,
    init_config,
)
from moviemodeling.service.database import (
    RavenDBConfig,
    RavenDocumentStore,
    create_document_store,
)
from moviemodeling.service.modeling import BenchmarkAggregator, QueryRouter

# Configure logging
log_level = os.getenv("LOG_LEVEL", "DEBUG")
logging.basicConfig(
    level=getattr(logging, log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()
logger.debug("Environment variables loaded")

# Create Flask app
app = Flask(__name__)
app.json.sort_keys = False
logger.debug("Flask app created")

# Register blueprints
app.register_blueprint(datamodeling_bp)
app.register_blueprint(benchmark_bp)
app.register_blueprint(health_bp)


def initialize_services():
    """Connect to RavenDB and initialize the query router on startup."""
    logger.info("🔧 Initializing services...")

    url = RavenDBConfig.get_url()
    database = RavenDBConfig.get_database_name()
    logger.debug(f"RavenDB config: url={url}, database={database}")

    store = create_document_store(url, database)
    router = QueryRouter(RavenDocumentStore(store, page_size=RavenDBConfig.get_page_size()))
    logger.info(f"✅ Query router connected to '{database}' at {url}")

    init_config(router=router, benchmark=BenchmarkAggregator(), database_name=database)


def create_app():
    """Factory function for creating the Flask application.

    This function is used by WSGI servers like gunicorn to create the app.
    It initializes services before returning the app instance.

    Returns:
        Flask: The configured Flask application instance
    """
    initialize_services()
    return app


def main() -> None:
    """Entry point for the Flask application command-line interface."""
    print("🚀 Starting moviemodeling API...")

    print("📦 Connecting to RavenDB...")
    initialize_services()
    print("✅ Services initialized successfully")

    host = os.getenv("FLASK_HOST", "0.0.0.0")
    port = int(os.getenv("FLASK_PORT", "5000"))
    debug = os.getenv("FLASK_ENV", "development") == "development"

    print(f"🌐 Starting Flask server on http://{host}:{port}")
    print(f"🔧 Debug mode: {debug}")
    print("📝 Press CTRL+C to quit")

    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    main()
