"""Database configuration and connection management for RavenDB.

This package provides a unified interface for RavenDB operations:
- Configuration management (RavenDBConfig, MediaApiConfig)
- Document store creation, readiness checks and database lifecycle
- The document store gateway used by seeding and querying
- Persisted document shapes for the four data models

Usage:
    from moviemodeling.service.database import (
        RavenDocumentStore,
        create_document_store,
        wait_for_store,
    )
"""

# Re-export public API
from moviemodeling.service.database.config import MediaApiConfig, RavenDBConfig
from moviemodeling.service.database.operations import (
    count_documents,
    create_database,
    create_document_store,
    database_exists,
    delete_database,
    server_available,
    wait_for_store,
)
from moviemodeling.service.database.store import (
    DocumentStoreGateway,
    Page,
    PointReadResult,
    RavenDocumentStore,
)

__all__ = [
    # Config
    "RavenDBConfig",
    "MediaApiConfig",
    # Operations
    "create_document_store",
    "server_available",
    "wait_for_store",
    "database_exists",
    "create_database",
    "delete_database",
    "count_documents",
    # Store
    "DocumentStoreGateway",
    "Page",
    "PointReadResult",
    "RavenDocumentStore",
]
