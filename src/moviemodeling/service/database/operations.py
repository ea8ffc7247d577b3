"""Database operations for RavenDB - lifecycle, readiness and counts.

Every function takes an optional server ``url`` and ``database`` name; a
missing value falls back to RavenDBConfig.
"""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager

import requests
from ravendb import DocumentStore
from ravendb.serverwide.operations.common import DeleteDatabaseOperation

from moviemodeling.service.database.config import RavenDBConfig

logger = logging.getLogger(__name__)


def _resolve_target(url: str | None, database: str | None) -> tuple[str, str]:
    return url or RavenDBConfig.get_url(), database or RavenDBConfig.get_database_name()


def create_document_store(url: str | None = None, database: str | None = None) -> DocumentStore:
    """Create and initialize a DocumentStore for the data modeling database.

    The caller owns the returned store and must close it.
    """
    url, database = _resolve_target(url, database)
    store = DocumentStore([url], database)
    store.initialize()
    return store


@contextmanager
def _open_store(url: str | None, database: str | None) -> Iterator[DocumentStore]:
    """Short-lived DocumentStore that is closed on exit, even on error."""
    url, database = _resolve_target(url, database)
    store = DocumentStore([url], database)
    try:
        store.initialize()
        yield store
    finally:
        store.close()


def server_available(url: str | None = None, timeout: float = 2.0) -> bool:
    """Check whether the RavenDB server answers HTTP requests.

    A 401 means the server is up but wants a certificate, which still counts.
    """
    url = url or RavenDBConfig.get_url()
    try:
        response = requests.get(f"{url}/databases", timeout=timeout)
    except requests.RequestException:
        return False
    return response.status_code in (200, 401)


def wait_for_store(
    url: str | None = None,
    attempts: int | None = None,
    delay: float | None = None,
) -> bool:
    """Poll the RavenDB server until it is reachable.

    The server (especially in a fresh container) can take a while to come up,
    so seeding waits for it before touching the database.

    Args:
        url: RavenDB server URL (defaults to value from RavenDBConfig.get_url())
        attempts: Maximum number of checks (default: STORE_WAIT_ATTEMPTS)
        delay: Seconds to sleep between checks (default: STORE_WAIT_DELAY)

    Returns:
        bool: True once the server is reachable, False if every attempt failed
    """
    if attempts is None:
        attempts = RavenDBConfig.get_wait_attempts()
    if delay is None:
        delay = RavenDBConfig.get_wait_delay()

    for attempt in range(1, attempts + 1):
        if server_available(url):
            return True
        if attempt < attempts:
            logger.info(f"Waiting for RavenDB to be ready... (attempt {attempt}/{attempts})")
            time.sleep(delay)
    return False


def database_exists(url: str | None = None, database: str | None = None) -> bool:
    """Return True if the database answers an empty query, False on any failure."""
    try:
        with _open_store(url, database) as store, store.open_session() as session:
            list(session.advanced.raw_query("from @all_docs", object_type=dict).take(0))
    except Exception as e:
        logger.debug(f"Database check failed: {e}")
        return False
    return True


def create_database(url: str | None = None, database: str | None = None) -> None:
    """Create the database through the RavenDB admin REST endpoint.

    Raises:
        requests.HTTPError: If the server rejects the request
    """
    url, database = _resolve_target(url, database)
    logger.info(f"Creating database '{database}' at {url}")
    response = requests.put(
        f"{url}/admin/databases",
        json={"DatabaseName": database, "Settings": {}, "Disabled": False},
    )
    response.raise_for_status()


def delete_database(url: str | None = None, database: str | None = None) -> None:
    """Hard-delete the database and every data model in it. Irreversible."""
    _, database = _resolve_target(url, database)
    with _open_store(url, database) as store:
        store.maintenance.server.send(
            DeleteDatabaseOperation(database_name=database, hard_delete=True)
        )
    logger.info(f"Deleted database '{database}'")


def count_documents(
    collection: str | None = None, url: str | None = None, database: str | None = None
) -> int:
    """Count documents in one data model collection, or in the whole database.

    Args:
        collection: Collection name (None counts every document)
        url: RavenDB server URL
        database: Database name

    Returns:
        int: Number of matching documents
    """
    rql_query = f"from '{collection}'" if collection else "from @all_docs"
    with _open_store(url, database) as store, store.open_session() as session:
        return len(list(session.advanced.raw_query(rql_query, object_type=dict)))
