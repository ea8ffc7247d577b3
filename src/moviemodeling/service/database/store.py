"""Document store gateway used by the seeding and query paths.

``DocumentStoreGateway`` is the narrow contract the core depends on:
create-if-absent, upsert, point read and paged query, each reporting a cost.
``RavenDocumentStore`` implements it over a RavenDB ``DocumentStore``.

RavenDB has no partition keys and no request charge, so the adapter maps the
contract as follows:

- Documents are keyed ``<collection>/<id>`` and tagged with ``@collection``.
- A point read only succeeds when the stored ``title`` equals the partition key.
- Cost is the number of server round trips made by the operation.
"""

import logging
import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol

from ravendb import DocumentStore
from ravendb.documents.indexes.definitions import IndexDefinition
from ravendb.documents.operations.indexes import GetIndexNamesOperation, PutIndexesOperation

from moviemodeling.constants import DEFAULT_QUERY_PAGE_SIZE
from moviemodeling.service.errors import MalformedResponseError, StoreUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointReadResult:
    """Outcome of a get-by-key; ``document`` is None when nothing matched."""

    document: dict[str, Any] | None
    cost: float
    operation_id: str


@dataclass(frozen=True)
class Page:
    """One page of a filtered query."""

    documents: list[dict[str, Any]] = field(default_factory=list)
    cost: float = 0.0
    operation_id: str = ""


class DocumentStoreGateway(Protocol):
    """Protocol for the key/partition-addressed document store."""

    def create_collection_if_absent(self, name: str, partition_key_path: str) -> bool:
        """Prepare a collection; returns True if anything was created."""
        ...

    def upsert(self, collection: str, document: Any, partition_key: str) -> float:
        """Insert or overwrite ``document`` by id and return the cost."""
        ...

    def get_by_key(self, collection: str, doc_id: str, partition_key: str) -> PointReadResult:
        """Read a single document by id and partition key."""
        ...

    def query_paged(
        self, collection: str, query_text: str, parameters: dict[str, Any]
    ) -> Iterator[Page]:
        """Run a parameterized query, yielding results one page at a time."""
        ...


def document_key(collection: str, doc_id: str) -> str:
    """Build the RavenDB key for a document id within a collection."""
    return f"{collection}/{doc_id}"


def _strip_metadata(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(raw).__name__}")
    return {key: value for key, value in raw.items() if key != "@metadata"}


class RavenDocumentStore:
    """DocumentStoreGateway backed by an initialized RavenDB DocumentStore."""

    def __init__(self, store: DocumentStore, page_size: int = DEFAULT_QUERY_PAGE_SIZE):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.store = store
        self.page_size = page_size

    def create_collection_if_absent(self, name: str, partition_key_path: str) -> bool:
        """Install a static ``<name>/ByTitle`` index over the partition key path.

        RavenDB creates collections implicitly on first write; the index is what
        makes lookups on the partition key cheap from the first query on.

        Args:
            name: Collection name (one of the data model names)
            partition_key_path: Path such as "/title"

        Returns:
            bool: True if the index was created, False if it already existed
        """
        index_name = f"{name}/ByTitle"
        key_field = partition_key_path.strip("/")

        try:
            existing_indexes = self.store.maintenance.send(GetIndexNamesOperation(0, 1024))
            if index_name in existing_indexes:
                return False

            index_definition = IndexDefinition()
            index_definition.name = index_name
            index_definition.maps = {
                f"from doc in docs.{name} select new {{ {key_field} = doc.{key_field} }}"
            }
            self.store.maintenance.send(PutIndexesOperation(index_definition))
        except Exception as e:
            raise StoreUnavailableError(f"Could not prepare collection '{name}': {e}") from e

        logger.info(f"Created index '{index_name}'")
        return True

    def upsert(self, collection: str, document: Any, partition_key: str) -> float:
        """Store ``document`` under ``<collection>/<document.id>``.

        Raises:
            ValueError: If the document's title does not match the partition key
            StoreUnavailableError: If the write fails
        """
        if document.title != partition_key:
            raise ValueError(
                f"Partition key '{partition_key}' does not match title '{document.title}'"
            )

        key = document_key(collection, document.id)
        try:
            with self.store.open_session() as session:
                session.store(document, key)
                metadata = session.advanced.get_metadata_for(document)
                metadata["@collection"] = collection
                session.save_changes()
                return float(session.advanced.number_of_requests)
        except Exception as e:
            raise StoreUnavailableError(f"Upsert of '{key}' failed: {e}") from e

    def get_by_key(self, collection: str, doc_id: str, partition_key: str) -> PointReadResult:
        operation_id = str(uuid.uuid4())
        key = document_key(collection, doc_id)

        try:
            with self.store.open_session() as session:
                raw = session.load(key, dict)
                cost = float(session.advanced.number_of_requests)
        except Exception as e:
            raise StoreUnavailableError(f"Point read of '{key}' failed: {e}") from e

        if raw is None:
            return PointReadResult(None, cost, operation_id)

        document = _strip_metadata(raw)
        if document.get("title") != partition_key:
            logger.debug(f"'{key}' exists but not in partition '{partition_key}'")
            return PointReadResult(None, cost, operation_id)
        return PointReadResult(document, cost, operation_id)

    def query_paged(
        self, collection: str, query_text: str, parameters: dict[str, Any]
    ) -> Iterator[Page]:
        """Yield pages of ``page_size`` documents until the result set is exhausted.

        Each page is a separate session so the round trip is counted per page.
        Parameters are bound with ``add_parameter`` and never spliced into the
        query text.
        """
        start = 0
        while True:
            operation_id = str(uuid.uuid4())
            try:
                with self.store.open_session() as session:
                    query = session.advanced.raw_query(query_text, object_type=dict)
                    for name, value in parameters.items():
                        query = query.add_parameter(name, value)
                    raw_results = list(query.skip(start).take(self.page_size))
                    cost = float(session.advanced.number_of_requests)
            except Exception as e:
                raise StoreUnavailableError(f"Query on '{collection}' failed: {e}") from e

            documents = [_strip_metadata(raw) for raw in raw_results]
            logger.debug(f"Page at {start} on '{collection}': {len(documents)} documents")
            yield Page(documents, cost, operation_id)

            if len(raw_results) < self.page_size:
                return
            start += self.page_size
