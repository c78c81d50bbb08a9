"""Database storage client - fast tier (Redis) + durable document tier (MongoDB).

Each client manages ONE document identified by ``document_id``. Calling
``put()`` replaces the whole document. Data must be JSON-serializable;
the fast tier holds the compact JSON string, the collection holds the
document itself with an ``_id`` field.

Example:
    ```python
    prefs_client = create_database_storage_client(
        DatabaseStorageClientConfig(
            key="user-prefs",
            collection="preferences",
            document_id="user-prefs",
        ),
        backends,
    )

    await prefs_client.put({"theme": "dark", "notifications": True})
    prefs = await prefs_client.get()
    if prefs:
        print(prefs["theme"])  # dark
    ```
"""

from dataclasses import dataclass

from persistent_state.core.exceptions import StorageConfigError
from persistent_state.storage.accessors import StorageBackends, get_storage_backends
from persistent_state.storage.codecs import Document, JsonCodec
from persistent_state.storage.durable import DocumentDurableBackend
from persistent_state.storage.hybrid import HybridStorageClient, StorageClientConfig


@dataclass(frozen=True, kw_only=True)
class DatabaseStorageClientConfig(StorageClientConfig):
    """Configuration for a database storage client.

    Attributes:
        key: Key used to store data in the fast tier
        collection: Collection name in the document store
        document_id: Document id in the collection
        ttl: Fast tier TTL in seconds. Default: 31536000 (1 year)
    """

    collection: str
    document_id: str

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.collection:
            raise StorageConfigError(
                "collection cannot be empty", field="collection", key=self.key
            )
        if not self.document_id:
            raise StorageConfigError(
                "document_id cannot be empty", field="document_id", key=self.key
            )


DatabaseStorageClient = HybridStorageClient[Document]


def create_database_storage_client(
    config: DatabaseStorageClientConfig,
    backends: StorageBackends | None = None,
) -> DatabaseStorageClient:
    """Create a hybrid client managing a single document.

    Args:
        config: Client configuration
        backends: Shared store handles. Uses get_storage_backends() if not provided.

    Returns:
        Client with put/get/exists/delete

    Raises:
        KeyTooLongError: If the encoded key exceeds 1024 characters
        StorageConfigError: If the backends have no document tier
    """
    backends = backends or get_storage_backends()
    if backends.documents is None:
        raise StorageConfigError(
            "Database storage clients need a document tier",
            field="documents",
            key=config.key,
        )

    return HybridStorageClient(
        config,
        fast=backends.fast,
        durable=DocumentDurableBackend(
            backends.documents,
            collection=config.collection,
            document_id=config.document_id,
        ),
        codec=JsonCodec(),
    )
