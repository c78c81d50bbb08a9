"""persistent-state - two-tier hybrid key-value storage.

A fast, TTL-bound Redis tier in front of a durable tier (S3-compatible
blobs or MongoDB documents), with size-limit handling and self-healing
reads.

Example:
    ```python
    from persistent_state import (
        FileStorageClientConfig,
        StorageBackends,
        create_file_storage_client,
    )
    from persistent_state.core import configure_logging

    configure_logging()  # once, at process start-up
    backends = StorageBackends.from_settings()

    client = create_file_storage_client(
        FileStorageClientConfig(key="app-config"), backends
    )
    await client.put('{"theme":"dark"}')
    raw = await client.get()

    await backends.close()  # at shutdown
    ```
"""

from persistent_state.core.exceptions import (
    BlobNotFoundError,
    KeyTooLongError,
    StorageConfigError,
    StorageError,
)
from persistent_state.storage import (
    DatabaseStorageClient,
    DatabaseStorageClientConfig,
    FileStorageClient,
    FileStorageClientConfig,
    HybridStorageClient,
    LazyHandle,
    StorageBackends,
    create_database_storage_client,
    create_file_storage_client,
    get_storage_backends,
    get_value,
    put_value,
    set_storage_backends,
)


__version__ = "0.1.0"

__all__ = [
    "BlobNotFoundError",
    "DatabaseStorageClient",
    "DatabaseStorageClientConfig",
    "FileStorageClient",
    "FileStorageClientConfig",
    "HybridStorageClient",
    "KeyTooLongError",
    "LazyHandle",
    "StorageBackends",
    "StorageConfigError",
    "StorageError",
    "__version__",
    "create_database_storage_client",
    "create_file_storage_client",
    "get_storage_backends",
    "get_value",
    "put_value",
    "set_storage_backends",
]
