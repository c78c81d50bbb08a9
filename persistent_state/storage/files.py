"""File storage client - fast tier (Redis) + durable blob tier (S3).

Each client manages ONE key. Calling ``put()`` overwrites any existing
value; for several values create several clients with different keys. All
clients share the same underlying store handles.

Example:
    ```python
    backends = StorageBackends.from_settings()
    config_client = create_file_storage_client(
        FileStorageClientConfig(key="app-config"), backends
    )

    await config_client.put(json.dumps({"theme": "dark"}))
    raw = await config_client.get()
    if await config_client.exists():
        await config_client.delete()
    ```
"""

from dataclasses import dataclass

from persistent_state.core.config import get_settings
from persistent_state.core.exceptions import StorageConfigError
from persistent_state.storage.accessors import StorageBackends, get_storage_backends
from persistent_state.storage.codecs import StringCodec
from persistent_state.storage.durable import BlobDurableBackend
from persistent_state.storage.hybrid import HybridStorageClient, StorageClientConfig
from persistent_state.storage.keys import blob_path


@dataclass(frozen=True, kw_only=True)
class FileStorageClientConfig(StorageClientConfig):
    """Configuration for a file storage client.

    Attributes:
        key: Key identifying the value in the fast tier and the blob path
        ttl: Fast tier TTL in seconds. Default: 31536000 (1 year)
    """


FileStorageClient = HybridStorageClient[str]


def create_file_storage_client(
    config: FileStorageClientConfig,
    backends: StorageBackends | None = None,
) -> FileStorageClient:
    """Create a hybrid client storing a string in Redis and a blob.

    Args:
        config: Client configuration
        backends: Shared store handles. Uses get_storage_backends() if not provided.

    Returns:
        Client with put/get/exists/delete

    Raises:
        KeyTooLongError: If the encoded key exceeds 1024 characters
        StorageConfigError: If the backends have no blob tier
    """
    backends = backends or get_storage_backends()
    if backends.blob is None:
        raise StorageConfigError(
            "File storage clients need a blob tier",
            field="blob",
            key=config.key,
        )

    return HybridStorageClient(
        config,
        fast=backends.fast,
        durable=BlobDurableBackend(backends.blob, blob_path(config.key)),
        codec=StringCodec(),
    )


async def put_value(
    key: str,
    value: str,
    backends: StorageBackends | None = None,
) -> str:
    """Store a value under a key in one call.

    Args:
        key: Raw storage key
        value: String to store
        backends: Shared store handles

    Returns:
        The encoded fast tier key
    """
    client = create_file_storage_client(
        FileStorageClientConfig(key=key, ttl=get_settings().default_ttl_seconds),
        backends,
    )
    await client.put(value)
    return client.encoded_key


async def get_value(key: str, backends: StorageBackends | None = None) -> str | None:
    """Retrieve the value stored under a key in one call."""
    client = create_file_storage_client(
        FileStorageClientConfig(key=key, ttl=get_settings().default_ttl_seconds),
        backends,
    )
    return await client.get()
