"""Hybrid Storage Package.

Two-tier key-value storage combining a TTL-bound fast tier with a durable
tier:
- files:    Redis + S3-compatible blobs (string payloads)
- database: Redis + MongoDB documents (JSON payloads)

Both clients are HybridStorageClient instances parameterized by a codec
and a durable backend.
"""

from persistent_state.storage.accessors import (
    LazyHandle,
    StorageBackends,
    get_storage_backends,
    set_storage_backends,
)
from persistent_state.storage.codecs import (
    Codec,
    Document,
    JsonCodec,
    StringCodec,
    byte_size,
)
from persistent_state.storage.database import (
    DatabaseStorageClient,
    DatabaseStorageClientConfig,
    create_database_storage_client,
)
from persistent_state.storage.durable import (
    BlobDurableBackend,
    DocumentDurableBackend,
    DurableBackend,
)
from persistent_state.storage.files import (
    FileStorageClient,
    FileStorageClientConfig,
    create_file_storage_client,
    get_value,
    put_value,
)
from persistent_state.storage.hybrid import HybridStorageClient, StorageClientConfig
from persistent_state.storage.keys import blob_path, decode_key, encode_key


__all__ = [
    "BlobDurableBackend",
    "Codec",
    # Database client (Redis + MongoDB)
    "DatabaseStorageClient",
    "DatabaseStorageClientConfig",
    "Document",
    "DocumentDurableBackend",
    "DurableBackend",
    # File client (Redis + S3)
    "FileStorageClient",
    "FileStorageClientConfig",
    "HybridStorageClient",
    "JsonCodec",
    # Store handles
    "LazyHandle",
    "StorageBackends",
    "StorageClientConfig",
    "StringCodec",
    # Keys
    "blob_path",
    "byte_size",
    "create_database_storage_client",
    "create_file_storage_client",
    "decode_key",
    "encode_key",
    "get_storage_backends",
    "get_value",
    "put_value",
    "set_storage_backends",
]
