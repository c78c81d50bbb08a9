"""Adapters for the underlying stores."""

from persistent_state.core.clients.blob_store import (
    BlobStore,
    S3BlobStore,
    create_blob_store,
    is_not_found_error,
)
from persistent_state.core.clients.document_store import (
    DocumentCollection,
    DocumentStore,
    MongoDocumentStore,
    create_document_store,
)
from persistent_state.core.clients.fast_tier import (
    FastTierClient,
    close_fast_tier_client,
    create_fast_tier_client,
)


__all__ = [
    "BlobStore",
    "DocumentCollection",
    "DocumentStore",
    "FastTierClient",
    "MongoDocumentStore",
    "S3BlobStore",
    "close_fast_tier_client",
    "create_blob_store",
    "create_document_store",
    "create_fast_tier_client",
    "is_not_found_error",
]
