"""Durable tier strategies for the hybrid storage client.

Each backend is bound to one blob path or one document, so the hybrid
client only ever calls read/write/delete without arguments describing
where the value lives.

- BlobDurableBackend: string payloads in an S3-compatible bucket
- DocumentDurableBackend: JSON documents in a MongoDB collection
"""

from typing import Any, Protocol, TypeVar

from persistent_state.core.clients.blob_store import BlobStore
from persistent_state.core.clients.document_store import (
    DocumentCollection,
    DocumentStore,
)
from persistent_state.core.constants import DOCUMENT_ID_FIELD, StorageTier
from persistent_state.core.exceptions import BlobNotFoundError
from persistent_state.storage.accessors import LazyHandle
from persistent_state.storage.codecs import Document


T = TypeVar("T")


class DurableBackend(Protocol[T]):
    """Durable storage for a single value."""

    tier: StorageTier

    @property
    def location(self) -> str:
        """Human-readable location used in log events."""
        ...

    def normalize(self, value: T) -> T:
        """Return value in the shape read() will later return it."""
        ...

    async def read(self) -> T | None:
        """Read the value, or None when it does not exist."""
        ...

    async def write(self, value: T) -> None:
        ...

    async def delete(self) -> None:
        ...


class BlobDurableBackend:
    """Durable string value stored as a single blob."""

    tier = StorageTier.BLOB

    def __init__(self, handle: LazyHandle[BlobStore], path: str) -> None:
        self._handle = handle
        self._path = path

    @property
    def location(self) -> str:
        return self._path

    def normalize(self, value: str) -> str:
        return value

    async def read(self) -> str | None:
        store = await self._handle.get()
        try:
            data = await store.read(self._path)
        except BlobNotFoundError:
            return None
        # Undecodable bytes (written by other tools) become U+FFFD
        return data.decode("utf-8", errors="replace")

    async def write(self, value: str) -> None:
        store = await self._handle.get()
        await store.write(self._path, value)

    async def delete(self) -> None:
        store = await self._handle.get()
        await store.delete(self._path)


class DocumentDurableBackend:
    """Durable JSON document identified by a fixed document id.

    The stored document is the caller's data plus an ``_id`` field. The id
    is added on write and projected out on read so the returned shape matches
    what was written.
    """

    tier = StorageTier.DOCUMENT

    def __init__(
        self,
        handle: LazyHandle[DocumentStore],
        collection: str,
        document_id: str,
    ) -> None:
        self._handle = handle
        self._collection_name = collection
        self._document_id = document_id

    @property
    def location(self) -> str:
        return f"{self._collection_name}/{self._document_id}"

    @property
    def _filter(self) -> dict[str, Any]:
        return {DOCUMENT_ID_FIELD: self._document_id}

    async def _collection(self) -> DocumentCollection:
        store = await self._handle.get()
        return store.collection(self._collection_name)

    def normalize(self, value: Document) -> Document:
        """Drop any caller ``_id``; the document id comes from configuration."""
        return {k: v for k, v in value.items() if k != DOCUMENT_ID_FIELD}

    async def read(self) -> Document | None:
        collection = await self._collection()
        document = await collection.find_one(
            self._filter,
            projection={DOCUMENT_ID_FIELD: 0},
        )
        if document is None:
            return None
        # Projection already drops the id; strip anyway for stores that ignore it
        document.pop(DOCUMENT_ID_FIELD, None)
        return document

    async def write(self, value: Document) -> None:
        collection = await self._collection()
        # Configured id wins over any "_id" present in the caller's data
        document = {**value, DOCUMENT_ID_FIELD: self._document_id}
        await collection.replace_one(self._filter, document, upsert=True)

    async def delete(self) -> None:
        collection = await self._collection()
        await collection.delete_one(self._filter)
