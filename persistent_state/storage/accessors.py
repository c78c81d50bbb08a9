"""Lazily-initialized store handles shared by all storage clients.

A StorageBackends container is created once at process start-up and passed
into the client factories. Each LazyHandle initializes its store on first
use; concurrent first callers await the same in-flight initialization, and
a failed initialization is forgotten so the next call retries.

Example:
    >>> backends = StorageBackends.from_settings(get_settings())
    >>> prefs = create_database_storage_client(config, backends)
    >>> ...
    >>> await backends.close()  # at shutdown
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar

from persistent_state.core.clients.blob_store import BlobStore, create_blob_store
from persistent_state.core.clients.document_store import (
    DocumentStore,
    create_document_store,
)
from persistent_state.core.clients.fast_tier import (
    FastTierClient,
    close_fast_tier_client,
    create_fast_tier_client,
)
from persistent_state.core.config import Settings, get_settings
from persistent_state.core.logging import get_logger


logger = get_logger(__name__)

H = TypeVar("H")


class LazyHandle(Generic[H]):
    """Single-assignment async handle with retry on failed initialization.

    Attributes:
        name: Label used in log events
    """

    def __init__(
        self,
        factory: Callable[[], Awaitable[H]],
        name: str,
        closer: Callable[[H], Awaitable[None]] | None = None,
    ) -> None:
        """Initialize lazy handle.

        Args:
            factory: Coroutine function creating the store handle
            name: Label used in log events
            closer: Optional coroutine function releasing the handle
        """
        self._factory = factory
        self._closer = closer
        self.name = name
        self._task: asyncio.Task[H] | None = None

    @classmethod
    def of(
        cls,
        instance: H,
        name: str,
        closer: Callable[[H], Awaitable[None]] | None = None,
    ) -> "LazyHandle[H]":
        """Wrap an already-built handle (dependency injection, tests)."""

        async def _existing() -> H:
            return instance

        return cls(_existing, name, closer)

    @property
    def is_initialized(self) -> bool:
        """Check if the handle finished initializing successfully."""
        task = self._task
        return (
            task is not None
            and task.done()
            and not task.cancelled()
            and task.exception() is None
        )

    async def get(self) -> H:
        """Return the store handle, initializing it on first use.

        Returns:
            The initialized handle

        Raises:
            Exception: Whatever the factory raised; the next call retries.
        """
        if self._task is None:
            self._task = asyncio.ensure_future(self._initialize())
        # shield: a cancelled caller must not cancel everyone else's init
        return await asyncio.shield(self._task)

    async def _initialize(self) -> H:
        try:
            handle = await self._factory()
        except Exception as e:
            # Only forget our own task; close() may already have replaced it
            if self._task is asyncio.current_task():
                self._task = None
            logger.error("Store initialization failed", store=self.name, error=str(e))
            raise
        logger.info("Store initialized", store=self.name)
        return handle

    async def close(self) -> None:
        """Release the handle, then reset.

        An initialization still in flight is awaited first so the handle it
        produces is released rather than leaked.
        """
        task, self._task = self._task, None
        if task is None:
            return
        if not task.done():
            await asyncio.wait([task])
        if task.cancelled() or task.exception() is not None:
            return
        if self._closer is not None:
            await self._closer(task.result())
        logger.info("Store closed", store=self.name)

    def __repr__(self) -> str:
        state = "initialized" if self.is_initialized else "pending"
        return f"LazyHandle(name={self.name!r}, state={state})"


@dataclass
class StorageBackends:
    """Process-wide store handles injected into storage client factories.

    Attributes:
        fast: Fast tier (Redis) handle
        blob: Durable blob tier handle, required by file storage clients
        documents: Durable document tier handle, required by database clients
    """

    fast: LazyHandle[FastTierClient]
    blob: LazyHandle[BlobStore] | None = None
    documents: LazyHandle[DocumentStore] | None = None

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "StorageBackends":
        """Build lazy handles for Redis, S3 and MongoDB from settings.

        Nothing is connected until a client first needs the store.
        """
        settings = settings or get_settings()

        async def _document_closer(store: DocumentStore) -> None:
            await store.close()

        return cls(
            fast=LazyHandle(
                lambda: create_fast_tier_client(settings),
                name="fast",
                closer=close_fast_tier_client,
            ),
            blob=LazyHandle(lambda: create_blob_store(settings), name="blob"),
            documents=LazyHandle(
                lambda: create_document_store(settings),
                name="documents",
                closer=_document_closer,
            ),
        )

    @classmethod
    def from_clients(
        cls,
        fast: FastTierClient,
        blob: BlobStore | None = None,
        documents: DocumentStore | None = None,
    ) -> "StorageBackends":
        """Wrap already-constructed store clients."""
        return cls(
            fast=LazyHandle.of(fast, name="fast"),
            blob=LazyHandle.of(blob, name="blob") if blob is not None else None,
            documents=(
                LazyHandle.of(documents, name="documents")
                if documents is not None
                else None
            ),
        )

    async def close(self) -> None:
        """Close every initialized handle (call at process shutdown)."""
        for handle in (self.fast, self.blob, self.documents):
            if handle is not None:
                await handle.close()


# Module-level backends instance (lazy initialization)
_backends: StorageBackends | None = None


def get_storage_backends() -> StorageBackends:
    """Get the shared StorageBackends, building it from settings if unset."""
    global _backends
    if _backends is None:
        _backends = StorageBackends.from_settings()
    return _backends


def set_storage_backends(backends: StorageBackends | None) -> None:
    """Set the shared StorageBackends.

    Args:
        backends: StorageBackends instance or None to reset
    """
    global _backends
    _backends = backends
