"""MongoDB document store for the durable tier.

Uses pymongo's native asyncio client. The storage clients only rely on
the DocumentStore / DocumentCollection protocols below.
"""

from typing import Any, Mapping, Protocol, runtime_checkable

from pymongo import AsyncMongoClient

from persistent_state.core.config import Settings, get_settings
from persistent_state.core.logging import get_logger


logger = get_logger(__name__)


@runtime_checkable
class DocumentCollection(Protocol):
    """Subset of pymongo's AsyncCollection used by the storage layer."""

    async def replace_one(
        self,
        filter: Mapping[str, Any],
        replacement: Mapping[str, Any],
        upsert: bool = False,
    ) -> Any:
        ...

    async def find_one(
        self,
        filter: Mapping[str, Any] | None = None,
        *args: Any,
        **kwargs: Any,
    ) -> dict[str, Any] | None:
        ...

    async def delete_one(self, filter: Mapping[str, Any]) -> Any:
        ...


@runtime_checkable
class DocumentStore(Protocol):
    """Protocol for the durable document tier."""

    def collection(self, name: str) -> DocumentCollection:
        """Return a handle to a named collection."""
        ...

    async def close(self) -> None:
        """Release connections."""
        ...


class MongoDocumentStore:
    """Document store bound to one MongoDB database."""

    def __init__(self, client: AsyncMongoClient, database: str) -> None:
        """Initialize document store.

        Args:
            client: Connected pymongo AsyncMongoClient
            database: Database name
        """
        self._client = client
        self.database = database

    def collection(self, name: str) -> DocumentCollection:
        return self._client[self.database][name]

    async def close(self) -> None:
        await self._client.close()
        logger.info("Document store closed", database=self.database)

    def __repr__(self) -> str:
        return f"MongoDocumentStore(database={self.database!r})"


async def create_document_store(settings: Settings | None = None) -> MongoDocumentStore:
    """Create and connect the durable document store.

    Args:
        settings: Application settings. Uses get_settings() if not provided.

    Returns:
        Connected MongoDocumentStore

    Raises:
        pymongo.errors.PyMongoError: If the server cannot be reached.
    """
    settings = settings or get_settings()
    client: AsyncMongoClient = AsyncMongoClient(
        settings.mongo_uri.get_secret_value(),
        serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
    )
    try:
        await client.aconnect()
    except Exception:
        await client.close()
        raise

    logger.info("Document store initialized", database=settings.mongo_database)
    return MongoDocumentStore(client, settings.mongo_database)
