"""Fake store clients for storage unit testing.

In-memory fake implementations of the fast tier, blob store and document
store. They satisfy the same protocols as the real adapters (duck typing),
record every call, and support error injection per method.

Pattern: FakeClient for testing
"""

from __future__ import annotations

import asyncio
import copy
from typing import Any, Mapping

from persistent_state.core.exceptions import BlobNotFoundError


class _Recording:
    """Call history and error injection shared by the fakes."""

    def __init__(self, error_on: dict[str, Exception] | None = None) -> None:
        self.error_on: dict[str, Exception] = error_on or {}
        self.call_history: list[dict[str, Any]] = []

    def _check_error(self, method: str) -> None:
        """Raise the configured error for method, if any."""
        if method in self.error_on:
            raise self.error_on[method]

    def _record_call(self, method: str, args: dict[str, Any]) -> None:
        self.call_history.append({"method": method, "args": args})

    def calls(self, method: str) -> list[dict[str, Any]]:
        """Recorded argument dicts for one method."""
        return [call["args"] for call in self.call_history if call["method"] == method]

    def clear_history(self) -> None:
        """Clear call history for test isolation."""
        self.call_history = []


class FakeRedisClient(_Recording):
    """Fake fast tier (implements FastTierClient).

    Stores strings like a ``decode_responses=True`` Redis client. Expiry is
    recorded but never applied; use ``expire()`` to simulate a TTL lapse.
    """

    def __init__(self, error_on: dict[str, Exception] | None = None) -> None:
        super().__init__(error_on)
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}

    async def get(self, key: str) -> str | None:
        await asyncio.sleep(0)
        self._record_call("get", {"key": key})
        self._check_error("get")
        return self.store.get(key)

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        await asyncio.sleep(0)
        self._record_call("set", {"key": key, "value": value, "ex": ex})
        self._check_error("set")
        self.store[key] = value
        self.ttls[key] = ex
        return True

    async def delete(self, key: str) -> int:
        await asyncio.sleep(0)
        self._record_call("delete", {"key": key})
        self._check_error("delete")
        self.ttls.pop(key, None)
        return 1 if self.store.pop(key, None) is not None else 0

    def expire(self, key: str) -> None:
        """Simulate the TTL of an entry running out."""
        self.store.pop(key, None)
        self.ttls.pop(key, None)


class FakeBlobStore(_Recording):
    """Fake durable blob tier (implements BlobStore)."""

    def __init__(self, error_on: dict[str, Exception] | None = None) -> None:
        super().__init__(error_on)
        self.blobs: dict[str, bytes] = {}

    async def read(self, path: str) -> bytes:
        await asyncio.sleep(0)
        self._record_call("read", {"path": path})
        self._check_error("read")
        if path not in self.blobs:
            raise BlobNotFoundError(path, bucket="fake-bucket")
        return self.blobs[path]

    async def write(self, path: str, value: str) -> None:
        await asyncio.sleep(0)
        self._record_call("write", {"path": path, "value": value})
        self._check_error("write")
        self.blobs[path] = value.encode("utf-8")

    async def delete(self, path: str) -> None:
        await asyncio.sleep(0)
        self._record_call("delete", {"path": path})
        self._check_error("delete")
        self.blobs.pop(path, None)


class FakeCollection(_Recording):
    """Fake document collection keyed by ``_id``.

    Supports the exclusion projections the storage layer uses
    (``{"field": 0}``).
    """

    def __init__(self, name: str, error_on: dict[str, Exception] | None = None) -> None:
        super().__init__(error_on)
        self.name = name
        self.documents: dict[Any, dict[str, Any]] = {}

    async def replace_one(
        self,
        filter: Mapping[str, Any],
        replacement: Mapping[str, Any],
        upsert: bool = False,
    ) -> None:
        await asyncio.sleep(0)
        self._record_call(
            "replace_one",
            {"filter": dict(filter), "replacement": dict(replacement), "upsert": upsert},
        )
        self._check_error("replace_one")
        doc_id = filter["_id"]
        if doc_id in self.documents or upsert:
            self.documents[doc_id] = copy.deepcopy(dict(replacement))

    async def find_one(
        self,
        filter: Mapping[str, Any] | None = None,
        projection: Mapping[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        await asyncio.sleep(0)
        self._record_call("find_one", {"filter": dict(filter or {}), "projection": projection})
        self._check_error("find_one")
        document = self.documents.get((filter or {}).get("_id"))
        if document is None:
            return None
        result = copy.deepcopy(document)
        for field, include in (projection or {}).items():
            if not include:
                result.pop(field, None)
        return result

    async def delete_one(self, filter: Mapping[str, Any]) -> None:
        await asyncio.sleep(0)
        self._record_call("delete_one", {"filter": dict(filter)})
        self._check_error("delete_one")
        self.documents.pop(filter["_id"], None)


class FakeDocumentStore:
    """Fake durable document tier (implements DocumentStore)."""

    def __init__(self, error_on: dict[str, Exception] | None = None) -> None:
        self._error_on = error_on or {}
        self.collections: dict[str, FakeCollection] = {}
        self.closed = False

    def collection(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name, error_on=self._error_on)
        return self.collections[name]

    async def close(self) -> None:
        await asyncio.sleep(0)
        self.closed = True
