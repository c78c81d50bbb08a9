"""Unit tests for persistent_state/storage/durable module."""

import pytest

from persistent_state.core.constants import StorageTier
from persistent_state.storage.accessors import LazyHandle
from persistent_state.storage.durable import BlobDurableBackend, DocumentDurableBackend
from tests.fakes.fake_clients import FakeBlobStore, FakeDocumentStore


class TestBlobDurableBackend:
    """Tests for BlobDurableBackend."""

    @pytest.fixture
    def blob_store(self) -> FakeBlobStore:
        return FakeBlobStore()

    @pytest.fixture
    def backend(self, blob_store: FakeBlobStore) -> BlobDurableBackend:
        return BlobDurableBackend(LazyHandle.of(blob_store, name="blob"), "testKey.json")

    def test_reports_tier_and_location(self, backend: BlobDurableBackend) -> None:
        assert backend.tier is StorageTier.BLOB
        assert backend.location == "testKey.json"

    @pytest.mark.asyncio
    async def test_write_then_read(
        self, backend: BlobDurableBackend, blob_store: FakeBlobStore
    ) -> None:
        await backend.write("testValue")

        assert blob_store.calls("write") == [{"path": "testKey.json", "value": "testValue"}]
        assert await backend.read() == "testValue"

    @pytest.mark.asyncio
    async def test_read_missing_blob_returns_none(self, backend: BlobDurableBackend) -> None:
        assert await backend.read() is None

    @pytest.mark.asyncio
    async def test_read_decodes_utf8(
        self, backend: BlobDurableBackend, blob_store: FakeBlobStore
    ) -> None:
        blob_store.blobs["testKey.json"] = "café ✓".encode("utf-8")

        assert await backend.read() == "café ✓"

    @pytest.mark.asyncio
    async def test_read_replaces_undecodable_bytes(
        self, backend: BlobDurableBackend, blob_store: FakeBlobStore
    ) -> None:
        blob_store.blobs["testKey.json"] = b"\xff\xfeok"

        assert await backend.read() == "\ufffd\ufffdok"

    def test_normalize_keeps_value(self, backend: BlobDurableBackend) -> None:
        assert backend.normalize("testValue") == "testValue"

    @pytest.mark.asyncio
    async def test_read_propagates_other_errors(self) -> None:
        store = FakeBlobStore(error_on={"read": PermissionError("denied")})
        backend = BlobDurableBackend(LazyHandle.of(store, name="blob"), "k.json")

        with pytest.raises(PermissionError, match="denied"):
            await backend.read()

    @pytest.mark.asyncio
    async def test_delete_missing_blob_is_noop(
        self, backend: BlobDurableBackend, blob_store: FakeBlobStore
    ) -> None:
        await backend.delete()

        assert blob_store.calls("delete") == [{"path": "testKey.json"}]


class TestDocumentDurableBackend:
    """Tests for DocumentDurableBackend."""

    @pytest.fixture
    def document_store(self) -> FakeDocumentStore:
        return FakeDocumentStore()

    @pytest.fixture
    def backend(self, document_store: FakeDocumentStore) -> DocumentDurableBackend:
        return DocumentDurableBackend(
            LazyHandle.of(document_store, name="documents"),
            collection="preferences",
            document_id="123",
        )

    def test_reports_tier_and_location(self, backend: DocumentDurableBackend) -> None:
        assert backend.tier is StorageTier.DOCUMENT
        assert backend.location == "preferences/123"

    @pytest.mark.asyncio
    async def test_write_upserts_document_with_id(
        self, backend: DocumentDurableBackend, document_store: FakeDocumentStore
    ) -> None:
        await backend.write({"value": "testValue"})

        assert document_store.collection("preferences").calls("replace_one") == [
            {
                "filter": {"_id": "123"},
                "replacement": {"_id": "123", "value": "testValue"},
                "upsert": True,
            }
        ]

    @pytest.mark.asyncio
    async def test_read_excludes_id(
        self, backend: DocumentDurableBackend, document_store: FakeDocumentStore
    ) -> None:
        await backend.write({"theme": "dark", "notifications": True})

        assert await backend.read() == {"theme": "dark", "notifications": True}
        assert document_store.collection("preferences").calls("find_one") == [
            {"filter": {"_id": "123"}, "projection": {"_id": 0}}
        ]

    @pytest.mark.asyncio
    async def test_read_missing_document_returns_none(
        self, backend: DocumentDurableBackend
    ) -> None:
        assert await backend.read() is None

    def test_normalize_drops_caller_id(self, backend: DocumentDurableBackend) -> None:
        data = {"_id": "caller", "a": 1}

        assert backend.normalize(data) == {"a": 1}
        assert data == {"_id": "caller", "a": 1}

    @pytest.mark.asyncio
    async def test_configured_id_overrides_caller_id(
        self, backend: DocumentDurableBackend, document_store: FakeDocumentStore
    ) -> None:
        await backend.write({"_id": "other", "value": 1})

        collection = document_store.collection("preferences")
        assert list(collection.documents) == ["123"]
        assert collection.documents["123"] == {"_id": "123", "value": 1}

    @pytest.mark.asyncio
    async def test_delete_removes_document(
        self, backend: DocumentDurableBackend, document_store: FakeDocumentStore
    ) -> None:
        await backend.write({"value": 1})

        await backend.delete()
        await backend.delete()

        assert await backend.read() is None
        assert document_store.collection("preferences").calls("delete_one") == [
            {"filter": {"_id": "123"}},
            {"filter": {"_id": "123"}},
        ]
