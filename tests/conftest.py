"""Test configuration and shared fixtures.

Pattern: Pytest fixtures, conftest.py
"""

import pytest

from persistent_state.core.config import Settings
from persistent_state.storage.accessors import StorageBackends, set_storage_backends
from tests.fakes.fake_clients import FakeBlobStore, FakeDocumentStore, FakeRedisClient


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with safe defaults."""
    return Settings(
        redis_url="redis://localhost:6380/1",
        s3_bucket="test-bucket",
        s3_endpoint_url="http://localhost:9000",
        s3_region="us-east-1",
        mongo_database="persistent_state_test",
        log_level="DEBUG",
    )


# ============================================================================
# Fake Store Fixtures
# ============================================================================

@pytest.fixture
def fake_redis() -> FakeRedisClient:
    """Create an empty fake fast tier."""
    return FakeRedisClient()


@pytest.fixture
def fake_blob_store() -> FakeBlobStore:
    """Create an empty fake blob store."""
    return FakeBlobStore()


@pytest.fixture
def fake_document_store() -> FakeDocumentStore:
    """Create an empty fake document store."""
    return FakeDocumentStore()


@pytest.fixture
def backends(
    fake_redis: FakeRedisClient,
    fake_blob_store: FakeBlobStore,
    fake_document_store: FakeDocumentStore,
) -> StorageBackends:
    """StorageBackends wired to the fakes."""
    return StorageBackends.from_clients(
        fast=fake_redis,
        blob=fake_blob_store,
        documents=fake_document_store,
    )


@pytest.fixture(autouse=True)
def reset_shared_backends():
    """Make sure no test leaks a process-wide StorageBackends."""
    yield
    set_storage_backends(None)
