"""
Global test fixtures for docker-mongo.

This module provides shared fixtures for all tests including:
- In-memory MongoDB (mongomock-motor)
- A fake Motor client class that counts connects/closes
- A fully mocked database for call-order and failure tests
"""

import sys
from pathlib import Path
from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

TEST_URI = "mongodb://test:27017"
TEST_DB = "test_db"


# =============================================================================
# Settings
# =============================================================================

@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Drop cached settings so env changes in one test do not leak."""
    from docker_mongo.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.

    Acts as the shared server behind every FakeMotorClient in a test.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


class FakeMotorClient:
    """
    Stand-in for AsyncIOMotorClient.

    Databases come from the driver's shared in-memory backend, so data
    written through one client is visible to the next.
    """

    def __init__(self, driver: "FakeDriver", uri: str):
        self.driver = driver
        self.uri = uri
        self.close_calls = 0
        self.admin = MagicMock()
        self.admin.command = AsyncMock(
            return_value={"ok": 1.0},
            side_effect=driver.ping_error,
        )

    def __getitem__(self, name: str):
        return self.driver.backend[name]

    def close(self):
        self.close_calls += 1
        if self.driver.close_error is not None:
            raise self.driver.close_error


class FakeDriver:
    """Factory patched over AsyncIOMotorClient; records every client it builds."""

    def __init__(self, backend: Any):
        self.backend = backend
        self.clients: list[FakeMotorClient] = []
        self.ping_error: Optional[BaseException] = None
        self.close_error: Optional[BaseException] = None

    def __call__(self, uri: str, **kwargs) -> FakeMotorClient:
        client = FakeMotorClient(self, uri)
        self.clients.append(client)
        return client

    @property
    def open_count(self) -> int:
        return len(self.clients)

    @property
    def close_count(self) -> int:
        return sum(c.close_calls for c in self.clients)


@pytest.fixture
def fake_driver(mock_async_mongo_client):
    """
    Patch AsyncIOMotorClient with a counting fake backed by mongomock-motor.

    Usage in tests:
        async def test_something(fake_driver):
            await init_database(...)
            assert fake_driver.close_count == 1
    """
    driver = FakeDriver(mock_async_mongo_client)
    with patch("docker_mongo.database.connections.AsyncIOMotorClient", driver):
        yield driver


@pytest.fixture
def connection_config():
    """Connection settings as a plain mapping, the way callers usually pass them."""
    return {"uri": TEST_URI, "dbName": TEST_DB}


# =============================================================================
# Fully mocked database
# =============================================================================

class MockDatabase:
    """
    MagicMock-based database with per-collection AsyncMock methods.

    Every driver call is also appended to `calls` so tests can check the
    exact order operations were issued in.
    """

    def __init__(self, existing: Optional[list[str]] = None):
        self.calls: list[tuple] = []
        self.collections: dict[str, MagicMock] = {}
        self.db = MagicMock()
        existing = list(existing or [])
        self.db.list_collection_names = AsyncMock(
            side_effect=self._record("list_collection_names", lambda: existing)
        )
        self.db.create_collection = AsyncMock(
            side_effect=self._record("create_collection", lambda name: None)
        )
        self.db.__getitem__.side_effect = self.collection

    def _record(self, op: str, make_result, name: Optional[str] = None):
        async def _call(*args, **kwargs):
            self.calls.append((op, name, *args))
            return make_result(*args)
        return _call

    def collection(self, name: str) -> MagicMock:
        if name not in self.collections:
            coll = MagicMock()
            coll.create_index = AsyncMock(
                side_effect=self._record("create_index", lambda keys: "idx", name)
            )
            coll.delete_many = AsyncMock(
                side_effect=self._record(
                    "delete_many", lambda query: MagicMock(deleted_count=0), name
                )
            )
            coll.insert_many = AsyncMock(
                side_effect=self._record(
                    "insert_many",
                    lambda docs: MagicMock(inserted_ids=list(range(len(docs)))),
                    name,
                )
            )
            self.collections[name] = coll
        return self.collections[name]


@pytest.fixture
def mock_database():
    """Factory for MockDatabase instances."""
    return MockDatabase


@pytest.fixture
def patch_with_connection():
    """
    Patch with_connection in a service module to run against a given db.

    Usage:
        with patch_with_connection("docker_mongo.services.init_service", db):
            await init_database(...)
    """
    def _patch(module: str, db: Any):
        async def _with_connection(config, fn):
            return await fn(db)
        return patch(f"{module}.with_connection", side_effect=_with_connection)
    return _patch
