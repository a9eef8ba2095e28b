"""Shared test fixtures for CoffeeHub."""

import os
import tempfile
from datetime import datetime, timedelta, timezone

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient

from coffeehub.api import create_app
from coffeehub.config import AppConfig, DatabaseConfig, LoggingConfig, ServerConfig
from coffeehub.services import ProductService, StatsService
from coffeehub.storage import MemoryProductStore, SqliteProductStore


def make_config(backend: str = "memory", path: str = "coffeehub_test.db") -> AppConfig:
    """Build an AppConfig without touching config files."""
    return AppConfig(
        server=ServerConfig(host="127.0.0.1", port=4000, cors_origins=["*"]),
        database=DatabaseConfig(backend=backend, path=path),
        logging=LoggingConfig(level="WARNING"),
        cosmosdb=None,
    )


class StepClock:
    """Clock advancing one second per call, so timestamps are distinguishable."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(seconds=1)
        return self.now


@pytest.fixture
def temp_db_path():
    """Create a temporary database file for testing."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield path
    # Cleanup
    if os.path.exists(path):
        os.remove(path)


@pytest.fixture
async def sqlite_store(temp_db_path):
    """A connected SqliteProductStore on a temporary file."""
    store = SqliteProductStore(temp_db_path)
    await store.connect()
    yield store
    await store.close()


@pytest.fixture
def memory_store():
    return MemoryProductStore()


@pytest.fixture(params=["memory", "sqlite"])
async def store(request, temp_db_path):
    """Every locally runnable backend, connected."""
    if request.param == "memory":
        backend = MemoryProductStore()
    else:
        backend = SqliteProductStore(temp_db_path)
    await backend.connect()
    yield backend
    await backend.close()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def product_service(store, clock):
    return ProductService(store, clock=clock)


@pytest.fixture
def stats_service(store):
    return StatsService(store)


@pytest.fixture
def api_client():
    """TestClient over an app wired to a fresh in-memory store."""
    app = create_app(config=make_config(), store=MemoryProductStore())
    with TestClient(app) as client:
        yield client


@pytest.fixture
def cli_runner():
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_factory():
    """Factory for AppConfig objects, see ``make_config``."""
    return make_config
