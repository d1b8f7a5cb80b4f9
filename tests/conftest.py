from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app import create_app
from config.config import Settings
from repositories.memory_repository import InMemoryDocumentStore

FIXED_NOW = datetime(2023, 5, 17, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def failing_store():
    return InMemoryDocumentStore(fail_with="Elasticsearch request failed with status code: '401'")


@pytest.fixture
def test_settings():
    return Settings(
        elastic_url="",
        document_store_backend="memory",
        telemetry_index_prefix="telemetry",
        telemetry_partition_granularity="year",
    )


@pytest.fixture
def make_client(test_settings):
    """Start the app around a given store with a frozen clock."""
    clients = []

    def _make(document_store):
        client = TestClient(create_app(document_store=document_store, app_settings=test_settings))
        client.__enter__()
        client.app.state.telemetry_service.clock = lambda: FIXED_NOW
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
