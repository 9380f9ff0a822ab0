"""Fixtures for end-to-end tests against the FastAPI app."""

import pytest
from fastapi.testclient import TestClient

from desk.interface.api.app import create_app
from desk.persistence.repository.inmemory import InMemoryDatabase
from tests.di import build_test_container


@pytest.fixture
def container():
    """Test container with in-memory persistence."""
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client with test container.

    The client is entered so HTTP requests and WebSockets share one event
    loop with the presence channel.
    """
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def store(client, container) -> InMemoryDatabase:
    """In-memory tables behind the app, for seeding and assertions."""
    return client.portal.call(container.get, InMemoryDatabase)
