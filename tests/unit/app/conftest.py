"""Shared fixtures for REST API unit tests."""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.state import AppServices
from models.config import Configuration


@pytest.fixture(name="services")
def services_fixture(memory_store, embeddings, index, generator) -> AppServices:
    """Services wired around the in-memory store and the fakes."""
    config = Configuration(
        answer_cache={"ttl": 600}, sessions={"ttl": 3600}, rag={"top_k": 1}
    )
    return AppServices.assemble(
        config,
        store=memory_store,
        embeddings=embeddings,
        index=index,
        generator=generator,
    )


@pytest.fixture(name="client")
def client_fixture(services: AppServices):
    """Test client of the app; the lifespan handler is not run."""
    app.state.services = services
    yield TestClient(app)
    del app.state.services
