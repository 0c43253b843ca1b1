"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from botdesk.core.memory import MemoryStorage
from botdesk.core.sql_storage import SqlStorage
from botdesk.main import create_app


@pytest.fixture
def memory_storage():
    """Seeded in-memory store."""
    return MemoryStorage()


@pytest.fixture
def sql_storage():
    """Seeded relational store on a private in-memory SQLite database."""
    storage = SqlStorage("sqlite://", seed=True)
    yield storage
    storage.engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def storage(request):
    """Each storage provider in turn, both seeded with the demo data."""
    return request.getfixturevalue(f"{request.param}_storage")


@pytest.fixture
def app(memory_storage):
    return create_app(storage=memory_storage)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
