"""Shared fixtures: one fresh store per test, for each backend."""

import pytest

from threadstore.models.base import create_engine_for_url
from threadstore.services.thread_service import ThreadService
from threadstore.storage.memory import MemoryStore
from threadstore.storage.relational import RelationalStore


def make_relational_store() -> RelationalStore:
    """Relational store over a private in-memory SQLite database."""
    return RelationalStore(create_engine_for_url("sqlite://"), owns_engine=True)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def relational_store():
    store = make_relational_store()
    yield store
    store.close()


@pytest.fixture(params=["memory", "relational"])
def store(request):
    """Runs the test once per backend."""
    if request.param == "memory":
        yield MemoryStore()
    else:
        store = make_relational_store()
        yield store
        store.close()


@pytest.fixture
def service(store):
    return ThreadService(store)
