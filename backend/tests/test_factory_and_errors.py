"""Store factory, config helpers and error translation."""

import pytest

from threadstore import config
from threadstore.storage.errors import (
    BackendUnavailableError,
    CommentingDisabledError,
    DuplicateIDError,
    InvalidPaginationError,
    ItemNotFoundError,
    NotFoundError,
    OperationCancelledError,
    StoreError,
)
from threadstore.storage.factory import create_store
from threadstore.storage.memory import MemoryStore
from threadstore.storage.relational import RelationalStore
from threadstore.utils.error_handler import error_handler


def test_factory_builds_memory_store():
    assert isinstance(create_store("memory"), MemoryStore)


def test_factory_builds_relational_store():
    store = create_store("Relational", "sqlite://")
    try:
        assert isinstance(store, RelationalStore)
        assert store.get_all_posts() == []
    finally:
        store.close()


def test_factory_rejects_unknown_type():
    with pytest.raises(ValueError):
        create_store("cassandra")


def test_database_url_password_is_masked():
    masked = config.mask_database_url("postgresql://user:s3cret@db:5432/threads")
    assert "s3cret" not in masked
    assert masked == "postgresql://user:***@db:5432/threads"
    assert config.mask_database_url("sqlite:///data/threads.db") == "sqlite:///data/threads.db"


@pytest.mark.parametrize("error,status_code", [
    (NotFoundError("x"), 404),
    (ItemNotFoundError("x"), 404),
    (CommentingDisabledError("x"), 403),
    (DuplicateIDError("x"), 409),
    (InvalidPaginationError("x"), 400),
    (BackendUnavailableError("x"), 503),
    (OperationCancelledError("x"), 499),
    (StoreError("x"), 500),
])
def test_error_status_codes(error, status_code):
    info = error_handler.process_store_error(error, request_id="req-1")
    assert info["status_code"] == status_code
    assert info["content"] == {
        "error": error.error_type,
        "message": "x",
        "request_id": "req-1",
    }


def test_error_keeps_item_id():
    error = ItemNotFoundError("Item with ID abc not found", item_id="abc")
    assert error.item_id == "abc"
    assert isinstance(InvalidPaginationError("bad"), ValueError)
