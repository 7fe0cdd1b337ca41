"""Error taxonomy raised by content stores and the thread service."""

from typing import Optional


class StoreError(Exception):
    """Base exception for storage engine errors."""

    error_type = "store_error"

    def __init__(self, message: str, item_id: Optional[str] = None):
        super().__init__(message)
        self.item_id = item_id


class NotFoundError(StoreError):
    """Lookup by id found nothing."""

    error_type = "not_found"


class ItemNotFoundError(StoreError):
    """Comment target matches neither a post nor a comment."""

    error_type = "item_not_found"


class CommentingDisabledError(StoreError):
    """The post exists but its author turned comments off."""

    error_type = "commenting_disabled"


class DuplicateIDError(StoreError):
    """An entity with this id already exists."""

    error_type = "duplicate_id"


class BackendUnavailableError(StoreError):
    """The underlying storage medium cannot be reached."""

    error_type = "backend_unavailable"


class InvalidPaginationError(StoreError, ValueError):
    """limit or offset is negative."""

    error_type = "invalid_pagination"


class OperationCancelledError(StoreError):
    """The caller cancelled the operation before it finished."""

    error_type = "cancelled"
