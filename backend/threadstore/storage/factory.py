"""Pick a content store backend from configuration."""

import logging
from typing import Optional

from .base import ContentStore
from .memory import MemoryStore
from .. import config

logger = logging.getLogger(__name__)

STORAGE_TYPES = ("memory", "relational")


def create_store(storage_type: Optional[str] = None, database_url: Optional[str] = None) -> ContentStore:
    """
    Build the configured content store.

    Args:
        storage_type: "memory" or "relational" (defaults to config.STORAGE_TYPE)
        database_url: Relational backend URL (defaults to config.DATABASE_URL)

    Raises:
        ValueError: for an unknown storage type
    """
    storage_type = (storage_type or config.STORAGE_TYPE).strip().lower()

    if storage_type == "memory":
        logger.info("Using in-memory content store")
        return MemoryStore()

    if storage_type == "relational":
        from .relational import RelationalStore

        database_url = database_url or config.DATABASE_URL
        logger.info(f"Using relational content store at {config.mask_database_url(database_url)}")
        return RelationalStore.from_url(database_url)

    raise ValueError(f"Unknown storage type '{storage_type}', expected one of {STORAGE_TYPES}")
