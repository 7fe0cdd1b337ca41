"""Thread assembly services."""

from .thread_service import ThreadService

__all__ = ["ThreadService"]
