"""Error Handling Utility

Translates content store errors into HTTP error responses.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import status

from ..storage.errors import (
    BackendUnavailableError,
    CommentingDisabledError,
    DuplicateIDError,
    InvalidPaginationError,
    ItemNotFoundError,
    NotFoundError,
    OperationCancelledError,
    StoreError,
)

logger = logging.getLogger(__name__)

# nginx-style "client closed request"
STATUS_CLIENT_CLOSED_REQUEST = 499


class StoreErrorHandler:
    """Maps store errors to status codes and JSON error bodies."""

    STATUS_CODES = {
        NotFoundError: status.HTTP_404_NOT_FOUND,
        ItemNotFoundError: status.HTTP_404_NOT_FOUND,
        CommentingDisabledError: status.HTTP_403_FORBIDDEN,
        DuplicateIDError: status.HTTP_409_CONFLICT,
        InvalidPaginationError: status.HTTP_400_BAD_REQUEST,
        BackendUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
        OperationCancelledError: STATUS_CLIENT_CLOSED_REQUEST,
    }

    def status_code_for(self, error: StoreError) -> int:
        for error_class in type(error).__mro__:
            if error_class in self.STATUS_CODES:
                return self.STATUS_CODES[error_class]
        return status.HTTP_500_INTERNAL_SERVER_ERROR

    def process_store_error(self, error: StoreError, request_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Build the error body for a store error.

        Args:
            error: The exception raised by the store or thread service
            request_id: Request ID to echo back

        Returns:
            Dictionary with status_code and JSON content
        """
        status_code = self.status_code_for(error)
        if status_code >= 500:
            logger.error(f"Store error for request {request_id}: {error.error_type} - {error}")
        else:
            logger.info(f"Store error for request {request_id}: {error.error_type} - {error}")

        return {
            "status_code": status_code,
            "content": {
                "error": error.error_type,
                "message": str(error),
                "request_id": request_id,
            },
        }


# Global error handler instance
error_handler = StoreErrorHandler()
