"""API middleware."""

from stockopname.api.middleware.error_handler import (
    ErrorHandlerMiddleware,
    build_error_response,
    setup_exception_handlers,
)
from stockopname.api.middleware.logging import LoggingMiddleware

__all__ = [
    "LoggingMiddleware",
    "ErrorHandlerMiddleware",
    "build_error_response",
    "setup_exception_handlers",
]
