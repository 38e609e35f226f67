"""Observability module: structured logging and request correlation."""

from .logging_config import JSONFormatter, RequestIDFilter, configure_logging, get_logger
from .request_id import (
    request_id_var,
    get_request_id,
    set_request_id,
    reset_request_id,
    generate_request_id,
    request_context,
)
from .middleware import RequestIDMiddleware

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "JSONFormatter",
    "RequestIDFilter",
    # Request ID
    "request_id_var",
    "get_request_id",
    "set_request_id",
    "reset_request_id",
    "generate_request_id",
    "request_context",
    # Middleware
    "RequestIDMiddleware",
]
