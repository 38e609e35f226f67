"""Request ID correlation.

The current request id lives in a ContextVar so log records emitted from any
layer (router, service, transition manager) carry the id of the HTTP request
that triggered them.
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator, Optional

NO_REQUEST_ID = "no-request-id"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def generate_request_id() -> str:
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Current request id, or "no-request-id" outside of a request."""
    return request_id_var.get() or NO_REQUEST_ID


def set_request_id(request_id: str) -> Token:
    """Bind a request id to the current context.

    Returns:
        Token to pass to reset_request_id() once the request is done
    """
    return request_id_var.set(request_id)


def reset_request_id(token: Token) -> None:
    request_id_var.reset(token)


@contextmanager
def request_context(request_id: Optional[str] = None) -> Iterator[str]:
    """Bind a request id for the duration of a block (workers, scripts, tests)."""
    request_id = request_id or generate_request_id()
    token = set_request_id(request_id)
    try:
        yield request_id
    finally:
        reset_request_id(token)
