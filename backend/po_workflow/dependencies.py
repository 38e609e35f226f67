"""FastAPI dependencies.

The workflow definition is built once at import time; one StatusService is
shared by every request. Tests swap it through app.dependency_overrides.
"""

from functools import lru_cache

from .domain.status import (
    PURCHASE_ORDER_WORKFLOW,
    StatusService,
    StatusServicePort,
    logging_hooks,
)


@lru_cache()
def get_status_service() -> StatusServicePort:
    """Process-wide status service for the purchase order workflow."""
    return StatusService(PURCHASE_ORDER_WORKFLOW, hooks=logging_hooks())

