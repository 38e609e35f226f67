"""Pytest fixtures for the status workflow.

Provides:
- The shipped purchase order workflow and a deterministic clock
- TransitionManager / StatusService instances built on it
- A builder for small ad-hoc workflows
- A FastAPI TestClient with the status service injected

Usage:
    def test_transition(manager):
        result = manager.transition("UPLOADED", "CONFIRMED", data={"poNumber": "PO1"})
        assert result.success
"""

from datetime import datetime, timezone
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from po_workflow.config import Settings, get_settings
from po_workflow.dependencies import get_status_service
from po_workflow.domain.status import (
    PURCHASE_ORDER_WORKFLOW,
    StatusDefinition,
    StatusMetadata,
    StatusService,
    TransitionManager,
    WorkflowDefinition,
)
from po_workflow.main import create_app


FIXED_NOW = datetime(2025, 2, 5, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def workflow() -> WorkflowDefinition:
    return PURCHASE_ORDER_WORKFLOW


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def manager(workflow, fixed_clock) -> TransitionManager:
    return TransitionManager(workflow, clock=fixed_clock)


@pytest.fixture
def service(workflow, fixed_clock) -> StatusService:
    return StatusService(workflow, transition_manager=TransitionManager(workflow, clock=fixed_clock))


@pytest.fixture
def make_status() -> Callable[..., StatusDefinition]:
    """Factory for StatusDefinition with short defaults."""

    def _make(name, transitions=(), requirements=(), terminal=False, **kwargs):
        return StatusDefinition(
            name=name,
            label=kwargs.pop("label", None) or str(name).title(),
            allowed_transitions=transitions,
            requirements=requirements,
            metadata=StatusMetadata(is_terminal=terminal),
            **kwargs,
        )

    return _make


@pytest.fixture
def test_settings() -> Settings:
    return Settings(LOG_LEVEL="WARNING", LOG_JSON=False, DEFAULT_USER_ID="api-user")


@pytest.fixture
def client(test_settings, service):
    """TestClient with the status service pinned to the fixed clock."""
    app = create_app(test_settings)
    app.dependency_overrides[get_status_service] = lambda: service
    app.dependency_overrides[get_settings] = lambda: test_settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
