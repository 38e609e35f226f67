"""Workflow exceptions."""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .models import StatusError


class WorkflowError(Exception):
    """Base class for workflow engine errors."""
    pass


class WorkflowConfigurationError(WorkflowError):
    """Raised when a workflow definition violates its structural rules.

    Raised at load time only, never while validating a transition.
    """
    pass


class StateTransitionError(WorkflowError):
    """Raised by TransitionManager.transition() when validation fails.

    The message joins every error message; the structured errors stay
    available on ``errors`` for callers that need them.
    """

    def __init__(
        self,
        message: str,
        from_status: Optional[Any] = None,
        to_status: Optional[Any] = None,
        errors: Optional[list["StatusError"]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.from_status = from_status
        self.to_status = to_status
        self.errors = list(errors or [])
