"""StatusServicePort interface (hexagonal architecture).

External collaborators (HTTP routers, persistence services) depend on this
single capability surface instead of on the facade and manager separately.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from .models import (
    Requirement,
    StatusDefinition,
    TransitionResult,
    TransitionType,
    ValidationResult,
    WorkflowInfo,
)


class StatusServicePort(ABC):
    """Port interface for status workflow services."""

    @abstractmethod
    def get_statuses(self) -> Mapping[str, StatusDefinition]:
        pass

    @abstractmethod
    def get_status(self, status: Any) -> Optional[StatusDefinition]:
        pass

    @abstractmethod
    def get_initial_status(self) -> str:
        pass

    @abstractmethod
    def get_available_transitions(self, status: Any) -> list[str]:
        pass

    @abstractmethod
    def validate_transition(self, from_status: Any, to_status: Any, data: Any = None) -> ValidationResult:
        """Validate a proposed transition.

        Args:
            from_status: Current status (as stored by the persistence layer)
            to_status: Target status
            data: Data checked by the target status requirements

        Returns:
            ValidationResult with errors and UI hints in metadata
        """
        pass

    @abstractmethod
    def transition(
        self,
        from_status: Any,
        to_status: Any,
        reason: str = "",
        data: Any = None,
        user_id: str = "system",
        skip_validation: bool = False,
    ) -> TransitionResult:
        """Build a transition and its history entry.

        Raises:
            StateTransitionError: If the transition does not validate
        """
        pass

    @abstractmethod
    def get_transition_type(self, from_status: Any, to_status: Any) -> TransitionType:
        pass

    @abstractmethod
    def validate_requirements(self, status: Any, data: Any = None) -> ValidationResult:
        pass

    @abstractmethod
    def is_valid_status(self, status: Any) -> bool:
        pass

    @abstractmethod
    def is_terminal_status(self, status: Any) -> bool:
        pass

    @abstractmethod
    def requires_notes(self, status: Any) -> bool:
        pass

    @abstractmethod
    def is_editable(self, status: Any) -> bool:
        pass

    @abstractmethod
    def get_status_color(self, status: Any) -> Optional[str]:
        pass

    @abstractmethod
    def get_status_label(self, status: Any) -> str:
        pass

    @abstractmethod
    def get_status_description(self, status: Any) -> Optional[str]:
        pass

    @abstractmethod
    def get_status_requirements(self, status: Any) -> Mapping[str, Requirement]:
        pass

    @abstractmethod
    def get_workflow_info(self) -> WorkflowInfo:
        pass
