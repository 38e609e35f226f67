"""StatusService - single entry point over the status workflow."""

from typing import Any, Mapping, Optional

from .hooks import TransitionHooks
from .models import (
    Requirement,
    StatusDefinition,
    TransitionResult,
    TransitionType,
    ValidationResult,
    WorkflowInfo,
)
from .port import StatusServicePort
from .queries import StatusQueryFacade
from .transitions import DEFAULT_USER_ID, TransitionManager
from .workflow import WorkflowDefinition


class StatusService(StatusServicePort):
    """Composes StatusQueryFacade and TransitionManager.

    Every method delegates; no workflow logic lives here.
    """

    def __init__(
        self,
        workflow: WorkflowDefinition,
        hooks: Optional[TransitionHooks] = None,
        transition_manager: Optional[TransitionManager] = None,
    ):
        self.workflow = workflow
        self.queries = StatusQueryFacade(workflow)
        self.transition_manager = transition_manager or TransitionManager(workflow, hooks=hooks)

    def get_statuses(self) -> Mapping[str, StatusDefinition]:
        return self.queries.get_statuses()

    def get_status(self, status: Any) -> Optional[StatusDefinition]:
        return self.queries.get_status(status)

    def get_initial_status(self) -> str:
        return self.queries.get_initial_status()

    def get_available_transitions(self, status: Any) -> list[str]:
        return self.transition_manager.get_available_transitions(status)

    def validate_transition(self, from_status: Any, to_status: Any, data: Any = None) -> ValidationResult:
        return self.transition_manager.validate_transition(from_status, to_status, data)

    def transition(
        self,
        from_status: Any,
        to_status: Any,
        reason: str = "",
        data: Any = None,
        user_id: str = DEFAULT_USER_ID,
        skip_validation: bool = False,
    ) -> TransitionResult:
        return self.transition_manager.transition(
            from_status,
            to_status,
            reason=reason,
            data=data,
            user_id=user_id,
            skip_validation=skip_validation,
        )

    def get_transition_type(self, from_status: Any, to_status: Any) -> TransitionType:
        return self.transition_manager.get_transition_type(from_status, to_status)

    def validate_requirements(self, status: Any, data: Any = None) -> ValidationResult:
        return self.transition_manager.validate_requirements(status, data)

    def is_valid_status(self, status: Any) -> bool:
        return self.transition_manager.is_valid_status(status)

    def is_terminal_status(self, status: Any) -> bool:
        return self.queries.is_terminal_status(status)

    def requires_notes(self, status: Any) -> bool:
        return self.queries.requires_notes(status)

    def is_editable(self, status: Any) -> bool:
        return self.queries.is_editable(status)

    def get_status_color(self, status: Any) -> Optional[str]:
        return self.queries.get_status_color(status)

    def get_status_label(self, status: Any) -> str:
        return self.queries.get_status_label(status)

    def get_status_description(self, status: Any) -> Optional[str]:
        return self.queries.get_status_description(status)

    def get_status_requirements(self, status: Any) -> Mapping[str, Requirement]:
        return self.queries.get_status_requirements(status)

    def get_workflow_info(self) -> WorkflowInfo:
        return self.workflow.info()
