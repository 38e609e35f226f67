"""Read-only lookups over a workflow definition.

Used by rendering code that must degrade gracefully, so no accessor raises:
unknown statuses yield an empty, false or fallback value.
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional

from .models import Requirement, StatusDefinition, StatusMetadata, status_id
from .workflow import WorkflowDefinition


_NO_REQUIREMENTS: Mapping[str, Requirement] = MappingProxyType({})


class StatusQueryFacade:
    """Status metadata accessors for a single workflow."""

    def __init__(self, workflow: WorkflowDefinition):
        self.workflow = workflow

    def get_statuses(self) -> Mapping[str, StatusDefinition]:
        return self.workflow.statuses

    def get_status(self, status: Any) -> Optional[StatusDefinition]:
        try:
            return self.workflow.statuses.get(status_id(status))
        except TypeError:
            # Unhashable identifiers cannot name a status
            return None

    def get_initial_status(self) -> str:
        return self.workflow.initial

    def is_valid_status(self, status: Any) -> bool:
        return isinstance(status_id(status), str) and self.get_status(status) is not None

    def get_available_transitions(self, status: Any) -> list[str]:
        """Allowed next statuses; empty for unknown or terminal statuses."""
        definition = self.get_status(status)
        if definition is None or definition.metadata.is_terminal:
            return []
        return list(definition.allowed_transitions)

    def get_status_metadata(self, status: Any) -> StatusMetadata:
        definition = self.get_status(status)
        return definition.metadata if definition is not None else StatusMetadata()

    def is_terminal_status(self, status: Any) -> bool:
        return self.get_status_metadata(status).is_terminal

    def requires_notes(self, status: Any) -> bool:
        return self.get_status_metadata(status).requires_notes

    def is_editable(self, status: Any) -> bool:
        return self.get_status_metadata(status).editable

    def get_status_color(self, status: Any) -> Optional[str]:
        definition = self.get_status(status)
        return definition.color if definition is not None else None

    def get_status_label(self, status: Any) -> str:
        """Display label, falling back to the raw identifier."""
        definition = self.get_status(status)
        if definition is None or not definition.label:
            return str(status_id(status))
        return definition.label

    def get_status_description(self, status: Any) -> Optional[str]:
        definition = self.get_status(status)
        return definition.description if definition is not None else None

    def get_status_requirements(self, status: Any) -> Mapping[str, Requirement]:
        definition = self.get_status(status)
        return definition.requirements if definition is not None else _NO_REQUIREMENTS
