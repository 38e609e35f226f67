"""Workflow definition: the immutable status graph.

A WorkflowDefinition is built once from static configuration and shared by
every facade, manager and service in the process. Structural problems are
reported at construction time as WorkflowConfigurationError so that a broken
configuration never reaches request handling.
"""

from collections import deque
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

from .errors import WorkflowConfigurationError
from .models import StatusDefinition, WorkflowInfo, status_id


DEFAULT_CANCELLED_STATUS = "CANCELLED"


@dataclass(frozen=True)
class WorkflowDefinition:
    """Statuses, their allowed transitions and the initial status.

    ``statuses`` accepts a sequence of StatusDefinition (or a mapping whose
    values are StatusDefinition) and is stored as a read-only mapping in
    declaration order. Declaration order is the ordinal order used to
    classify transitions as FORWARD or BACKWARD.
    """
    initial: str
    statuses: Any
    cancelled_status: str = DEFAULT_CANCELLED_STATUS
    name: str = "workflow"
    version: str = "1.0.0"
    description: str = ""
    last_updated: Optional[str] = None
    _ordinals: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "initial", status_id(self.initial))
        object.__setattr__(self, "cancelled_status", status_id(self.cancelled_status))

        definitions: Sequence[StatusDefinition]
        if isinstance(self.statuses, Mapping):
            definitions = list(self.statuses.values())
        else:
            definitions = list(self.statuses)

        registry: dict[str, StatusDefinition] = {}
        for definition in definitions:
            if not isinstance(definition.name, str):
                raise WorkflowConfigurationError(
                    f"Status names must be strings, got {definition.name!r}"
                )
            if definition.name in registry:
                raise WorkflowConfigurationError(f"Duplicate status: {definition.name}")
            registry[definition.name] = definition

        object.__setattr__(self, "statuses", MappingProxyType(registry))
        object.__setattr__(
            self,
            "_ordinals",
            MappingProxyType({name: index for index, name in enumerate(registry)}),
        )
        self._check_structure()

    def _check_structure(self) -> None:
        if not self.statuses:
            raise WorkflowConfigurationError(f"Workflow {self.name} declares no statuses")

        if not isinstance(self.initial, str):
            raise WorkflowConfigurationError(f"Initial status must be a string, got {self.initial!r}")

        if self.initial not in self.statuses:
            raise WorkflowConfigurationError(
                f"Initial status {self.initial} is not declared in workflow {self.name}"
            )

        for definition in self.statuses.values():
            invalid = [t for t in definition.allowed_transitions if not isinstance(t, str)]
            if invalid:
                raise WorkflowConfigurationError(
                    f"Status {definition.name} declares non-string transition targets: {invalid}"
                )
            dangling =[t for t in definition.allowed_transitions if t not in self.statuses]
            if dangling:
                raise WorkflowConfigurationError(
                    f"Status {definition.name} transitions to undeclared statuses: {dangling}"
                )
            if definition.metadata.is_terminal and definition.allowed_transitions:
                raise WorkflowConfigurationError(
                    f"Terminal status {definition.name} must not declare transitions, "
                    f"got {list(definition.allowed_transitions)}"
                )

        reachable = self.reachable_from(self.initial)
        unreachable = [
            name for name, definition in self.statuses.items()
            if name not in reachable
            and not definition.metadata.is_terminal
            and name != self.cancelled_status
        ]
        if unreachable:
            raise WorkflowConfigurationError(
                f"Statuses not reachable from {self.initial}: {unreachable}"
            )

    def reachable_from(self, start: str) -> set[str]:
        """Statuses reachable from ``start`` (inclusive) via allowed transitions."""
        seen = {start}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for target in self.statuses[current].allowed_transitions:
                if target not in seen:
                    seen.add(target)
                    queue.append(target)
        return seen

    def ordinal(self, status: Any) -> int:
        """Declaration index of a status, -1 when unknown."""
        try:
            return self._ordinals.get(status_id(status), -1)
        except TypeError:
            return -1

    @property
    def order(self) -> tuple[str, ...]:
        return tuple(self.statuses)

    def is_reset_target(self, status: Any) -> bool:
        status = status_id(status)
        return status == self.initial or status == self.cancelled_status

    def info(self) -> WorkflowInfo:
        return WorkflowInfo(
            name=self.name,
            version=self.version,
            description=self.description,
            last_updated=self.last_updated,
            initial=self.initial,
            statuses=self.order,
        )
