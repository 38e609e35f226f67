"""Status workflow models and enums.

Value objects shared by the workflow definition, the transition manager and
the transport layer. Everything here is immutable or created per call and
handed over to the caller.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Sequence

from .errors import WorkflowConfigurationError


def status_id(value: Any) -> Any:
    """Normalize a status identifier, unwrapping Enum members to their value."""
    if isinstance(value, Enum):
        return value.value
    return value


class StatusErrorType(str, Enum):
    """Workflow error kinds shared with collaborators."""
    INVALID_STATUS = "INVALID_STATUS"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    REQUIREMENTS_NOT_MET = "REQUIREMENTS_NOT_MET"

    # Reserved for transport/persistence layers, never emitted by the engine
    MISSING_REQUIRED_DATA = "MISSING_REQUIRED_DATA"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    SYSTEM_ERROR = "SYSTEM_ERROR"


class TransitionType(str, Enum):
    """Transition classification.

    Only FORWARD, BACKWARD and RESET are computed by the engine. The other
    members are available to callers that tag transitions themselves.
    """
    FORWARD = "FORWARD"
    BACKWARD = "BACKWARD"
    RESET = "RESET"
    MANUAL = "MANUAL"
    AUTOMATIC = "AUTOMATIC"
    SYSTEM = "SYSTEM"
    SCHEDULED = "SCHEDULED"


class RequirementLevel(str, Enum):
    """How a failing requirement affects validation.

    MANDATORY: failure is an error and blocks the transition
    RECOMMENDED: failure is reported as a warning only
    OPTIONAL: listed but never evaluated
    """
    MANDATORY = "MANDATORY"
    RECOMMENDED = "RECOMMENDED"
    OPTIONAL = "OPTIONAL"

    @property
    def blocking(self) -> bool:
        return self is RequirementLevel.MANDATORY

    @property
    def evaluated(self) -> bool:
        return self is not RequirementLevel.OPTIONAL


@dataclass(frozen=True)
class Requirement:
    """Named predicate gating entry into a status.

    The predicate receives the untouched transition data and must be cheap,
    synchronous and free of side effects. A predicate whose outcome depends
    on wall-clock time or other external state makes validation results
    non-deterministic for the caller.
    """
    name: str
    predicate: Callable[[Any], Any]
    message: Optional[str] = None
    level: RequirementLevel = RequirementLevel.MANDATORY

    def validate(self, data: Any) -> bool:
        return bool(self.predicate(data))

    @property
    def failure_message(self) -> str:
        return self.message or f"Requirement not met: {self.name}"


@dataclass(frozen=True)
class StatusMetadata:
    """Behavioural flags of a status."""
    is_terminal: bool = False
    requires_notes: bool = False
    editable: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "isTerminal": self.is_terminal,
            "requiresNotes": self.requires_notes,
            "editable": self.editable,
        }


@dataclass(frozen=True)
class StatusDefinition:
    """A single status of the workflow.

    ``requirements`` may be given as a sequence of Requirement objects or as
    a mapping keyed by requirement name; it is stored as a read-only mapping
    in declaration order. ``allowed_transitions`` is stored as a tuple.
    """
    name: str
    label: str
    description: str = ""
    color: Optional[str] = None
    allowed_transitions: Sequence[str] = ()
    requirements: Any = ()
    metadata: StatusMetadata = field(default_factory=StatusMetadata)

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", status_id(self.name))
        object.__setattr__(
            self, "allowed_transitions", tuple(status_id(s) for s in self.allowed_transitions)
        )

        if isinstance(self.requirements, Mapping):
            items = list(self.requirements.values())
        else:
            items = list(self.requirements)

        registry: dict[str, Requirement] = {}
        for requirement in items:
            if requirement.name in registry:
                raise WorkflowConfigurationError(
                    f"Status {self.name} declares requirement '{requirement.name}' more than once"
                )
            registry[requirement.name] = requirement
        object.__setattr__(self, "requirements", MappingProxyType(registry))

    def to_dict(self) -> dict[str, Any]:
        """Serializable view (predicates are not exported)."""
        return {
            "name": self.name,
            "label": self.label,
            "description": self.description,
            "color": self.color,
            "allowedTransitions": list(self.allowed_transitions),
            "requirements": {
                name: {
                    "level": requirement.level.value,
                    "message": requirement.failure_message,
                }
                for name, requirement in self.requirements.items()
            },
            "metadata": self.metadata.to_dict(),
        }


@dataclass(frozen=True)
class StatusError:
    """Structured workflow error."""
    type: StatusErrorType
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass
class ValidationResult:
    """Outcome of checking a proposed transition.

    ``metadata`` uses the wire keys ``allowedTransitions`` and
    ``requirements`` and only contains the keys that apply.
    """
    valid: bool
    errors: list[StatusError] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    warnings: list[StatusError] = field(default_factory=list)

    @property
    def allowed_transitions(self) -> Optional[list[str]]:
        return self.metadata.get("allowedTransitions")

    @property
    def requirements(self) -> Optional[list[str]]:
        return self.metadata.get("requirements")

    @property
    def error_messages(self) -> list[str]:
        return [error.message for error in self.errors]

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [error.to_dict() for error in self.errors],
            "warnings": [warning.to_dict() for warning in self.warnings],
            "metadata": {key: list(value) for key, value in self.metadata.items()},
        }


@dataclass(frozen=True)
class Transition:
    """A performed move, returned to the caller for persistence."""
    from_status: str
    to_status: str
    timestamp: datetime
    reason: str = ""
    data: Any = None
    user_id: str = "system"

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_status,
            "to": self.to_status,
            "reason": self.reason,
            "data": self.data,
            "userId": self.user_id,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class HistoryEntry:
    """Audit record to append to the document's status history."""
    to_status: str
    timestamp: datetime
    reason: str = ""
    data: Any = None
    user_id: str = "system"

    def to_dict(self) -> dict[str, Any]:
        return {
            "to": self.to_status,
            "reason": self.reason,
            "data": self.data,
            "userId": self.user_id,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class TransitionResult:
    """Result of TransitionManager.transition()."""
    success: bool
    transition: Transition
    history_entry: HistoryEntry
    type: TransitionType
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "transition": self.transition.to_dict(),
            "historyEntry": self.history_entry.to_dict(),
            "type": self.type.value,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class WorkflowInfo:
    """Descriptive metadata of a workflow definition."""
    name: str
    version: str
    description: str
    last_updated: Optional[str]
    initial: str
    statuses: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "lastUpdated": self.last_updated,
            "initial": self.initial,
            "statuses": list(self.statuses),
        }
