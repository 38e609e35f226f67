"""Status workflow domain module.

Governs how a purchase order moves through its statuses: which moves are
allowed, which data each status requires, and the transition/history
records handed back to the persistence layer.
"""

from .errors import StateTransitionError, WorkflowConfigurationError, WorkflowError
from .models import (
    HistoryEntry,
    Requirement,
    RequirementLevel,
    StatusDefinition,
    StatusError,
    StatusErrorType,
    StatusMetadata,
    Transition,
    TransitionResult,
    TransitionType,
    ValidationResult,
    WorkflowInfo,
)
from .workflow import WorkflowDefinition
from .hooks import TransitionHooks, logging_hooks
from .queries import StatusQueryFacade
from .transitions import TransitionManager
from .port import StatusServicePort
from .service import StatusService
from .definitions import (
    PURCHASE_ORDER_WORKFLOW,
    PurchaseOrderStatus,
    StatusColor,
)

__all__ = [
    "WorkflowError",
    "WorkflowConfigurationError",
    "StateTransitionError",
    "HistoryEntry",
    "Requirement",
    "RequirementLevel",
    "StatusDefinition",
    "StatusError",
    "StatusErrorType",
    "StatusMetadata",
    "Transition",
    "TransitionResult",
    "TransitionType",
    "ValidationResult",
    "WorkflowInfo",
    "WorkflowDefinition",
    "TransitionHooks",
    "logging_hooks",
    "StatusQueryFacade",
    "TransitionManager",
    "StatusServicePort",
    "StatusService",
    "PURCHASE_ORDER_WORKFLOW",
    "PurchaseOrderStatus",
    "StatusColor",
]
