"""Pydantic schemas for the Status Workflow API

Field names follow the wire format used by the purchase order dashboard
(camelCase aliases), while Python attributes stay snake_case.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.status import StatusErrorType, TransitionType


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ============================================================================
# Status Schemas
# ============================================================================

class RequirementSchema(_WireModel):
    """Requirement description (predicates are not exposed)"""
    level: str
    message: str


class StatusMetadataSchema(_WireModel):
    is_terminal: bool = Field(False, alias="isTerminal")
    requires_notes: bool = Field(False, alias="requiresNotes")
    editable: bool = False


class StatusResponse(_WireModel):
    """Response schema for a single status"""
    name: str
    label: str
    description: str = ""
    color: Optional[str] = None
    allowed_transitions: List[str] = Field(default_factory=list, alias="allowedTransitions")
    requirements: Dict[str, RequirementSchema] = Field(default_factory=dict)
    metadata: StatusMetadataSchema


class InitialStatusResponse(_WireModel):
    status: str


class AvailableTransitionsResponse(_WireModel):
    status: str
    transitions: List[str]


class WorkflowInfoResponse(_WireModel):
    name: str
    version: str
    description: str
    last_updated: Optional[str] = Field(None, alias="lastUpdated")
    initial: str
    statuses: List[str]


# ============================================================================
# Validation / Transition Schemas
# ============================================================================

class ValidateTransitionRequest(_WireModel):
    """Request body for POST /statuses/validate"""
    from_status: str = Field(..., alias="from", description="Current status of the purchase order")
    to_status: str = Field(..., alias="to", description="Target status")
    data: Dict[str, Any] = Field(default_factory=dict, description="Data checked by target requirements")


class TransitionRequest(ValidateTransitionRequest):
    """Request body for POST /statuses/transition"""
    reason: str = ""
    user_id: Optional[str] = Field(None, alias="userId")
    skip_validation: bool = Field(False, alias="skipValidation")


class StatusErrorSchema(_WireModel):
    type: StatusErrorType
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class ValidationMetadataSchema(_WireModel):
    allowed_transitions: Optional[List[str]] = Field(None, alias="allowedTransitions")
    requirements: Optional[List[str]] = None


class ValidationResultResponse(_WireModel):
    valid: bool
    errors: List[StatusErrorSchema] = Field(default_factory=list)
    warnings: List[StatusErrorSchema] = Field(default_factory=list)
    metadata: ValidationMetadataSchema = Field(default_factory=ValidationMetadataSchema)


class TransitionSchema(_WireModel):
    from_status: str = Field(..., alias="from")
    to_status: str = Field(..., alias="to")
    reason: str = ""
    data: Any = None
    user_id: str = Field(..., alias="userId")
    timestamp: datetime


class HistoryEntrySchema(_WireModel):
    to_status: str = Field(..., alias="to")
    reason: str = ""
    data: Any = None
    user_id: str = Field(..., alias="userId")
    timestamp: datetime


class TransitionResultResponse(_WireModel):
    success: bool
    transition: TransitionSchema
    history_entry: HistoryEntrySchema = Field(..., alias="historyEntry")
    type: TransitionType
    timestamp: datetime


class TransitionErrorDetail(_WireModel):
    type: StatusErrorType
    message: str


class TransitionErrorResponse(_WireModel):
    success: bool = False
    error: TransitionErrorDetail
    errors: List[StatusErrorSchema] = Field(default_factory=list)
