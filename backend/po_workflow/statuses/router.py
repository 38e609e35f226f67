"""Status Workflow API Router.

Thin transport over StatusServicePort: list statuses, read one status, read
the initial status, list available transitions, validate a transition and
perform a transition. Persisting the returned transition and history entry
is the caller's job.
"""

import logging
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..config import Settings, get_settings
from ..dependencies import get_status_service
from ..domain.status import (
    StateTransitionError,
    StatusErrorType,
    StatusServicePort,
    ValidationResult,
)
from .schemas import (
    AvailableTransitionsResponse,
    InitialStatusResponse,
    StatusResponse,
    TransitionErrorResponse,
    TransitionRequest,
    TransitionResultResponse,
    ValidateTransitionRequest,
    ValidationResultResponse,
    WorkflowInfoResponse,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/statuses", tags=["statuses"])


# HTTP status for a rejected validation, keyed by the first error kind
VALIDATION_STATUS_CODES: Dict[StatusErrorType, int] = {
    StatusErrorType.INVALID_STATUS: 400,
    StatusErrorType.INVALID_TRANSITION: 409,
    StatusErrorType.REQUIREMENTS_NOT_MET: 422,
    StatusErrorType.VALIDATION_FAILED: 422,
    StatusErrorType.MISSING_REQUIRED_DATA: 422,
    StatusErrorType.PERMISSION_DENIED: 403,
    StatusErrorType.SYSTEM_ERROR: 500,
}


def validation_status_code(result: ValidationResult) -> int:
    if result.valid:
        return 200
    if not result.errors:
        return 422
    return VALIDATION_STATUS_CODES.get(result.errors[0].type, 422)


@router.get(
    "",
    response_model=Dict[str, StatusResponse],
    summary="List statuses",
)
def list_statuses(
    service: StatusServicePort = Depends(get_status_service),
) -> Dict[str, StatusResponse]:
    """All statuses of the workflow in declaration order."""
    return {
        name: StatusResponse.model_validate(definition.to_dict())
        for name, definition in service.get_statuses().items()
    }


# Must be registered before /{status}
@router.get("/initial", response_model=InitialStatusResponse, summary="Get initial status")
def get_initial_status(
    service: StatusServicePort = Depends(get_status_service),
) -> InitialStatusResponse:
    return InitialStatusResponse(status=service.get_initial_status())


@router.get("/workflow", response_model=WorkflowInfoResponse, summary="Get workflow information")
def get_workflow_info(
    service: StatusServicePort = Depends(get_status_service),
) -> WorkflowInfoResponse:
    return WorkflowInfoResponse.model_validate(service.get_workflow_info().to_dict())


@router.get("/{status}", response_model=StatusResponse, summary="Get status")
def get_status(
    status: str,
    service: StatusServicePort = Depends(get_status_service),
) -> StatusResponse:
    """Get a single status definition.

    Raises:
        404: Status is not part of the workflow
    """
    definition = service.get_status(status)
    if definition is None:
        raise HTTPException(status_code=404, detail=f"Status {status} not found")
    return StatusResponse.model_validate(definition.to_dict())


@router.get(
    "/{status}/transitions",
    response_model=AvailableTransitionsResponse,
    summary="Get available transitions",
)
def get_available_transitions(
    status: str,
    service: StatusServicePort = Depends(get_status_service),
) -> AvailableTransitionsResponse:
    """Statuses reachable in one move; empty for unknown or terminal statuses."""
    return AvailableTransitionsResponse(
        status=status,
        transitions=service.get_available_transitions(status),
    )


@router.post(
    "/validate",
    response_model=ValidationResultResponse,
    summary="Validate a status transition",
    responses={
        400: {"model": ValidationResultResponse, "description": "Unknown status"},
        409: {"model": ValidationResultResponse, "description": "Transition not allowed"},
        422: {"model": ValidationResultResponse, "description": "Requirements not met"},
    },
)
def validate_transition(
    request: ValidateTransitionRequest,
    service: StatusServicePort = Depends(get_status_service),
) -> JSONResponse:
    """Validate a proposed transition.

    A rejected transition is not an error of the endpoint: the response
    carries the full ValidationResult, including the structured errors and
    the allowed transitions, with a non-2xx status code.
    """
    result = service.validate_transition(request.from_status, request.to_status, request.data)
    return JSONResponse(
        status_code=validation_status_code(result),
        content=jsonable_encoder(result.to_dict()),
    )


@router.post(
    "/transition",
    response_model=TransitionResultResponse,
    summary="Perform a status transition",
    responses={422: {"model": TransitionErrorResponse, "description": "Transition rejected"}},
)
def perform_transition(
    request: TransitionRequest,
    service: StatusServicePort = Depends(get_status_service),
    settings: Settings = Depends(get_settings),
):
    """Build the transition and history entry for a purchase order.

    Nothing is stored here; the caller persists the returned records.
    """
    try:
        result = service.transition(
            request.from_status,
            request.to_status,
            reason=request.reason,
            data=request.data,
            user_id=request.user_id or settings.DEFAULT_USER_ID,
            skip_validation=request.skip_validation,
        )
    except StateTransitionError as e:
        error_type = e.errors[0].type if e.errors else StatusErrorType.VALIDATION_FAILED
        logger.warning(
            f"Transition rejected: {e.message}",
            extra={"from_status": e.from_status, "to_status": e.to_status}
        )
        return JSONResponse(
            status_code=422,
            content=jsonable_encoder({
                "success": False,
                "error": {"type": error_type.value, "message": e.message},
                "errors": [error.to_dict() for error in e.errors],
            }),
        )

    return JSONResponse(status_code=200, content=jsonable_encoder(result.to_dict()))
