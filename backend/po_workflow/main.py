"""PO Workflow Backend - Main FastAPI Application

Exposes the purchase order status workflow over HTTP:
- Status router (list/read statuses, validate and perform transitions)
- Request ID middleware and CORS
- Exception handlers returning structured JSON errors
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .dependencies import get_status_service
from .domain.status import StatusErrorType, WorkflowConfigurationError, WorkflowError
from .observability.logging_config import configure_logging
from .observability.middleware import RequestIDMiddleware
from .statuses.router import router as statuses_router


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    Builds the status service on startup so a broken workflow definition
    fails the boot instead of the first request.
    """
    service = get_status_service()
    info = service.get_workflow_info()
    logger.info(
        f"PO Workflow API starting up: workflow {info.name} v{info.version} "
        f"with {len(info.statuses)} statuses"
    )

    yield

    logger.info("PO Workflow API shutting down...")


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors with field-level details."""
    logger.warning(
        f"Validation error on {request.method} {request.url.path}",
        extra={"method": request.method, "path": request.url.path}
    )
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": {
                "type": StatusErrorType.MISSING_REQUIRED_DATA.value,
                "message": "Request validation failed",
                "details": jsonable_errors(exc),
            },
        },
    )


async def workflow_exception_handler(
    request: Request,
    exc: WorkflowError
) -> JSONResponse:
    """Handle workflow errors that escaped the routers."""
    if isinstance(exc, WorkflowConfigurationError):
        logger.error(
            f"Workflow configuration error on {request.method} {request.url.path}",
            exc_info=exc
        )
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        error_type = StatusErrorType.SYSTEM_ERROR
    else:
        logger.warning(f"Workflow error on {request.method} {request.url.path}: {exc}")
        status_code = status.HTTP_400_BAD_REQUEST
        error_type = StatusErrorType.VALIDATION_FAILED

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": {"type": error_type.value, "message": str(exc)},
        },
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle uncaught exceptions.

    Full details are logged but not exposed to the client.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": {
                "type": StatusErrorType.SYSTEM_ERROR.value,
                "message": "An unexpected error occurred. Please try again later.",
            },
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the configured FastAPI application."""
    settings = settings or get_settings()

    configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

    docs_enabled = not settings.is_production
    app = FastAPI(
        title=settings.APP_NAME,
        description="Purchase order status workflow: statuses, transition validation and history records",
        version="1.0.0",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )

    # Request ID middleware is added last so it wraps CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(WorkflowError, workflow_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(statuses_router, prefix=settings.API_PREFIX)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, Any]:
        return {
            "name": settings.APP_NAME,
            "version": "1.0.0",
            "status": "running",
            "docs": "/docs" if docs_enabled else None,
        }

    @app.get("/health", tags=["Observability"])
    def health() -> dict[str, Any]:
        info = get_status_service().get_workflow_info()
        return {"status": "ok", "workflow": info.name, "version": info.version}

    return app


app = create_app()


# =============================================================================
# DEVELOPMENT SERVER
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    current = get_settings()
    uvicorn.run(
        "po_workflow.main:app",
        host="0.0.0.0",
        port=8000,
        reload=current.ENVIRONMENT == "development",
        log_level=current.LOG_LEVEL.lower(),
    )
