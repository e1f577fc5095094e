"""Error Handlers — map exceptions that escape a route onto the dashboard's response shapes.

Invariants:
    - DashboardError → its REST envelope, logged at the level of its severity
    - Storage and internal errors never carry operation/target context in the body;
      internal errors (e.g. IllegalTransitionError) are reduced to the generic 500
    - RequestValidationError → 400 in the ActionStateResponse shape: status "invalid",
      errors keyed by parameter name, the same map form submissions return
    - Exception (catch-all) → generic 500, traceback only in the log

Design Decisions:
    - Form field errors never reach these handlers: the action pipeline returns them
      as an INVALID outcome. Only malformed query/path parameters land here
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from dashboard.core.errors import DashboardError, ErrorCategory, ErrorSeverity
from dashboard.schemas.responses import ActionStateResponse

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request data"
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"

_LOG_LEVEL = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}

_CONTEXT_HIDDEN = frozenset({ErrorCategory.DATABASE, ErrorCategory.INTERNAL})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DashboardError, dashboard_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def dashboard_error_handler(request: Request, exc: DashboardError) -> JSONResponse:
    logger.log(
        _LOG_LEVEL[exc.severity],
        f"{exc.code} on {request.url.path}: {exc.message}",
        exc_info=exc if exc.category is ErrorCategory.INTERNAL else None,
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "operation": exc.context.operation,
            "target_id": exc.context.target_id,
        },
    )
    if exc.category is ErrorCategory.INTERNAL:
        return _internal_error_response()
    body = exc.to_response()
    if exc.category in _CONTEXT_HIDDEN:
        body["error"].pop("context", None)
    return JSONResponse(status_code=exc.http_status, content=body)


async def request_validation_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    errors = parameter_errors(exc)
    logger.info(
        f"Rejected parameters on {request.url.path}: {sorted(errors)}",
        extra={"path": request.url.path, "outcome": "invalid"},
    )
    body = ActionStateResponse(
        status="invalid", message=INVALID_REQUEST_MESSAGE, errors=errors,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(mode="json"),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return _internal_error_response()


def parameter_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    """Group errors by parameter name (last loc element), e.g. ("query", "page") -> "page"."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        name = str(error["loc"][-1]) if error["loc"] else "__root__"
        errors.setdefault(name, []).append(error["msg"])
    return errors


def _internal_error_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": INTERNAL_ERROR_MESSAGE,
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )
