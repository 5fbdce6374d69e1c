"""Error Handlers — turn every failure into the journal's JSON error envelope.

Invariants:
    - MicroJournalError → its own to_response() body and http_status
    - Validation, invalid page token, malformed id → 400 INVALID_ARGUMENT
    - Entry not found → 404 NOT_FOUND on every operation
    - StorageError → 500 INTERNAL
    - RequestValidationError (undecodable body, pageSize outside int32) → 400 INVALID_ARGUMENT
    - Anything else → 500 INTERNAL with a fixed message; exception text stays in the logs

Design Decisions:
    - Caller mistakes log at WARNING, server faults at ERROR
    - Handlers are plain module functions so tests can call them directly
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from microjournal.core.domain_types import RpcStatus
from microjournal.core.errors import ErrorCategory, ErrorSeverity, MicroJournalError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MicroJournalError, handle_journal_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_journal_error(request: Request, exc: MicroJournalError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{type(exc).__name__} on {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "entry_id": exc.context.entry_id,
            "operation": exc.context.operation,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    logger.warning(
        f"Rejected request body on {request.url.path}: {exc.errors()}",
        extra={"error_code": "REQUEST_VALIDATION_ERROR", "path": request.url.path},
    )
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    return _envelope(
        status.HTTP_400_BAD_REQUEST,
        "REQUEST_VALIDATION_ERROR",
        "Invalid request data",
        RpcStatus.INVALID_ARGUMENT,
        ErrorCategory.VALIDATION,
        ErrorSeverity.ERROR,
        details=details,
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}: {exc}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An unexpected error occurred",
        RpcStatus.INTERNAL,
        ErrorCategory.INTERNAL,
        ErrorSeverity.CRITICAL,
    )


def _envelope(
    http_status: int,
    code: str,
    message: str,
    rpc_status: RpcStatus,
    category: ErrorCategory,
    severity: ErrorSeverity,
    **extra,
) -> JSONResponse:
    body = {
        "code": code,
        "message": message,
        "status": rpc_status.value,
        "category": category.value,
        "severity": severity.value,
        **extra,
    }
    return JSONResponse(status_code=http_status, content={"error": body})
