"""Error Hierarchy — typed, categorized exceptions for every journal failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries one RpcStatus: INVALID_ARGUMENT, NOT_FOUND or INTERNAL
    - Domain errors (400/404) are expected outcomes; StorageError (500) is critical
    - EntryNotFoundError and StorageError are never conflated
    - to_response() produces the wire envelope; no raw driver text in user-facing messages
    - Every subclass attribute (entry_id, operation, field, reason) is also in the
      envelope context, so a client can rebuild the same exception

Design Decisions:
    - Single hierarchy with MicroJournalError base: FastAPI global handler catches all
    - NotFound always maps to 404 NOT_FOUND, for update and delete alike
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from microjournal.core.domain_types import RpcStatus


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    PAGINATION = "pagination"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entry_id: str | None = None
    operation: str | None = None
    field_name: str | None = None
    reason: str | None = None
    debug_info: dict[str, Any] | None = None


class MicroJournalError(Exception):
    """Base exception for all journal errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        rpc_status: RpcStatus = RpcStatus.INTERNAL,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.rpc_status = rpc_status

    def to_response(self) -> dict:
        """Convert to standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "status": self.rpc_status.value,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "entry_id": self.context.entry_id,
                    "operation": self.context.operation,
                    "field": self.context.field_name,
                    "reason": self.context.reason,
                },
            }
        }


# ─── Caller Errors (400/404) ────────────────────────────────────

class EntryValidationError(MicroJournalError):
    """Title or content is empty."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400, RpcStatus.INVALID_ARGUMENT,
        )
        self.field = field


class InvalidPageTokenError(MicroJournalError):
    """Page token is not base-64 of a non-negative decimal offset."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.reason = reason
        super().__init__(
            f"invalid page token: {reason}",
            "INVALID_PAGE_TOKEN", ErrorCategory.PAGINATION,
            ErrorSeverity.ERROR, ctx, 400, RpcStatus.INVALID_ARGUMENT,
        )
        self.reason = reason


class MalformedIdentifierError(MicroJournalError):
    """Wire identifier cannot be parsed into an EntryId."""
    def __init__(self, raw_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.entry_id = raw_id
        super().__init__(
            f"invalid entry ID: {raw_id!r}",
            "MALFORMED_IDENTIFIER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400, RpcStatus.INVALID_ARGUMENT,
        )
        self.raw_id = raw_id


class EntryNotFoundError(MicroJournalError):
    """Referenced entry does not exist (never created, or deleted)."""
    def __init__(self, entry_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.entry_id = str(entry_id)
        super().__init__(
            f"journal entry not found: {entry_id}",
            "ENTRY_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404, RpcStatus.NOT_FOUND,
        )
        self.entry_id = entry_id


# ─── Infrastructure Errors (500) ────────────────────────────────

class StorageError(MicroJournalError):
    """Persistence engine failed for reasons unrelated to a specific row."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500, RpcStatus.INTERNAL,
        )
        self.operation = operation

