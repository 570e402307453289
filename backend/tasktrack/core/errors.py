"""Error Hierarchy — typed, categorized exceptions for all task-tracking failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are expected outcomes; StoreError (503) is critical
    - Every REST error body comes from error_envelope(): status, reason, code,
      message, category, severity, timestamp (tool envelope lives in
      services/tool_results.py)
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TaskTrackError base: FastAPI global handler catches all
      (uniform error shape)
    - ErrorContext carries the task id and, for failures inside an agent tool
      call, the tool name
    - InvalidTransitionError builds its own message from the transition table so
      the terminal/non-terminal distinction stays diagnostic only
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from http import HTTPStatus

from tasktrack.core.domain_types import TaskStatus
from tasktrack.core.enforce_transitions import (
    allowed_transitions, format_allowed, is_terminal,
)


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where the error happened."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    task_id: str | None = None
    tool_name: str | None = None


def error_envelope(
    http_status: int,
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    context: ErrorContext | None = None,
    errors: list[dict] | None = None,
) -> dict:
    """REST error body shared by domain, validation and catch-all handlers."""
    context = context or ErrorContext()
    body = {
        "status": http_status,
        "reason": HTTPStatus(http_status).phrase,
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
        "timestamp": context.timestamp.isoformat(),
        "context": {"task_id": context.task_id, "tool_name": context.tool_name},
    }
    if errors is not None:
        body["errors"] = errors
    return {"error": body}


class TaskTrackError(Exception):
    """Base exception for all task-tracking errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return error_envelope(
            self.http_status, self.code, self.message,
            self.category, self.severity, self.context,
        )


# ─── Domain Errors (400-level) ──────────────────────────────────

class TaskValidationError(TaskTrackError):
    """Input failed a field constraint the boundary did not catch."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class TaskNotFoundError(TaskTrackError):
    """Id does not resolve to any stored task."""
    def __init__(self, task_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.task_id = task_id
        super().__init__(
            f"Task not found with id: {task_id}",
            "TASK_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.task_id = task_id


class InvalidTransitionError(TaskTrackError):
    """Requested status edge is not permitted from the current status."""
    def __init__(
        self,
        current: TaskStatus,
        target: TaskStatus,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            _transition_message(current, target),
            "INVALID_STATUS_TRANSITION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.current = current
        self.target = target
        self.allowed = allowed_transitions(current)


def _transition_message(current: TaskStatus, target: TaskStatus) -> str:
    if is_terminal(current):
        return (
            "Cannot change status of completed task. "
            f"Current status: {current.value}"
        )
    return (
        f"Invalid status transition from {current.value} to {target.value}. "
        f"Allowed transitions: {format_allowed(current)}"
    )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(TaskTrackError):
    """Reading or writing the task document failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Task store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
