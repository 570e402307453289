"""Task Tool Handlers — read_tasks and write_tasks on top of the lifecycle service.

Invariants:
    - Handlers never touch the store directly; every call goes through TaskLifecycleService
    - Malformed tool input returns ErrorResult (VALIDATION_ERROR / INVALID_OPERATION)
    - A field present with a non-string value is a VALIDATION_ERROR, never read as absent
    - Domain errors from the service propagate to ToolDispatch, which converts them

Design Decisions:
    - Input arrives as a loosely-typed dict from the model, so each handler
      checks presence and shape itself instead of relying on pydantic
    - Status tokens accepted case-insensitively ("in_progress" works)
"""

from tasktrack.core.domain_types import TaskStatus
from tasktrack.services.define_task_tools import WRITE_OPERATIONS
from tasktrack.services.task_lifecycle import TaskLifecycleService
from tasktrack.services.tool_results import (
    ErrorResult, MessageResult, TaskListResult, TaskResult, ToolResult,
)


class TaskToolHandlers:
    """Agent-facing task tools — one method per tool."""

    def __init__(self, service: TaskLifecycleService):
        self.service = service

    def read_tasks(self, input_data: dict) -> ToolResult:
        """One task when id is given, otherwise a (filtered) list."""
        task_id, error = _string_field(input_data, "id")
        if error:
            return error
        if task_id:
            return TaskResult(self.service.get(task_id))

        status, error = _parse_status(input_data.get("status"))
        if error:
            return error
        return TaskListResult(tuple(self.service.list(status)))

    def write_tasks(self, input_data: dict) -> ToolResult:
        """Route on 'operation' to create / update_status / delete."""
        operation = input_data.get("operation")
        operation = operation.strip().lower() if isinstance(operation, str) else ""
        if operation == "create":
            return self._create(input_data)
        if operation == "update_status":
            return self._update_status(input_data)
        if operation == "delete":
            return self._delete(input_data)
        return ErrorResult(
            "INVALID_OPERATION",
            "Operation is required. Allowed values: " + ", ".join(WRITE_OPERATIONS),
        )

    def _create(self, input_data: dict) -> ToolResult:
        title, error = _string_field(input_data, "title")
        if error:
            return error
        if not title:
            return _missing("title", "create")
        description, error = _string_field(input_data, "description")
        if error:
            return error
        return TaskResult(self.service.create(title, description))

    def _update_status(self, input_data: dict) -> ToolResult:
        task_id, error = _required_id(input_data, "update_status")
        if error:
            return error
        raw_status = input_data.get("status")
        if raw_status is None or (isinstance(raw_status, str) and not raw_status.strip()):
            return _missing("status", "update_status")
        target, error = _parse_status(raw_status)
        if error:
            return error
        return TaskResult(self.service.update_status(task_id, target))

    def _delete(self, input_data: dict) -> ToolResult:
        task_id, error = _required_id(input_data, "delete")
        if error:
            return error
        self.service.delete(task_id)
        return MessageResult("Task deleted successfully", task_id)


def _string_field(
    input_data: dict, key: str,
) -> tuple[str | None, ErrorResult | None]:
    """Stripped string value; None when absent or blank; error when not a string."""
    value = input_data.get(key)
    if value is None:
        return None, None
    if not isinstance(value, str):
        return None, ErrorResult("VALIDATION_ERROR", f"{key} must be a string")
    return value.strip() or None, None


def _required_id(
    input_data: dict, operation: str,
) -> tuple[str | None, ErrorResult | None]:
    task_id, error = _string_field(input_data, "id")
    if error:
        return None, error
    if not task_id:
        return None, _missing("id", operation)
    return task_id, None


def _parse_status(raw: object) -> tuple[TaskStatus | None, ErrorResult | None]:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None, None
    if not isinstance(raw, str):
        return None, ErrorResult("VALIDATION_ERROR", "status must be a string")
    try:
        return TaskStatus.parse(raw), None
    except ValueError as e:
        return None, ErrorResult("VALIDATION_ERROR", str(e))


def _missing(field: str, operation: str) -> ErrorResult:
    return ErrorResult(
        "VALIDATION_ERROR",
        f"'{field}' is required for {operation} operation",
    )
