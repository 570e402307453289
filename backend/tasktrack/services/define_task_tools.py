"""Task Tool Schemas — Anthropic Tool Use format for the agent-facing task tools.

Invariants:
    - read_tasks never mutates; write_tasks covers every mutation
    - Status tokens in schemas match TaskStatus values exactly
    - Field bounds match core/domain_types

Design Decisions:
    - Two aggregated tools (read/write) instead of one per operation: fewer tools
      in the model's context, and the operation enum documents the workflow
"""

from tasktrack.core.domain_types import (
    DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, TaskStatus,
)

_STATUS_VALUES = [s.value for s in TaskStatus]

WRITE_OPERATIONS = ("create", "update_status", "delete")

TOOLS_TASKS = [
    {
        "name": "read_tasks",
        "description": (
            "Retrieves task information from the task tracker. "
            "If 'id' is provided, retrieves a specific task by its UUID. "
            "If 'id' is omitted, lists all tasks, optionally filtered by "
            "status (NEW, IN_PROGRESS, or DONE)."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "id": {
                    "type": "string",
                    "description": "Task ID (UUID). Omit to list tasks.",
                },
                "status": {
                    "type": "string",
                    "enum": _STATUS_VALUES,
                    "description": "Status filter, only used when listing",
                },
            },
        },
    },
    {
        "name": "write_tasks",
        "description": (
            "Performs write operations on tasks. "
            "'create' makes a new task with status NEW (requires 'title'). "
            "'update_status' changes status (requires 'id' and 'status'); "
            "allowed: NEW->IN_PROGRESS, IN_PROGRESS->DONE, IN_PROGRESS->NEW. "
            "DONE is terminal. 'delete' removes a task (requires 'id')."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "operation": {
                    "type": "string",
                    "enum": list(WRITE_OPERATIONS),
                    "description": "Which write to perform",
                },
                "id": {
                    "type": "string",
                    "description": "Task ID, required for update_status and delete",
                },
                "title": {
                    "type": "string",
                    "minLength": 1,
                    "maxLength": TITLE_MAX_LENGTH,
                    "description": "Task title, required for create",
                },
                "description": {
                    "type": "string",
                    "maxLength": DESCRIPTION_MAX_LENGTH,
                    "description": "Optional task description for create",
                },
                "status": {
                    "type": "string",
                    "enum": _STATUS_VALUES,
                    "description": "Target status, required for update_status",
                },
            },
            "required": ["operation"],
        },
    },
]
