"""Tool Results — tagged result variants returned by task tool handlers.

Invariants:
    - Every handler returns exactly one of TaskResult, TaskListResult,
      MessageResult, ErrorResult
    - to_dict() always carries "status" ("ok" | "error"); ok results also carry "kind"

Design Decisions:
    - Frozen dataclasses over bare dicts: callers match on the type instead of
      probing dict keys, and the delete confirmation is a typed message, not a
      hand-built JSON string
"""

from dataclasses import dataclass

from tasktrack.core.domain_types import Task
from tasktrack.core.errors import TaskTrackError


@dataclass(frozen=True)
class TaskResult:
    task: Task

    def to_dict(self) -> dict:
        return {"status": "ok", "kind": "task", "task": self.task.to_dict()}


@dataclass(frozen=True)
class TaskListResult:
    tasks: tuple[Task, ...]

    def to_dict(self) -> dict:
        return {
            "status": "ok",
            "kind": "tasks",
            "count": len(self.tasks),
            "tasks": [t.to_dict() for t in self.tasks],
        }


@dataclass(frozen=True)
class MessageResult:
    message: str
    task_id: str | None = None

    def to_dict(self) -> dict:
        return {
            "status": "ok", "kind": "message",
            "message": self.message, "id": self.task_id,
        }


@dataclass(frozen=True)
class ErrorResult:
    error_code: str
    message: str

    @classmethod
    def from_error(cls, exc: TaskTrackError) -> "ErrorResult":
        return cls(error_code=exc.code, message=exc.message)

    def to_dict(self) -> dict:
        return {
            "status": "error",
            "error_code": self.error_code,
            "message": self.message,
        }


ToolResult = TaskResult | TaskListResult | MessageResult | ErrorResult
