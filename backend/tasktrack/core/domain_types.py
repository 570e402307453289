"""Domain Types — the Task entity, its status domain, and field bounds.

Invariants:
    - Task is frozen: a change is a new value, never an in-place mutation
    - id and created_at never change after creation
    - updated_at >= created_at
    - Status tokens on the wire and on disk are NEW, IN_PROGRESS, DONE

Design Decisions:
    - NewType over dataclass wrapper for TaskId: zero runtime cost, full type-checker support
    - str Enum for TaskStatus: serializes to JSON without custom encoders
    - to_dict/from_dict own the camelCase wire shape so the store and the
      tool adapter agree on one representation
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

TaskId = NewType("TaskId", str)


# ─── Bounds ──────────────────────────────────────────────────────

TITLE_MAX_LENGTH: int = 200
DESCRIPTION_MAX_LENGTH: int = 1000


# ─── Enums ───────────────────────────────────────────────────────

class TaskStatus(str, Enum):
    """Task lifecycle states — NEW → IN_PROGRESS → DONE (terminal)."""
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    @classmethod
    def parse(cls, raw: str) -> "TaskStatus":
        """Case-insensitive token lookup. Raises ValueError on unknown tokens."""
        try:
            return cls(raw.strip().upper())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValueError(
                f"Invalid status value '{raw}'. Allowed values are: {allowed}",
            ) from None


# ─── Entity ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Task:
    """One tracked unit of work. Pass-by-value snapshot of the stored record."""

    id: TaskId
    title: str
    description: str | None
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Wire/document shape (camelCase timestamps, ISO-8601)."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Inverse of to_dict. Raises KeyError/ValueError on malformed records."""
        return cls(
            id=TaskId(str(data["id"])),
            title=str(data["title"]),
            description=data.get("description"),
            status=TaskStatus(data["status"]),
            created_at=datetime.fromisoformat(data["createdAt"]),
            updated_at=datetime.fromisoformat(data["updatedAt"]),
        )
