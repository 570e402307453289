"""Task Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - TaskCreate.title: 1-200 chars after stripping, non-empty
    - TaskCreate.description: optional, max 1000 chars
    - StatusUpdate.status: one of NEW, IN_PROGRESS, DONE (exact tokens)
    - TaskResponse serializes createdAt/updatedAt (camelCase wire contract)
    - Timestamps render exactly as Task.to_dict does, so REST and tools agree

Design Decisions:
    - field_validator for side-effect-free transforms (strip) — keeps models pure
    - serialization via aliases so Python code keeps snake_case names
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from tasktrack.core.domain_types import (
    DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, Task, TaskStatus,
)


class TaskCreate(BaseModel):
    """Task creation — validates title length and whitespace."""
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required and cannot be blank")
        return v


class StatusUpdate(BaseModel):
    """Status change request."""
    status: TaskStatus


class TaskResponse(BaseModel):
    """Task response — public-facing task data."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str | None = None
    status: TaskStatus
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        """Same ISO-8601 rendering as Task.to_dict (stored document, tool results)."""
        return value.isoformat()

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
