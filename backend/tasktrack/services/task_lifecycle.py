"""Task Lifecycle Service — create, read, list, transition, and delete tasks.

Invariants:
    - The only component that enforces domain rules (existence, transitions, field bounds)
    - New tasks always start in NEW with created_at == updated_at
    - A status change keeps id, title, description, created_at and strictly
      increases updated_at
    - TaskNotFoundError / InvalidTransitionError are expected outcomes;
      StoreError propagates unchanged

Design Decisions:
    - update_status validates inside store.update(): the transition decision is
      made against the status that is actually overwritten, so a concurrent
      change or delete cannot slip between check and write
    - delete relies on delete_by_id's boolean instead of exists_by_id + delete:
      one critical section, same NotFound semantics
    - clock and id_factory injectable so tests control time and identity
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import uuid4

from tasktrack.core.domain_types import (
    DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, Task, TaskId, TaskStatus,
)
from tasktrack.core.enforce_transitions import can_transition
from tasktrack.core.errors import (
    InvalidTransitionError, TaskNotFoundError, TaskValidationError,
)
from tasktrack.core.repository_protocols import TaskRepository

logger = logging.getLogger(__name__)

_TICK = timedelta(microseconds=1)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_task_id() -> TaskId:
    return TaskId(str(uuid4()))


class TaskLifecycleService:
    """Composes the task store with the transition rules."""

    def __init__(
        self,
        store: TaskRepository,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], TaskId] | None = None,
    ):
        self._store = store
        self._clock = clock or _utc_now
        self._id_factory = id_factory or _new_task_id

    def create(self, title: str, description: str | None = None) -> Task:
        title = _validate_title(title)
        description = _validate_description(description)
        now = self._clock()
        task = Task(
            id=self._id_factory(),
            title=title,
            description=description,
            status=TaskStatus.NEW,
            created_at=now,
            updated_at=now,
        )
        stored = self._store.save(task)
        logger.info("Task created", extra={"task_id": stored.id})
        return stored

    def get(self, task_id: str) -> Task:
        """Resolve task_id or raise TaskNotFoundError."""
        task = self._store.find_by_id(TaskId(task_id))
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def list(self, status: TaskStatus | None = None) -> list[Task]:
        """All tasks, or those in status. Oldest first, ties broken by id."""
        if status is None:
            tasks = self._store.find_all()
        else:
            tasks = self._store.find_by_status(status)
        return sorted(tasks, key=lambda t: (t.created_at, t.id))

    def update_status(self, task_id: str, target: TaskStatus) -> Task:
        """Move task_id to target if the transition table allows it."""

        def apply(current: Task) -> Task:
            if not can_transition(current.status, target):
                logger.warning(
                    f"Rejected transition {current.status.value} -> {target.value}",
                    extra={"task_id": current.id},
                )
                raise InvalidTransitionError(current.status, target)
            return replace(
                current,
                status=target,
                updated_at=self._next_timestamp(current.updated_at),
            )

        updated = self._store.update(TaskId(task_id), apply)
        if updated is None:
            raise TaskNotFoundError(task_id)
        logger.info(
            "Task status changed",
            extra={"task_id": updated.id, "status": updated.status.value},
        )
        return updated

    def delete(self, task_id: str) -> None:
        if not self._store.delete_by_id(TaskId(task_id)):
            raise TaskNotFoundError(task_id)
        logger.info("Task deleted", extra={"task_id": task_id})

    def _next_timestamp(self, previous: datetime) -> datetime:
        """Now, nudged forward if the clock has not advanced past previous."""
        now = self._clock()
        return now if now > previous else previous + _TICK


def _validate_title(title: str | None) -> str:
    stripped = (title or "").strip()
    if not stripped:
        raise TaskValidationError("Title is required and cannot be blank", "title")
    if len(stripped) > TITLE_MAX_LENGTH:
        raise TaskValidationError(
            f"Title must be between 1 and {TITLE_MAX_LENGTH} characters", "title",
        )
    return stripped


def _validate_description(description: str | None) -> str | None:
    if description is None or not description.strip():
        return None
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise TaskValidationError(
            f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters",
            "description",
        )
    return description
