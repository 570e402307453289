"""Task Store — the whole task set as one JSON document, guarded by a reader/writer lock.

Invariants:
    - Every public method is exactly one lock acquisition (atomic w.r.t. other calls)
    - Reads take the shared lock; save/delete_by_id/update take the exclusive lock
    - Mutations persist the full document before returning (no write-behind)
    - Writes are crash-atomic: temp file in the same directory, fsync, os.replace
    - Missing document on first use is not an error: an empty {} is written
    - Any OSError or undecodable content surfaces as StoreError (never swallowed)
    - Every document key equals its record's id; a mismatch is a StoreError on load

Design Decisions:
    - Whole-document read-modify-write: simple and correct under the store lock,
      sized for small collections
    - Document is re-read on every call rather than cached: the file stays the
      single source of truth
    - update(task_id, change) closes the check-then-act window for status
      changes: the change function runs inside the write lock
    - Store is policy-free: it never inspects status transitions
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from tasktrack.core.domain_types import Task, TaskId, TaskStatus
from tasktrack.core.errors import StoreError
from tasktrack.core.repository_protocols import TaskChange
from tasktrack.infrastructure.rw_lock import ReadWriteLock

logger = logging.getLogger(__name__)

_Document = dict[str, Task]


class JsonTaskStore:
    """Durable, concurrency-safe task collection keyed by id."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = ReadWriteLock()
        with self._lock.write_locked():
            self._initialize()

    # ─── Public API ──────────────────────────────────────────────

    def save(self, task: Task) -> Task:
        """Upsert by id. Returns the stored value."""
        with self._lock.write_locked():
            tasks = self._load()
            tasks[task.id] = task
            self._persist(tasks)
        logger.debug("Saved task", extra={"task_id": task.id})
        return task

    def find_by_id(self, task_id: TaskId) -> Task | None:
        with self._lock.read_locked():
            return self._load().get(task_id)

    def find_all(self) -> list[Task]:
        with self._lock.read_locked():
            return list(self._load().values())

    def find_by_status(self, status: TaskStatus) -> list[Task]:
        with self._lock.read_locked():
            return [t for t in self._load().values() if t.status == status]

    def exists_by_id(self, task_id: TaskId) -> bool:
        with self._lock.read_locked():
            return task_id in self._load()

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._load())

    def delete_by_id(self, task_id: TaskId) -> bool:
        """Remove if present. Returns whether a removal occurred."""
        with self._lock.write_locked():
            tasks = self._load()
            if tasks.pop(task_id, None) is None:
                return False
            self._persist(tasks)
        logger.debug("Deleted task", extra={"task_id": task_id})
        return True

    def update(self, task_id: TaskId, change: TaskChange) -> Task | None:
        """Atomic read-modify-write of one record.

        change(current) runs while the write lock is held. Its return value
        replaces the record; if it raises, nothing is written and the
        exception propagates. Returns None when task_id is absent.
        """
        with self._lock.write_locked():
            tasks = self._load()
            current = tasks.get(task_id)
            if current is None:
                return None
            updated = change(current)
            if updated.id != current.id:
                raise ValueError("change function must not alter the task id")
            tasks[task_id] = updated
            self._persist(tasks)
        logger.debug("Updated task", extra={"task_id": task_id})
        return updated

    def health_check(self) -> bool:
        """Readiness check: the document loads cleanly."""
        try:
            self.count()
            return True
        except StoreError as e:
            logger.error(f"Task store health check failed: {e.message}")
            return False

    # ─── Document IO (caller holds the lock) ─────────────────────

    def _initialize(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create data directory: {e}")
            raise StoreError("could not create data directory", "init") from e
        if not self.path.exists():
            self._persist({})
            logger.info(f"Initialized task document at {self.path}")
        else:
            logger.info(f"Task store ready at {self.path}")

    def _load(self) -> _Document:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load task document: {e}")
            raise StoreError("could not read task document", "load") from e
        if not isinstance(raw, dict):
            raise StoreError("task document is not a JSON object", "load")
        try:
            tasks = {key: Task.from_dict(record) for key, record in raw.items()}
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed task record: {e}")
            raise StoreError("task document contains a malformed record", "load") from e
        for key, task in tasks.items():
            if key != task.id:
                logger.error(f"Task record keyed {key!r} carries id {task.id!r}")
                raise StoreError("task document key does not match record id", "load")
        return tasks

    def _persist(self, tasks: _Document) -> None:
        payload: dict[str, Any] = {key: t.to_dict() for key, t in tasks.items()}
        try:
            _atomic_write_text(
                self.path, json.dumps(payload, ensure_ascii=False, indent=2),
            )
        except OSError as e:
            logger.error(f"Failed to save task document: {e}")
            raise StoreError("could not write task document", "save") from e


def _atomic_write_text(path: Path, content: str) -> None:
    """Write content beside path, then rename over it."""
    fd, tmp_path = tempfile.mkstemp(
        dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
