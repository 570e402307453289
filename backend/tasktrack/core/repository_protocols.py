"""Boundary Protocols — contract between the lifecycle service and the task store.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Every method is one atomic critical section in the implementation
    - find_by_id/update return None for missing ids (no exception at this layer)

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass any fake store
    - update() takes a change function so read-modify-write happens under a
      single lock acquisition while the policy stays in the service
"""

from typing import Callable, Protocol

from tasktrack.core.domain_types import Task, TaskId, TaskStatus


TaskChange = Callable[[Task], Task]


class TaskRepository(Protocol):
    """Contract for task persistence — implemented by infrastructure."""
    def save(self, task: Task) -> Task: ...
    def find_by_id(self, task_id: TaskId) -> Task | None: ...
    def find_all(self) -> list[Task]: ...
    def find_by_status(self, status: TaskStatus) -> list[Task]: ...
    def exists_by_id(self, task_id: TaskId) -> bool: ...
    def delete_by_id(self, task_id: TaskId) -> bool: ...
    def update(self, task_id: TaskId, change: TaskChange) -> Task | None: ...
