"""API Dependencies — FastAPI providers for the lifecycle service and tool dispatch.

Invariants:
    - One TaskLifecycleService per process, built in the lifespan and kept on app.state
    - Routes receive collaborators only through Depends (tests override get_task_service)
"""

from fastapi import Depends, Request

from tasktrack.services.task_lifecycle import TaskLifecycleService
from tasktrack.services.tool_dispatch import ToolDispatch


def get_task_service(request: Request) -> TaskLifecycleService:
    """FastAPI dependency for the lifecycle service."""
    service = getattr(request.app.state, "task_service", None)
    if service is None:
        raise RuntimeError("Task service not initialized")
    return service


def get_tool_dispatch(
    service: TaskLifecycleService = Depends(get_task_service),
) -> ToolDispatch:
    return ToolDispatch(service)
