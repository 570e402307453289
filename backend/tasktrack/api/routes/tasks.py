"""Task Routes — REST surface over TaskLifecycleService.

Invariants:
    - User input is validated by Pydantic before reaching the route handler
    - Domain errors are raised, never turned into responses here (error_handlers.py does it)
    - POST returns 201 with a Location header; DELETE returns 204

Design Decisions:
    - Plain def handlers, not async: the store blocks on file IO, so FastAPI runs
      each request on its worker thread pool (thread-per-request)
"""

from fastapi import APIRouter, Depends, Query, Request, Response, status

from tasktrack.api.dependencies import get_task_service
from tasktrack.core.domain_types import TaskStatus
from tasktrack.schemas.task import StatusUpdate, TaskCreate, TaskResponse
from tasktrack.services.task_lifecycle import TaskLifecycleService

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


@router.post(
    "", response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_task(
    body: TaskCreate,
    request: Request,
    response: Response,
    service: TaskLifecycleService = Depends(get_task_service),
):
    """Create a new task in status NEW."""
    task = service.create(body.title, body.description)
    response.headers["Location"] = str(
        request.url_for("get_task", task_id=task.id),
    )
    return TaskResponse.from_task(task)


@router.get("", response_model=list[TaskResponse])
def list_tasks(
    status_filter: TaskStatus | None = Query(None, alias="status"),
    service: TaskLifecycleService = Depends(get_task_service),
):
    """List tasks, optionally filtered by status."""
    return [TaskResponse.from_task(t) for t in service.list(status_filter)]


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    service: TaskLifecycleService = Depends(get_task_service),
):
    return TaskResponse.from_task(service.get(task_id))


@router.patch("/{task_id}/status", response_model=TaskResponse)
def update_task_status(
    task_id: str,
    body: StatusUpdate,
    service: TaskLifecycleService = Depends(get_task_service),
):
    """Move a task along the NEW → IN_PROGRESS → DONE workflow."""
    return TaskResponse.from_task(service.update_status(task_id, body.status))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    service: TaskLifecycleService = Depends(get_task_service),
):
    service.delete(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
