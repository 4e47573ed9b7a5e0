"""Task Routes — CRUD over tasks with the conditional-write (ETag / If-Match) contract.

Invariants:
    - GET one / POST / PATCH responses carry ETag: W/"<version>"
    - PATCH requires If-Match; absent -> 428, malformed -> 400, stale -> 412
    - Routes only translate HTTP <-> service calls; all rules live in TaskService/core

Design Decisions:
    - If-Match decoded here (protocol concern) and handed to the service as an int
    - DELETE returns 204 with an empty body
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Header, Query, Response, status

from taskshare.api.dependencies import get_requester_id, get_task_service
from taskshare.core.domain_types import TaskPriority, TaskStatus
from taskshare.core.etag import format_weak, parse_if_match
from taskshare.core.task_query import TaskQuery
from taskshare.schemas.task import TaskCreate, TaskPatchRequest, TaskResponse
from taskshare.services.task_service import TaskService

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    q: str | None = Query(None, max_length=200),
    status_filter: TaskStatus | None = Query(None, alias="status"),
    priority: TaskPriority | None = Query(None),
    requester_id: UUID = Depends(get_requester_id),
    service: TaskService = Depends(get_task_service),
):
    """List tasks the requester owns or has been shared."""
    tasks = await service.list_tasks(
        requester_id, TaskQuery.build(q, status_filter, priority),
    )
    return [TaskResponse.from_task(t) for t in tasks]


@router.post(
    "", response_model=TaskResponse, status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: TaskCreate,
    response: Response,
    requester_id: UUID = Depends(get_requester_id),
    service: TaskService = Depends(get_task_service),
):
    """Create a task owned by the requester."""
    task = await service.create_task(requester_id, body.to_state())
    response.headers["ETag"] = format_weak(task.version)
    response.headers["Location"] = f"{router.prefix}/{task.id}"
    return TaskResponse.from_task(task)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: UUID,
    response: Response,
    requester_id: UUID = Depends(get_requester_id),
    service: TaskService = Depends(get_task_service),
):
    task = await service.get_task(task_id, requester_id)
    response.headers["ETag"] = format_weak(task.version)
    return TaskResponse.from_task(task)


@router.patch("/{task_id}", response_model=TaskResponse)
async def patch_task(
    task_id: UUID,
    body: TaskPatchRequest,
    response: Response,
    if_match: str | None = Header(None, alias="If-Match"),
    requester_id: UUID = Depends(get_requester_id),
    service: TaskService = Depends(get_task_service),
):
    """Apply a sparse update guarded by If-Match."""
    expected_version = parse_if_match(if_match)
    task = await service.patch_task(
        task_id, requester_id, expected_version, body.to_patch(),
    )
    response.headers["ETag"] = format_weak(task.version)
    return TaskResponse.from_task(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: UUID,
    requester_id: UUID = Depends(get_requester_id),
    service: TaskService = Depends(get_task_service),
):
    await service.delete_task(task_id, requester_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
