"""Share Routes — list, grant and revoke task shares.

Invariants:
    - Listing allowed for owner and editor; grant/revoke for owner only
    - Grant is an upsert; revoke of a missing share still returns 204
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from taskshare.api.dependencies import get_requester_id, get_task_service
from taskshare.schemas.share import ShareRequest, SharedUserResponse
from taskshare.services.task_service import TaskService

router = APIRouter(prefix="/api/v1/tasks", tags=["shares"])


@router.get("/{task_id}/share", response_model=list[SharedUserResponse])
async def list_shares(
    task_id: UUID,
    requester_id: UUID = Depends(get_requester_id),
    service: TaskService = Depends(get_task_service),
):
    shares = await service.list_shares(task_id, requester_id)
    return [SharedUserResponse.from_share(s) for s in shares]


@router.post("/{task_id}/share", status_code=status.HTTP_204_NO_CONTENT)
async def share_task(
    task_id: UUID,
    body: ShareRequest,
    requester_id: UUID = Depends(get_requester_id),
    service: TaskService = Depends(get_task_service),
):
    """Grant (or change) a user's role on the task."""
    await service.share_task(task_id, requester_id, body.user_email, body.role)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{task_id}/share", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_share(
    task_id: UUID,
    user_email: str = Query(..., min_length=3, max_length=320),
    requester_id: UUID = Depends(get_requester_id),
    service: TaskService = Depends(get_task_service),
):
    await service.revoke_share(task_id, requester_id, user_email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
