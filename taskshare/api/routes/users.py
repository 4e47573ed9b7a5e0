"""User Routes — profile of the requester as provisioned by the identity flow.

Invariants:
    - Read-only: users are never created here
    - A verified requester without an app_users row gets 404
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from taskshare.api.dependencies import get_requester_id, get_user_directory
from taskshare.core.errors import ResourceNotFoundError
from taskshare.infrastructure.user_directory import SqlUserDirectory
from taskshare.schemas.user import MeResponse

router = APIRouter(prefix="/api/v1", tags=["users"])


@router.get("/me", response_model=MeResponse)
async def me(
    requester_id: UUID = Depends(get_requester_id),
    users: SqlUserDirectory = Depends(get_user_directory),
):
    user = await users.get_by_id(requester_id)
    if user is None:
        raise ResourceNotFoundError("User", str(requester_id))
    return MeResponse(id=user.id, email=user.email, display_name=user.display_name)
