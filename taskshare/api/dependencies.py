"""Request Dependencies — requester identity and per-request TaskService.

Invariants:
    - The requester id comes ONLY from the header set by the upstream identity
      resolver (settings.identity_header); missing or malformed -> 401
    - One TaskService (and one AsyncSession) per request; nothing shared between requests

Design Decisions:
    - No token verification here: the identity resolver in front of this service
      verifies credentials and forwards the subject id
    - Identity is a plain UUID threaded into every service call, never ambient state
"""

from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from taskshare.config import get_settings
from taskshare.core.errors import AuthenticationError
from taskshare.infrastructure.database import get_db
from taskshare.infrastructure.share_repository import SqlShareRepository
from taskshare.infrastructure.task_repository import SqlTaskRepository
from taskshare.infrastructure.user_directory import SqlUserDirectory
from taskshare.services.task_service import TaskService


def get_requester_id(request: Request) -> UUID:
    """Verified subject id forwarded by the identity resolver."""
    raw = request.headers.get(get_settings().identity_header)
    if not raw:
        raise AuthenticationError()
    try:
        return UUID(raw.strip())
    except ValueError:
        raise AuthenticationError("Invalid requester identity")


def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(
        SqlTaskRepository(db), SqlShareRepository(db), SqlUserDirectory(db),
    )


def get_user_directory(db: AsyncSession = Depends(get_db)) -> SqlUserDirectory:
    return SqlUserDirectory(db)
