"""Health & Readiness — is the process up, and can it serve task requests.

Invariants:
    - GET /health/ answers 200 whenever the process runs; it touches no database
    - GET /health/ready answers 200 only when the database answers AND the task
      schema is migrated; otherwise 503 with the first failing check as reason
    - Neither endpoint needs a requester identity

Design Decisions:
    - Schema check reads one task id: a reachable database without the tasks
      table (migrations not applied) must not receive traffic
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import select

import taskshare.infrastructure.database as database
from taskshare.core.errors import DatabaseError
from taskshare.models.task import Task

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


async def _tasks_table_ready(manager: database.DatabaseSessionManager) -> bool:
    try:
        async with manager.session() as db:
            await db.execute(select(Task.id).limit(1))
    except DatabaseError:
        logger.warning("Readiness: tasks table not queryable (migrations pending?)")
        return False
    return True


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": "taskshare-api"}


@router.get("/ready")
async def readiness_check():
    """Readiness: database reachable, then task schema present."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return _not_ready("database_unavailable")
    if not await _tasks_table_ready(manager):
        return _not_ready("schema_missing")
    return {"status": "ready", "checks": {"database": "healthy", "schema": "migrated"}}
