"""Share Repository — SQLAlchemy implementation of the task_shares relation.

Invariants:
    - upsert never creates a second row for (task_id, user_id): role is overwritten
    - A unique-constraint race on upsert is resolved by the database (ON CONFLICT),
      never surfaced as an IntegrityError
    - delete() of a missing row is a no-op returning False

Design Decisions:
    - Dialect-native INSERT ... ON CONFLICT DO UPDATE for PostgreSQL and SQLite;
      other dialects fall back to Session.merge (select-then-write)
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from taskshare.core.domain_types import ShareRole
from taskshare.models.task_share import TaskShare

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class SqlShareRepository:
    """task_shares persistence on an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_role(self, task_id: UUID, user_id: UUID) -> ShareRole | None:
        result = await self.db.execute(
            select(TaskShare.role).where(
                TaskShare.task_id == task_id, TaskShare.user_id == user_id,
            ),
        )
        role = result.scalar_one_or_none()
        return ShareRole(role) if role is not None else None

    async def list_for_task(self, task_id: UUID) -> list[TaskShare]:
        result = await self.db.execute(
            select(TaskShare)
            .where(TaskShare.task_id == task_id)
            .order_by(TaskShare.created_at, TaskShare.user_id),
        )
        return list(result.scalars().all())

    async def upsert(self, task_id: UUID, user_id: UUID, role: ShareRole) -> None:
        dialect = self.db.get_bind().dialect.name
        insert_fn = _UPSERT_INSERTS.get(dialect)
        if insert_fn is None:
            await self.db.merge(TaskShare(
                task_id=task_id, user_id=user_id, role=role.value,
                created_at=datetime.now(timezone.utc),
            ))
        else:
            stmt = insert_fn(TaskShare).values(
                task_id=task_id, user_id=user_id, role=role.value,
                created_at=datetime.now(timezone.utc),
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["task_id", "user_id"],
                set_={"role": stmt.excluded.role},
            )
            await self.db.execute(stmt)
        await self.db.commit()

    async def delete(self, task_id: UUID, user_id: UUID) -> bool:
        result = await self.db.execute(
            delete(TaskShare).where(
                TaskShare.task_id == task_id, TaskShare.user_id == user_id,
            ),
        )
        await self.db.commit()
        return result.rowcount > 0
