"""Task Repository — SQLAlchemy implementation of core.repository_protocols.TaskRepository.

Invariants:
    - update_if_version is a single UPDATE ... WHERE id = :id AND version = :expected;
      rowcount 1 -> APPLIED (committed), anything else -> CONFLICT (nothing written)
    - A successful conditional update sets version = expected + 1 and refreshes updated_at
    - get() always re-reads the row (populate_existing): the version used for the
      precondition check is the one stored at read time, never an identity-map copy
    - list_accessible returns owned ∪ shared tasks, newest first

Design Decisions:
    - Explicit compare-and-swap statement over mapper version_id_col: the conflict is a
      returned value, not a StaleDataError raised from flush()
    - Text filter uses LOWER(col) LIKE with autoescape: user text never acts as a pattern
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taskshare.core.enforce_version import CommitOutcome, next_version
from taskshare.core.task_patch import TaskState
from taskshare.core.task_query import TaskQuery
from taskshare.models.task import Task
from taskshare.models.task_share import TaskShare

logger = logging.getLogger(__name__)


class SqlTaskRepository:
    """Task persistence on an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, task_id: UUID) -> Task | None:
        return await self.db.get(Task, task_id, populate_existing=True)

    async def list_accessible(self, user_id: UUID, query: TaskQuery) -> list[Task]:
        shared_task_ids = select(TaskShare.task_id).where(
            TaskShare.user_id == user_id,
        )
        stmt = select(Task).where(
            or_(Task.owner_id == user_id, Task.id.in_(shared_task_ids)),
        )
        if query.text:
            needle = query.text.lower()
            stmt = stmt.where(or_(
                func.lower(Task.title).contains(needle, autoescape=True),
                func.lower(Task.description).contains(needle, autoescape=True),
                func.lower(Task.category).contains(needle, autoescape=True),
            ))
        if query.status is not None:
            stmt = stmt.where(Task.status == query.status.value)
        if query.priority is not None:
            stmt = stmt.where(Task.priority == query.priority.value)
        stmt = stmt.order_by(Task.created_at.desc(), Task.id)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def add(self, owner_id: UUID, state: TaskState, version: int) -> Task:
        now = datetime.now(timezone.utc)
        task = Task(
            owner_id=owner_id, version=version,
            created_at=now, updated_at=now,
            **state.as_columns(),
        )
        self.db.add(task)
        await self.db.commit()
        await self.db.refresh(task)
        return task

    async def update_if_version(
        self, task_id: UUID, expected_version: int, state: TaskState,
    ) -> CommitOutcome:
        """Compare-and-swap on the version column."""
        values = {
            getattr(Task, name): value
            for name, value in state.as_columns().items()
        }
        values[Task.version] = next_version(expected_version)
        values[Task.updated_at] = datetime.now(timezone.utc)

        stmt = (
            update(Task)
            .where(Task.id == task_id, Task.version == expected_version)
            .values(values)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        if result.rowcount != 1:
            logger.warning(
                "Conditional update lost the race",
                extra={"task_id": task_id, "version": expected_version},
            )
            return CommitOutcome.CONFLICT
        await self.db.commit()
        return CommitOutcome.APPLIED

    async def delete(self, task_id: UUID) -> None:
        """Delete task and its share rows (explicit, SQLite does not enforce FKs by default)."""
        await self.db.execute(delete(TaskShare).where(TaskShare.task_id == task_id))
        await self.db.execute(delete(Task).where(Task.id == task_id))
        await self.db.commit()
