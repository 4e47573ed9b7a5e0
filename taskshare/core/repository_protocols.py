"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - update_if_version is the ONLY write path for an existing task row
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE their results are never async themselves
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from taskshare.core.domain_types import ShareRole
from taskshare.core.enforce_version import CommitOutcome
from taskshare.core.task_patch import TaskState
from taskshare.core.task_query import TaskQuery


class TaskLike(Protocol):
    """Structural contract for Task rows passed between repository and service."""
    id: UUID
    owner_id: UUID
    title: str
    description: str | None
    status: str
    priority: str
    tags: list[str]
    category: str | None
    meta: str | None
    due_date: datetime | None
    version: int
    created_at: datetime
    updated_at: datetime


class UserLike(Protocol):
    id: UUID
    email: str
    display_name: str | None


class ShareLike(Protocol):
    task_id: UUID
    user_id: UUID
    role: str
    user: UserLike


class TaskRepository(Protocol):
    """Contract for task persistence — implemented by shell."""
    async def get(self, task_id: UUID) -> TaskLike | None: ...
    async def list_accessible(
        self, user_id: UUID, query: TaskQuery,
    ) -> list[TaskLike]: ...
    async def add(self, owner_id: UUID, state: TaskState, version: int) -> TaskLike: ...
    async def update_if_version(
        self, task_id: UUID, expected_version: int, state: TaskState,
    ) -> CommitOutcome: ...
    async def delete(self, task_id: UUID) -> None: ...


class ShareRepository(Protocol):
    """Contract for the task_shares relation — implemented by shell."""
    async def get_role(self, task_id: UUID, user_id: UUID) -> ShareRole | None: ...
    async def list_for_task(self, task_id: UUID) -> list[ShareLike]: ...
    async def upsert(self, task_id: UUID, user_id: UUID, role: ShareRole) -> None: ...
    async def delete(self, task_id: UUID, user_id: UUID) -> bool: ...


class UserDirectory(Protocol):
    """Read-only view of externally provisioned users."""
    async def get_by_id(self, user_id: UUID) -> UserLike | None: ...
    async def get_by_email(self, email: str) -> UserLike | None: ...
