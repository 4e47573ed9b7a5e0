"""Task Service — orchestrates access, version and patch rules around the repositories.

Invariants:
    - Every operation takes the requester id explicitly (no ambient security context)
    - Mutation order: role -> precondition -> patch validation -> conditional commit;
      the first failure aborts with the stored task exactly as it was
    - Only update_if_version writes an existing task row; its CONFLICT is reported
      as PreconditionFailedError, same as a stale If-Match
    - Invisible and absent tasks produce the same ResourceNotFoundError
    - Shares are managed by the owner only; the owner can never be a share target

Design Decisions:
    - Impureim sandwich: read through repositories, decide with pure core/ functions,
      write through repositories; core check_* results are raised here
    - No retries: a lost race is returned to the caller, who re-fetches and resubmits
"""

import logging
from dataclasses import replace
from uuid import UUID

from taskshare.core.domain_types import (
    INITIAL_VERSION, Capability, Role, ShareRole,
)
from taskshare.core.enforce_access import check_capability, resolve_role
from taskshare.core.enforce_version import check_commit, check_precondition
from taskshare.core.errors import ResourceNotFoundError, TaskValidationError
from taskshare.core.repository_protocols import (
    ShareLike, ShareRepository, TaskLike, TaskRepository, UserDirectory, UserLike,
)
from taskshare.core.task_patch import (
    TaskPatch, TaskState, apply_patch, normalize_title, validate_patch,
)
from taskshare.core.task_query import TaskQuery

logger = logging.getLogger(__name__)


class TaskService:
    """Task and share operations for one request scope."""

    def __init__(
        self,
        tasks: TaskRepository,
        shares: ShareRepository,
        users: UserDirectory,
    ):
        self.tasks = tasks
        self.shares = shares
        self.users = users

    # ─── Access ─────────────────────────────────────────────────

    async def role_of(self, task: TaskLike | None, requester_id: UUID) -> Role:
        """Effective role; the share table is only consulted for non-owners."""
        if task is None:
            return Role.NONE
        share_role = None
        if task.owner_id != requester_id:
            share_role = await self.shares.get_role(task.id, requester_id)
        return resolve_role(task.owner_id, requester_id, share_role)

    async def _authorize(
        self, task_id: UUID, requester_id: UUID, capability: Capability,
    ) -> TaskLike:
        """Load the task and require a capability on it."""
        task = await self.tasks.get(task_id)
        role = await self.role_of(task, requester_id)
        error = check_capability(role, capability, task_id)
        if error:
            logger.info(
                f"Access denied: {error.code}",
                extra={
                    "task_id": task_id, "user_id": requester_id,
                    "capability": capability.value,
                },
            )
            raise error
        return task

    # ─── Tasks ──────────────────────────────────────────────────

    async def list_tasks(
        self, requester_id: UUID, query: TaskQuery | None = None,
    ) -> list[TaskLike]:
        return await self.tasks.list_accessible(requester_id, query or TaskQuery())

    async def create_task(self, requester_id: UUID, draft: TaskState) -> TaskLike:
        """Persist a new task owned by requester at INITIAL_VERSION.

        The requester must be a provisioned user: an unknown requester is a
        missing User (404), never an owner foreign-key failure at commit.
        """
        if await self.users.get_by_id(requester_id) is None:
            raise ResourceNotFoundError("User", str(requester_id))
        title = normalize_title(draft.title)
        if title is None:
            raise TaskValidationError("title must not be blank", "title")
        task = await self.tasks.add(
            requester_id, replace(draft, title=title), INITIAL_VERSION,
        )
        logger.info(
            "Task created",
            extra={"task_id": task.id, "user_id": requester_id, "version": task.version},
        )
        return task

    async def get_task(self, task_id: UUID, requester_id: UUID) -> TaskLike:
        return await self._authorize(task_id, requester_id, Capability.READ)

    async def patch_task(
        self,
        task_id: UUID,
        requester_id: UUID,
        precondition_version: int | None,
        patch: TaskPatch,
    ) -> TaskLike:
        """Apply a sparse patch under an If-Match version. All-or-nothing."""
        task = await self._authorize(task_id, requester_id, Capability.WRITE)
        read_version = task.version

        error = (
            check_precondition(read_version, precondition_version, task_id)
            or validate_patch(patch)
        )
        if error:
            logger.warning(
                f"Patch rejected: {error.code}",
                extra={"task_id": task_id, "user_id": requester_id, "version": read_version},
            )
            raise error

        new_state = apply_patch(TaskState.from_row(task), patch)
        outcome = await self.tasks.update_if_version(task_id, read_version, new_state)
        error = check_commit(outcome, task_id, read_version)
        if error:
            raise error

        updated = await self.tasks.get(task_id)
        if updated is None:
            raise ResourceNotFoundError("Task", str(task_id))
        logger.info(
            f"Task patched: {', '.join(patch.present_fields) or 'no fields'}",
            extra={
                "task_id": task_id, "user_id": requester_id,
                "version": updated.version,
            },
        )
        return updated

    async def delete_task(self, task_id: UUID, requester_id: UUID) -> None:
        await self._authorize(task_id, requester_id, Capability.DELETE)
        await self.tasks.delete(task_id)
        logger.info("Task deleted", extra={"task_id": task_id, "user_id": requester_id})

    # ─── Shares ─────────────────────────────────────────────────

    async def list_shares(self, task_id: UUID, requester_id: UUID) -> list[ShareLike]:
        await self._authorize(task_id, requester_id, Capability.LIST_SHARES)
        return await self.shares.list_for_task(task_id)

    async def _resolve_target(self, email: str) -> UserLike:
        user = await self.users.get_by_email(email)
        if user is None:
            raise ResourceNotFoundError("User", email)
        return user

    async def share_task(
        self, task_id: UUID, requester_id: UUID, target_email: str, role: ShareRole,
    ) -> None:
        """Grant or change a role. Idempotent upsert by (task, user)."""
        task = await self._authorize(task_id, requester_id, Capability.MANAGE_SHARES)
        target = await self._resolve_target(target_email)
        if target.id == task.owner_id:
            raise TaskValidationError(
                "Cannot share a task with its owner", "user_email",
            )
        await self.shares.upsert(task_id, target.id, ShareRole(role))
        logger.info(
            f"Task shared as {ShareRole(role).value}",
            extra={"task_id": task_id, "user_id": target.id},
        )

    async def revoke_share(
        self, task_id: UUID, requester_id: UUID, target_email: str,
    ) -> None:
        """Remove a share. Revoking a share that does not exist is a no-op."""
        await self._authorize(task_id, requester_id, Capability.MANAGE_SHARES)
        target = await self._resolve_target(target_email)
        removed = await self.shares.delete(task_id, target.id)
        logger.info(
            "Share revoked" if removed else "Share revoke was a no-op",
            extra={"task_id": task_id, "user_id": target.id},
        )
