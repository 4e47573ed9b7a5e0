"""Access Enforcement — maps (task owner, share relation, requester) to a Role and gates capabilities.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Owner always resolves to Role.OWNER, whatever the share table contains
    - Role.NONE on any capability -> ResourceNotFoundError (existence not disclosed)
    - Visible role lacking the capability -> ForbiddenError
    - CAPABILITIES is the single lookup table; no role-string comparisons elsewhere

Design Decisions:
    - Return error instances (not raise): callers chain checks and raise at the shell,
      same shape as every other check_* in core/
    - Share lookup result passed in as a value: the shell skips the query for owners
"""

from uuid import UUID

from taskshare.core.domain_types import Capability, Role, ShareRole
from taskshare.core.errors import (
    ForbiddenError, ResourceNotFoundError, TaskShareError,
)


CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.NONE: frozenset(),
    Role.VIEWER: frozenset({Capability.READ}),
    Role.EDITOR: frozenset({
        Capability.READ, Capability.WRITE, Capability.LIST_SHARES,
    }),
    Role.OWNER: frozenset(Capability),
}

_SHARE_ROLES: dict[ShareRole, Role] = {
    ShareRole.VIEWER: Role.VIEWER,
    ShareRole.EDITOR: Role.EDITOR,
}


def resolve_role(
    owner_id: UUID | None, requester_id: UUID, share_role: ShareRole | None,
) -> Role:
    """Effective role of requester. owner_id None means the task does not exist."""
    if owner_id is None:
        return Role.NONE
    if owner_id == requester_id:
        return Role.OWNER
    if share_role is None:
        return Role.NONE
    return _SHARE_ROLES[ShareRole(share_role)]


def can(role: Role, capability: Capability) -> bool:
    return capability in CAPABILITIES[role]


def check_capability(
    role: Role, capability: Capability, task_id: UUID,
) -> TaskShareError | None:
    """Gate one capability. Returns the error to raise, or None when allowed."""
    if role == Role.NONE:
        return ResourceNotFoundError("Task", str(task_id))
    if not can(role, capability):
        return ForbiddenError(str(task_id), capability.value)
    return None
