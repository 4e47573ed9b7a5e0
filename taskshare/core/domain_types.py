"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TaskId, UserId wrap UUIDs — never use bare UUID in domain logic
    - Role is totally ordered: NONE < VIEWER < EDITOR < OWNER
    - All valid states encoded as Enums — no raw string matching
    - INITIAL_VERSION is the single source of truth for a new task's version

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums for persisted/serialized values: JSON without custom encoders
    - IntEnum for Role: ordering comes from the value, never from string compares
"""

from enum import Enum, IntEnum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

TaskId = NewType("TaskId", UUID)
UserId = NewType("UserId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

Version = NewType("Version", int)   # >= 0, +1 per successful mutation

INITIAL_VERSION: Version = Version(0)


# ─── Enums ───────────────────────────────────────────────────────

class TaskStatus(str, Enum):
    """Task workflow states — maps to DB `status` column."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class TaskPriority(str, Enum):
    """Task priority — maps to DB `priority` column."""
    LOW = "low"
    MED = "med"
    HIGH = "high"


class ShareRole(str, Enum):
    """Role stored on a task_shares row. Owner is implicit, never a share."""
    VIEWER = "viewer"
    EDITOR = "editor"


class Role(IntEnum):
    """Effective role of a requester on one task."""
    NONE = 0
    VIEWER = 1
    EDITOR = 2
    OWNER = 3


class Capability(str, Enum):
    """Actions gated by the capability table in enforce_access."""
    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    LIST_SHARES = "list_shares"
    MANAGE_SHARES = "manage_shares"
