"""Version Enforcement — optimistic-concurrency checks around the conditional commit.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - A mutation without a supplied version is rejected (never silently skipped)
    - Supplied version != stored version -> PreconditionFailedError, nothing applied
    - A lost conditional write (CommitOutcome.CONFLICT) is reported exactly like a stale version
    - next_version is always current + 1

Design Decisions:
    - CommitOutcome enum over catching a storage exception: a conflict is an
      expected result of the compare-and-swap, not an error path
    - No retry here: the caller re-fetches and resubmits
"""

from enum import Enum
from uuid import UUID

from taskshare.core.errors import (
    PreconditionFailedError, PreconditionRequiredError, TaskShareError,
)


class CommitOutcome(str, Enum):
    """Result of UPDATE ... WHERE id = :id AND version = :expected."""
    APPLIED = "applied"
    CONFLICT = "conflict"


def check_precondition(
    current_version: int, supplied_version: int | None, task_id: UUID,
) -> TaskShareError | None:
    """Compare the client's If-Match version with the snapshot version."""
    if supplied_version is None:
        return PreconditionRequiredError(str(task_id))
    if supplied_version != current_version:
        return PreconditionFailedError(str(task_id), supplied_version)
    return None


def check_commit(
    outcome: CommitOutcome, task_id: UUID, expected_version: int,
) -> TaskShareError | None:
    if outcome is CommitOutcome.CONFLICT:
        return PreconditionFailedError(str(task_id), expected_version)
    return None


def next_version(current_version: int) -> int:
    return current_version + 1
