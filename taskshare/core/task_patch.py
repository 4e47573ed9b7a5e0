"""Task Patch — sparse updates with explicit per-field presence.

Invariants:
    - All functions are PURE: no IO, no async, no DB; TaskState is never mutated in place
    - Absent field (present=False) -> stored value untouched
    - Present field -> value overwrites, including an explicit None (tags: None -> empty)
    - tags, when present, replace the whole ordered sequence (no element merge)
    - title, when present, is trimmed; blank after trim fails the WHOLE patch
    - validate_patch runs before apply_patch: all-or-nothing, no partial application

Design Decisions:
    - PatchField(present, value) over Optional: "absent" and "explicit null" are
      different requests and must stay distinguishable after parsing
    - completed is sugar for status (true -> done, false -> todo); an explicit
      status wins, and a contradicting pair is rejected
    - An empty patch is still a successful mutation (version advances by 1)
"""

from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Any, Generic, TypeVar

from taskshare.core.domain_types import TaskPriority, TaskStatus
from taskshare.core.errors import TaskValidationError


T = TypeVar("T")


@dataclass(frozen=True)
class PatchField(Generic[T]):
    """Tagged optional: present=False means the client did not send the field."""
    present: bool = False
    value: T | None = None

    @classmethod
    def of(cls, value: T | None) -> "PatchField[T]":
        return cls(present=True, value=value)


ABSENT: PatchField[Any] = PatchField()


@dataclass(frozen=True)
class TaskPatch:
    """One PatchField per mutable task field."""
    title: PatchField[str] = ABSENT
    description: PatchField[str] = ABSENT
    status: PatchField[TaskStatus] = ABSENT
    priority: PatchField[TaskPriority] = ABSENT
    tags: PatchField[list[str]] = ABSENT
    category: PatchField[str] = ABSENT
    due_date: PatchField[datetime] = ABSENT
    metadata: PatchField[str] = ABSENT
    completed: PatchField[bool] = ABSENT

    @property
    def present_fields(self) -> list[str]:
        return [f.name for f in fields(self) if getattr(self, f.name).present]


@dataclass(frozen=True)
class TaskState:
    """Mutable part of a task, as read together with its version."""
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MED
    tags: tuple[str, ...] = ()
    category: str | None = None
    due_date: datetime | None = None
    metadata: str | None = None

    @classmethod
    def from_row(cls, row: Any) -> "TaskState":
        """Snapshot of a TaskLike row (see repository_protocols)."""
        return cls(
            title=row.title,
            description=row.description,
            status=TaskStatus(row.status),
            priority=TaskPriority(row.priority),
            tags=tuple(row.tags or ()),
            category=row.category,
            due_date=row.due_date,
            metadata=row.meta,
        )

    def as_columns(self) -> dict[str, Any]:
        """Column values for persistence (tags as list, metadata as ORM `meta`)."""
        return {
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "tags": list(self.tags),
            "category": self.category,
            "due_date": self.due_date,
            "meta": self.metadata,
        }


# ─── Validation ─────────────────────────────────────────────────

def normalize_title(raw: str | None) -> str | None:
    """Trimmed title, or None when blank."""
    if raw is None:
        return None
    title = raw.strip()
    return title or None


def check_title(patch: TaskPatch) -> TaskValidationError | None:
    if patch.title.present and normalize_title(patch.title.value) is None:
        return TaskValidationError("title must not be blank", "title")
    return None


def check_non_nullable(patch: TaskPatch) -> TaskValidationError | None:
    """status, priority and completed may be omitted but never nulled."""
    for name in ("status", "priority", "completed"):
        patch_field = getattr(patch, name)
        if patch_field.present and patch_field.value is None:
            return TaskValidationError(f"{name} cannot be null", name)
    return None


def check_completed_agrees(patch: TaskPatch) -> TaskValidationError | None:
    if not (patch.status.present and patch.completed.present):
        return None
    is_done = TaskStatus(patch.status.value) == TaskStatus.DONE
    if is_done != patch.completed.value:
        return TaskValidationError(
            f"completed={patch.completed.value} contradicts status={patch.status.value}",
            "completed",
        )
    return None


def validate_patch(patch: TaskPatch) -> TaskValidationError | None:
    """Chain all patch checks. Returns first error or None."""
    return (
        check_title(patch)
        or check_non_nullable(patch)
        or check_completed_agrees(patch)
    )


# ─── Application ────────────────────────────────────────────────

def apply_patch(state: TaskState, patch: TaskPatch) -> TaskState:
    """Merge a validated patch into state. Caller must run validate_patch first."""
    changes: dict[str, Any] = {}

    if patch.title.present:
        changes["title"] = normalize_title(patch.title.value)
    if patch.description.present:
        changes["description"] = patch.description.value
    if patch.status.present:
        changes["status"] = TaskStatus(patch.status.value)
    elif patch.completed.present:
        changes["status"] = TaskStatus.DONE if patch.completed.value else TaskStatus.TODO
    if patch.priority.present:
        changes["priority"] = TaskPriority(patch.priority.value)
    if patch.tags.present:
        changes["tags"] = tuple(patch.tags.value or ())
    if patch.category.present:
        changes["category"] = patch.category.value
    if patch.due_date.present:
        changes["due_date"] = patch.due_date.value
    if patch.metadata.present:
        changes["metadata"] = patch.metadata.value

    return replace(state, **changes)
