"""Task Schemas — Pydantic models for the task endpoints.

Invariants:
    - TaskPatchRequest keeps "not sent" apart from "sent as null" via model_fields_set;
      to_patch() turns that into explicit PatchField presence flags
    - Unknown patch fields are rejected (extra="forbid"), never silently dropped
    - Title blankness is a domain rule (core/task_patch.py), not a schema rule, so
      create and patch report it identically

Design Decisions:
    - Schemas convert to core types (TaskState, TaskPatch): services never see Pydantic
    - TaskResponse built explicitly from the ORM row (attribute `meta` -> `metadata`)
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from taskshare.core.domain_types import TaskPriority, TaskStatus
from taskshare.core.repository_protocols import TaskLike
from taskshare.core.task_patch import PatchField, TaskPatch, TaskState


Tag = Annotated[str, Field(min_length=1, max_length=50)]


class TaskCreate(BaseModel):
    """Task creation payload."""
    title: str = Field(max_length=255)
    description: str | None = Field(None, max_length=10_000)
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MED
    tags: list[Tag] = Field(default_factory=list, max_length=50)
    category: str | None = Field(None, max_length=100)
    metadata: str | None = Field(None, max_length=10_000)
    due_date: datetime | None = None

    def to_state(self) -> TaskState:
        return TaskState(
            title=self.title,
            description=self.description,
            status=self.status,
            priority=self.priority,
            tags=tuple(self.tags),
            category=self.category,
            due_date=self.due_date,
            metadata=self.metadata,
        )


class TaskPatchRequest(BaseModel):
    """Sparse task update: only the fields present in the JSON body are applied."""
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=10_000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    tags: list[Tag] | None = Field(None, max_length=50)
    category: str | None = Field(None, max_length=100)
    due_date: datetime | None = None
    metadata: str | None = Field(None, max_length=10_000)
    completed: bool | None = None

    def to_patch(self) -> TaskPatch:
        return TaskPatch(**{
            name: PatchField.of(getattr(self, name))
            for name in self.model_fields_set
        })


class TaskResponse(BaseModel):
    """Task as returned to clients; `version` mirrors the ETag header."""
    id: UUID
    owner_id: UUID
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    tags: list[str]
    category: str | None
    metadata: str | None
    due_date: datetime | None
    completed: bool
    version: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(cls, task: TaskLike) -> "TaskResponse":
        return cls(
            id=task.id,
            owner_id=task.owner_id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            tags=list(task.tags or []),
            category=task.category,
            metadata=task.meta,
            due_date=task.due_date,
            completed=task.status == TaskStatus.DONE.value,
            version=task.version,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
