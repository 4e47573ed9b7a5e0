"""Task Query — normalized filters for listing accessible tasks.

Invariants:
    - text is stripped; blank text means "no text filter"
    - text matches title/description/category case-insensitively (substring)
    - All given filters combine with logical AND
"""

from dataclasses import dataclass

from taskshare.core.domain_types import TaskPriority, TaskStatus


@dataclass(frozen=True)
class TaskQuery:
    text: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None

    @classmethod
    def build(
        cls,
        text: str | None = None,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
    ) -> "TaskQuery":
        text = text.strip() if text else None
        return cls(text=text or None, status=status, priority=priority)
