"""TaskShare ORM — grants a non-owner user a viewer or editor role on one task.

Invariants:
    - Composite primary key (task_id, user_id): at most one role per user per task
    - role is "viewer" or "editor"; ownership is never stored here
    - Rows disappear with their task (ON DELETE CASCADE)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from taskshare.db.base import Base


class TaskShare(Base):
    """Share row: (task, user) -> role."""
    __tablename__ = "task_shares"

    task_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("tasks.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("app_users.id", ondelete="CASCADE"),
        primary_key=True, index=True,
    )
    role: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["AppUser"] = relationship("AppUser", lazy="joined")
