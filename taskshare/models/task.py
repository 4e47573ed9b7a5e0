"""Task ORM — the shared, versioned resource.

Invariants:
    - owner_id is set once at creation and never changes
    - version starts at INITIAL_VERSION and only moves through the conditional
      UPDATE in TaskRepository.update_if_version (+1 per commit)
    - tags keep insertion order
    - metadata is an opaque string, never parsed

Design Decisions:
    - JSON column for tags: ordered list stored as-is, portable across PostgreSQL/SQLite
    - ORM attribute `meta` mapped to column "metadata": `metadata` is reserved
      on declarative classes
    - No SQLAlchemy version_id_col: the compare-and-swap is an explicit statement
      whose rowcount is the conflict signal, not a StaleDataError
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from taskshare.core.domain_types import INITIAL_VERSION, TaskPriority, TaskStatus
from taskshare.db.base import Base


class Task(Base):
    """Task aggregate root — share rows reference it by task_id."""
    __tablename__ = "tasks"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("app_users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TaskStatus.TODO.value,
    )
    priority: Mapped[str] = mapped_column(
        String(10), nullable=False, default=TaskPriority.MED.value,
    )
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    meta: Mapped[str | None] = mapped_column("metadata", Text, nullable=True)
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=INITIAL_VERSION,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
