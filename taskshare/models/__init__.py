"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Task is the aggregate root; task_shares rows are scoped by task_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from taskshare.models.app_user import AppUser  # noqa: F401
from taskshare.models.task import Task  # noqa: F401
from taskshare.models.task_share import TaskShare  # noqa: F401
