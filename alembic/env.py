"""Alembic environment — async migrations for app_users, tasks and task_shares.

Invariants:
    - The database URL comes from taskshare.config.Settings, exactly as the app
      resolves it (DATABASE_URL / .env, postgresql:// rewritten for asyncpg)
    - All three models imported before autogenerate reads Base.metadata

Design Decisions:
    - Batch mode on SQLite: ALTER TABLE there cannot change columns in place
    - compare_type on: String length changes (e.g. title) show up in autogenerate
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

from taskshare.config import get_settings
from taskshare.db.base import Base
from taskshare.models.app_user import AppUser  # noqa: F401
from taskshare.models.task import Task  # noqa: F401
from taskshare.models.task_share import TaskShare  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
database_url = get_settings().database_url


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=database_url.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL for the configured URL without connecting."""
    _configure(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_sync(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(database_url, poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(_run_sync)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
