"""Service test fixtures — async DB, seeded users, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so readiness checks hit the test engine
    - Four users seeded: owner, editor, viewer, stranger (no shares yet)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (the conditional UPDATE and ON CONFLICT upsert both run on SQLite)
    - StaticPool: every session sees the same in-memory database
    - install_sqlite_functions applied exactly as DatabaseSessionManager does
    - Identity travels as the X-User-Id header, same as behind the identity resolver
"""

from dataclasses import dataclass
from uuid import UUID, uuid4

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from taskshare.db.base import Base
from taskshare.infrastructure.database import (
    get_db, install_sqlite_functions, DatabaseSessionManager,
)
from taskshare.infrastructure.share_repository import SqlShareRepository
from taskshare.infrastructure.task_repository import SqlTaskRepository
from taskshare.infrastructure.user_directory import SqlUserDirectory
from taskshare.models.app_user import AppUser
from taskshare.services.task_service import TaskService
import taskshare.infrastructure.database as db_module
from taskshare.main import app


@dataclass(frozen=True)
class SeededUser:
    id: UUID
    email: str

    @property
    def headers(self) -> dict[str, str]:
        return {"X-User-Id": str(self.id)}


@dataclass(frozen=True)
class SeededUsers:
    owner: SeededUser
    editor: SeededUser
    viewer: SeededUser
    stranger: SeededUser


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    install_sqlite_functions(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def users(test_db) -> SeededUsers:
    """Insert owner/editor/viewer/stranger rows into app_users."""
    seeded = {}
    for name in ("owner", "editor", "viewer", "stranger"):
        user = AppUser(id=uuid4(), email=f"{name}@example.com", display_name=name.title())
        test_db.add(user)
        seeded[name] = SeededUser(id=user.id, email=user.email)
    await test_db.commit()
    return SeededUsers(**seeded)


@pytest.fixture
def service(test_db) -> TaskService:
    """TaskService wired to the SQL repositories on the test session."""
    return TaskService(
        SqlTaskRepository(test_db),
        SqlShareRepository(test_db),
        SqlUserDirectory(test_db),
    )


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Patch db_manager for the readiness check, which uses it directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
