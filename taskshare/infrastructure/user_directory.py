"""User Directory — read-only lookups of externally provisioned users.

Invariants:
    - Never creates or mutates app_users rows
    - Email lookup is case-insensitive and ignores surrounding whitespace
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskshare.models.app_user import AppUser


class SqlUserDirectory:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: UUID) -> AppUser | None:
        return await self.db.get(AppUser, user_id)

    async def get_by_email(self, email: str) -> AppUser | None:
        result = await self.db.execute(
            select(AppUser).where(
                func.lower(AppUser.email) == email.strip().lower(),
            ),
        )
        return result.scalar_one_or_none()
