from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.crud.base import CRUDBase
from app.models.profile import Profile
from app.schemas.profile import Profile as ProfileSchema
import uuid


class CRUDProfile(CRUDBase[Profile, ProfileSchema, ProfileSchema]):
    async def get_by_id(self, db: AsyncSession, *, profile_id: uuid.UUID) -> Optional[Profile]:
        result = await db.execute(select(Profile).filter(Profile.id == profile_id))
        return result.scalars().first()

    async def get_by_username(self, db: AsyncSession, *, username: str) -> Optional[Profile]:
        result = await db.execute(select(Profile).filter(Profile.username == username))
        return result.scalars().first()


profile = CRUDProfile(Profile)
