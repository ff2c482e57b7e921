from typing import Optional
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from shared.abstracts.abstract_repository import AbstractRepository
from users.models.user import User

class UserRepository(AbstractRepository):
    """Read-only: users are provisioned outside this service."""

    async def get(self, user_id: UUID) -> Optional[User]:
        stmt = (
            select(User)
            .options(selectinload(User.roles))
            .where(User.id == user_id)
        )
        res = await self.db.execute(stmt)
        return res.scalars().first()
