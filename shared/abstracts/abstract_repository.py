from abc import ABC, abstractmethod

from sqlalchemy.ext.asyncio import AsyncSession


class AbstractRepository(ABC):
    """
    Minimal, framework-agnostic repository contract.

    Concrete implementations should implement these operations.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @abstractmethod
    async def get(self, entity_id): ...

    async def commit(self, obj):
        await self.db.commit()
        await self.db.refresh(obj)
