from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from collection.domain.entities.collection import CollectionCreate
from collection.domain.models.collection import Collection
from organizations.domain.models import Organization, Project
from shared.abstracts.abstract_repository import AbstractRepository
from users.models.user import User


class CollectionRepository(AbstractRepository):

    async def insert(
        self,
        payload: CollectionCreate,
        *,
        organization: Organization,
        project: Project,
        created_by: User,
    ) -> Collection:
        obj = Collection(
            name=payload.name,
            description=payload.description,
            organization_id=organization.id,
            project_id=project.id,
            created_by_id=created_by.id,
        )
        self.db.add(obj)
        await self.commit(obj)
        return obj

    async def get(self, collection_id: UUID) -> Optional[Collection]:
        stmt = (
            select(Collection)
            .options(selectinload(Collection.media))  # eager-load to avoid lazy IO later
            .where(Collection.id == collection_id)
            .execution_options(populate_existing=True)
        )
        res = await self.db.execute(stmt)
        return res.scalars().first()
