from typing import Optional
from uuid import UUID

from sqlalchemy import select

from organizations.domain.models.organization import Organization
from shared.abstracts.abstract_repository import AbstractRepository


class OrganizationRepository(AbstractRepository):
    async def get(self, organization_id: UUID) -> Optional[Organization]:
        res = await self.db.execute(select(Organization).where(Organization.id == organization_id))
        return res.scalars().first()
