from typing import Optional
from uuid import UUID

from sqlalchemy import select

from organizations.domain.models.project import Project
from shared.abstracts.abstract_repository import AbstractRepository


class ProjectRepository(AbstractRepository):
    async def get(self, project_id: UUID) -> Optional[Project]:
        res = await self.db.execute(select(Project).where(Project.id == project_id))
        return res.scalars().first()
