from .organization_repository import OrganizationRepository
from .project_repository import ProjectRepository

__all__ = ["OrganizationRepository", "ProjectRepository"]
