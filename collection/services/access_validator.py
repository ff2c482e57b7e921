import re
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from collection.domain.models.collection import Collection
from collection.domain.repositories.collection_repository import CollectionRepository
from organizations.domain.models import Organization, Project
from organizations.domain.repositories import OrganizationRepository, ProjectRepository
from shared.exceptions import AccessDenied, ResourceNotFound
from users.models.role import CROSS_ORGANIZATION_ROLES
from users.models.user import User

_UUID_RE = re.compile(r"^[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}$")


def is_valid_uuid(value: object) -> bool:
    return isinstance(value, str) and bool(_UUID_RE.match(value))


@dataclass(frozen=True)
class AccessScope:
    organization: Organization
    project: Project
    collection: Optional[Collection] = None


class AccessValidator:
    """
    Resolves organization -> project -> (collection) for a caller.

    Identity and role checks run before any lookup so that a caller without
    access cannot probe which ids exist. Every resolution failure is the same
    ``ResourceNotFound``.
    """

    def __init__(
        self,
        organizations: OrganizationRepository,
        projects: ProjectRepository,
        collections: CollectionRepository,
    ):
        self.organizations = organizations
        self.projects = projects
        self.collections = collections

    async def validate(
        self,
        user: object,
        organization_id: str,
        project_id: str,
        collection_id: Optional[str] = None,
    ) -> AccessScope:
        if not isinstance(user, User) or not user.is_active:
            raise AccessDenied()

        user_organization_id = str(user.organization_id) if user.organization_id else None
        if organization_id != user_organization_id and not user.has_any_role(CROSS_ORGANIZATION_ROLES):
            raise AccessDenied()

        if not is_valid_uuid(organization_id) or not is_valid_uuid(project_id):
            raise ResourceNotFound()

        organization = await self.organizations.get(UUID(organization_id))
        if not organization:
            raise ResourceNotFound()

        project = await self.projects.get(UUID(project_id))
        if not project:
            raise ResourceNotFound()
        if project.organization_id != organization.id:
            raise ResourceNotFound()

        collection = None
        if collection_id:
            if not is_valid_uuid(collection_id):
                raise ResourceNotFound()
            collection = await self.collections.get(UUID(collection_id))
            if not collection or collection.project_id != project.id:
                raise ResourceNotFound()

        return AccessScope(organization=organization, project=project, collection=collection)
