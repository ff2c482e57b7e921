import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from collection.domain.models.collection import Collection
from collection.domain.repositories import CollectionRepository
from collection.services.access_validator import AccessValidator, is_valid_uuid
from organizations.domain.repositories import OrganizationRepository, ProjectRepository
from shared.exceptions import AccessDenied, ResourceNotFound
from users.models.role import Role, RoleName
from users.models.user import User


@pytest.fixture
def validator(db_session: AsyncSession) -> AccessValidator:
    return AccessValidator(
        OrganizationRepository(db_session),
        ProjectRepository(db_session),
        CollectionRepository(db_session),
    )


def _outsider(*roles: RoleName) -> User:
    # not persisted: the validator only reads identity and roles
    return User(email="outsider@test", is_active=True, organization_id=uuid.uuid4(), roles=[Role(name=r) for r in roles])


# ==============================================================================
# Identity and role
# ==============================================================================

@pytest.mark.asyncio
@pytest.mark.parametrize("caller", [None, object(), "user-id"])
async def test_should_deny_when_caller_is_not_a_user(validator, tenancy, caller):
    with pytest.raises(AccessDenied):
        await validator.validate(caller, str(tenancy.organization.id), str(tenancy.project.id))


@pytest.mark.asyncio
async def test_should_deny_inactive_member(validator, tenancy):
    tenancy.member.is_active = False

    with pytest.raises(AccessDenied):
        await validator.validate(tenancy.member, str(tenancy.organization.id), str(tenancy.project.id))


@pytest.mark.asyncio
async def test_should_deny_foreign_organization_before_any_lookup(validator):
    # GIVEN: an organization id that does not exist and a caller from elsewhere
    missing_org = str(uuid.uuid4())

    # THEN: forbidden, not "not found"
    with pytest.raises(AccessDenied):
        await validator.validate(_outsider(RoleName.admin), missing_org, str(uuid.uuid4()))


@pytest.mark.asyncio
async def test_should_deny_malformed_ids_for_non_member(validator):
    with pytest.raises(AccessDenied):
        await validator.validate(_outsider(RoleName.viewer), "not-a-uuid", "also-not")


@pytest.mark.asyncio
async def test_should_let_super_admin_into_any_organization(validator, tenancy):
    scope = await validator.validate(
        tenancy.super_admin, str(tenancy.other_organization.id), str(tenancy.other_project.id)
    )

    assert scope.organization.id == tenancy.other_organization.id
    assert scope.project.id == tenancy.other_project.id
    assert scope.collection is None


# ==============================================================================
# Resolution
# ==============================================================================

@pytest.mark.asyncio
async def test_should_resolve_organization_and_project_for_member(validator, tenancy):
    scope = await validator.validate(tenancy.member, str(tenancy.organization.id), str(tenancy.project.id))

    assert scope.organization.id == tenancy.organization.id
    assert scope.project.id == tenancy.project.id


@pytest.mark.asyncio
@pytest.mark.parametrize("organization_id", [None, "nope", "123e4567e89b12d3a456426614174000"])
async def test_should_not_find_malformed_organization_id_for_super_admin(validator, tenancy, organization_id):
    with pytest.raises(ResourceNotFound):
        await validator.validate(tenancy.super_admin, organization_id, str(tenancy.project.id))


@pytest.mark.asyncio
async def test_should_not_find_malformed_project_id(validator, tenancy):
    with pytest.raises(ResourceNotFound):
        await validator.validate(tenancy.member, str(tenancy.organization.id), "42")


@pytest.mark.asyncio
async def test_should_not_find_missing_organization_regardless_of_role(validator, tenancy):
    with pytest.raises(ResourceNotFound):
        await validator.validate(tenancy.super_admin, str(uuid.uuid4()), str(tenancy.project.id))


@pytest.mark.asyncio
async def test_should_not_find_missing_project(validator, tenancy):
    with pytest.raises(ResourceNotFound):
        await validator.validate(tenancy.member, str(tenancy.organization.id), str(uuid.uuid4()))


@pytest.mark.asyncio
async def test_should_not_find_project_of_another_organization(validator, tenancy):
    # GIVEN: both exist, but the project belongs to the other organization
    with pytest.raises(ResourceNotFound):
        await validator.validate(tenancy.member, str(tenancy.organization.id), str(tenancy.other_project.id))


# ==============================================================================
# Optional collection
# ==============================================================================

@pytest.mark.asyncio
async def test_should_resolve_collection_of_the_project(validator, tenancy, db_session):
    # GIVEN
    c = Collection(name="Posts", organization_id=tenancy.organization.id, project_id=tenancy.project.id)
    db_session.add(c)
    await db_session.commit()

    # WHEN
    scope = await validator.validate(tenancy.member, str(tenancy.organization.id), str(tenancy.project.id), str(c.id))

    # THEN
    assert scope.collection.id == c.id


@pytest.mark.asyncio
@pytest.mark.parametrize("collection_id", ["bad", str(uuid.UUID(int=7))])
async def test_should_not_find_malformed_or_missing_collection(validator, tenancy, collection_id):
    with pytest.raises(ResourceNotFound):
        await validator.validate(
            tenancy.member, str(tenancy.organization.id), str(tenancy.project.id), collection_id
        )


@pytest.mark.asyncio
async def test_should_not_find_collection_of_another_project(validator, tenancy, db_session):
    c = Collection(
        name="Theirs", organization_id=tenancy.other_organization.id, project_id=tenancy.other_project.id
    )
    db_session.add(c)
    await db_session.commit()

    with pytest.raises(ResourceNotFound):
        await validator.validate(
            tenancy.member, str(tenancy.organization.id), str(tenancy.project.id), str(c.id)
        )


@pytest.mark.parametrize(
    "value, expected",
    [
        ("123e4567-e89b-12d3-a456-426614174000", True),
        ("123E4567-E89B-12D3-A456-426614174000", True),
        ("123e4567e89b12d3a456426614174000", False),
        ("{123e4567-e89b-12d3-a456-426614174000}", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_uuid(value, expected):
    assert is_valid_uuid(value) is expected
