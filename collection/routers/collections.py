from typing import Any, NoReturn

from fastapi import APIRouter, Body, Depends, HTTPException, Path, status

from app.core.auth import optional_current_user
from collection.domain.entities.collection import CollectionMediaOut, CollectionOut, CreateCollectionIn
from collection.domain.models.collection import Collection
from collection.services.collection_service import CollectionService
from shared.exceptions import AccessDenied, ResourceNotFound, ServiceError, ValidationFailed
from shared.wiring import get_collection_service

router = APIRouter(
    prefix="/v1/organizations/{organization_id}/projects/{project_id}/collections",
    tags=["collections"],
    responses={
        403: {
            "description": "Not authenticated, or no access to this organization.",
            "content": {"application/json": {"examples": {"forbidden": {"value": {"detail": "forbidden"}}}}},
        },
        404: {
            "description": "Organization, project or collection not found (or malformed id).",
            "content": {"application/json": {"examples": {"not_found": {"value": {"detail": "not found"}}}}},
        },
    },
)


def _raise_http(exc: ServiceError) -> NoReturn:
    if isinstance(exc, AccessDenied):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="forbidden") from None
    if isinstance(exc, ResourceNotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found") from None
    if isinstance(exc, ValidationFailed):
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.errors) from None
    raise exc


def _to_out(obj: Collection, with_media: bool = True) -> CollectionOut:
    return CollectionOut(
        id=obj.id,
        name=obj.name,
        description=obj.description,
        organization_id=obj.organization_id,
        project_id=obj.project_id,
        created_by_id=obj.created_by_id,
        created_at=obj.created_at,
        updated_at=obj.updated_at,
        media=[CollectionMediaOut.model_validate(m) for m in obj.media] if with_media else [],
    )


@router.post(
    "",
    summary="Create a collection from an account's recent media",
    description=(
        "Creates a collection under the project and imports the recent media of the "
        "external account identified by `token`.\n\n"
        "### Notes\n"
        "- `token` is used once to read the feed; it is not stored.\n"
        "- Media is attached asynchronously, so the response carries an empty `media` list.\n"
        "- If the feed is unreachable or malformed the collection is still created, without media.\n"
    ),
    response_model=CollectionOut,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Collection created.",
            "content": {
                "application/json": {
                    "examples": {
                        "created": {
                            "summary": "Created collection",
                            "value": {
                                "id": "0f3e8a52-61f4-4c35-9d0b-1f0f3a3d7c11",
                                "name": "Summer campaign",
                                "description": "Latest posts from the brand account.",
                                "organization_id": "5d2a8c1f-6c53-4b1a-9f9a-c5f1f3e3c0d1",
                                "project_id": "b0efc8b8-1df4-41cf-8b20-0a3f7e0f92d3",
                                "created_by_id": "8c6a3a45-2e6c-4a1a-8d8b-9c7f2b0d7a21",
                                "created_at": "2025-08-14T20:12:44Z",
                                "updated_at": "2025-08-14T20:12:44Z",
                                "media": [],
                            },
                        }
                    }
                }
            },
        },
        422: {
            "description": "Invalid payload. Submitted values are never echoed.",
            "content": {
                "application/json": {
                    "examples": {
                        "missing_name": {
                            "summary": "Missing name",
                            "value": {"detail": [{"loc": ["name"], "msg": "Field required", "type": "missing"}]},
                        }
                    }
                }
            },
        },
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": CreateCollectionIn.model_json_schema()}},
        }
    },
)
async def create_collection(
    organization_id: str = Path(..., description="Organization UUID"),
    project_id: str = Path(..., description="Project UUID"),
    body: Any = Body(default=None),
    user=Depends(optional_current_user),
    svc: CollectionService = Depends(get_collection_service),
):
    """
    **Request body**
    - `name` – collection name (required)
    - `description` – optional text
    - `token` – access token of the external account to import from (required)

    **Errors**
    - `403` – Not authenticated / not a member of the organization
    - `404` – Organization or project not found
    - `422` – Validation error
    """
    try:
        obj = await svc.create(body, organization_id, project_id, user)
    except ServiceError as e:
        _raise_http(e)
    return _to_out(obj, with_media=False)


@router.get(
    "/{collection_id}",
    summary="Get a collection with its imported media",
    response_model=CollectionOut,
)
async def get_collection(
    organization_id: str = Path(..., description="Organization UUID"),
    project_id: str = Path(..., description="Project UUID"),
    collection_id: str = Path(..., description="Collection UUID"),
    user=Depends(optional_current_user),
    svc: CollectionService = Depends(get_collection_service),
):
    try:
        obj = await svc.get(organization_id, project_id, collection_id, user)
    except ServiceError as e:
        _raise_http(e)
    return _to_out(obj)
