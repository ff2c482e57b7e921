from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, constr

from collection.domain.models.media import MediaType


class CollectionBase(BaseModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=255)
    description: str | None = None


class CollectionCreate(CollectionBase):
    """Validated collection fields. The feed token is never part of it."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "name": "Summer campaign",
                "description": "Latest posts from the brand account.",
            }
        },
    )


class CreateCollectionIn(CollectionBase):
    """Documentation shape of the create request body."""

    token: str


class CollectionMediaOut(BaseModel):
    id: UUID
    external_id: str
    feed_index: int
    position: int
    media_type: MediaType
    source_url: Optional[str] = None
    media_file: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CollectionOut(CollectionBase):
    id: UUID
    organization_id: UUID
    project_id: UUID
    created_by_id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    media: List[CollectionMediaOut] = []
