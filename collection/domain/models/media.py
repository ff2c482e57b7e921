from __future__ import annotations
from datetime import datetime
from enum import Enum
from uuid import uuid4, UUID

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, String, Text, func, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database.base import Base

class MediaType(str, Enum):
    image = "image"
    video = "video"

class CollectionMedia(Base):
    __tablename__ = "collection_media"
    __table_args__ = (
        UniqueConstraint("collection_id", "external_id", "position", name="uq_collection_media_item"),
    )

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True, default=uuid4)
    collection_id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), ForeignKey("collections.id", ondelete="CASCADE"), nullable=False)

    external_id: Mapped[str] = mapped_column(String(255), nullable=False)
    feed_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # item order in the source feed
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # order among the imported entries of a carousel
    media_type: Mapped[MediaType] = mapped_column(SAEnum(MediaType, name="collection_media_type"), nullable=False)

    source_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    media_file: Mapped[str | None] = mapped_column(String(512), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    collection: Mapped["Collection"] = relationship(back_populates="media")
