from typing import Iterable
from uuid import UUID

from sqlalchemy import select, delete

from collection.domain.models.media import CollectionMedia
from shared.abstracts.abstract_repository import AbstractRepository


class CollectionMediaRepository(AbstractRepository):

    async def get(self, media_id: UUID):
        res = await self.db.execute(select(CollectionMedia).where(CollectionMedia.id == media_id))
        return res.scalars().first()

    async def replace_for_collection(self, collection_id: UUID, rows: Iterable[CollectionMedia]) -> int:
        """Swap all media rows of a collection in one commit, so reruns stay idempotent."""
        await self.db.execute(delete(CollectionMedia).where(CollectionMedia.collection_id == collection_id))
        count = 0
        for row in rows:
            row.collection_id = collection_id
            self.db.add(row)
            count += 1
        await self.db.commit()
        return count
