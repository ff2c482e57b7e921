from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional
from uuid import UUID

import requests
from celery import shared_task
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.database.db import _create_task_engine
from collection.adapters.outbound.image_downloader import ImageDownloader
from collection.domain.entities.feed import FeedMedia, VideoMedia, feed_media_adapter, iter_descriptors
from collection.domain.models.media import CollectionMedia, MediaType
from collection.domain.repositories import CollectionMediaRepository, CollectionRepository

logger = logging.getLogger(__name__)


async def materialize_images(
    db: AsyncSession,
    collection_id: UUID,
    media: FeedMedia,
    downloader: Optional[ImageDownloader] = None,
) -> int:
    """
    Download feed images for a collection and replace its media rows.

    Returns the number of rows written. A collection that no longer exists
    is a no-op.
    """
    collection = await CollectionRepository(db).get(collection_id)
    if not collection:
        logger.info("Collection %s is gone; nothing to import", collection_id)
        return 0

    downloader = downloader or ImageDownloader()
    feed_order: dict[str, int] = {}
    rows: list[CollectionMedia] = []
    for external_id, position, descriptor in iter_descriptors(media):
        feed_index = feed_order.setdefault(external_id, len(feed_order))
        if isinstance(descriptor, VideoMedia):
            rows.append(
                CollectionMedia(
                    external_id=external_id,
                    feed_index=feed_index,
                    position=position,
                    media_type=MediaType.video,
                )
            )
            continue

        path = await asyncio.to_thread(
            downloader.download, descriptor.url, str(collection_id), f"{external_id}_{position}"
        )
        if path is None:
            continue
        rows.append(
            CollectionMedia(
                external_id=external_id,
                feed_index=feed_index,
                position=position,
                media_type=MediaType.image,
                source_url=descriptor.url,
                media_file=path,
            )
        )

    count = await CollectionMediaRepository(db).replace_for_collection(collection_id, rows)
    logger.info("Imported %d media items into collection %s", count, collection_id)
    return count


@shared_task(
    name="collection.fetch_images",
    autoretry_for=(requests.RequestException,),
    retry_backoff=True,
    max_retries=3,
)
def fetch_collection_images(collection_id: str, media: dict[str, Any]) -> int:
    async def _run() -> int:
        # engine bound to THIS loop; released before asyncio.run closes it
        task_engine = _create_task_engine()
        try:
            Session = async_sessionmaker(task_engine, expire_on_commit=False)
            async with Session() as db:
                return await materialize_images(db, UUID(collection_id), feed_media_adapter.validate_python(media))
        finally:
            await task_engine.dispose()

    return asyncio.run(_run())
