import logging

from collection.domain.entities.feed import FeedMedia, feed_media_adapter
from collection.domain.models.collection import Collection
from collection.ports.outbound.image_fetcher_port import ImageFetcherPort
from collection.tasks.images import fetch_collection_images

logger = logging.getLogger(__name__)


class CeleryImageFetcher(ImageFetcherPort):
    """Queues image materialization; retries and failures live with the task."""

    def fetch_images(self, collection: Collection, media: FeedMedia) -> None:
        if not media:
            logger.debug("No feed media for collection %s; nothing to queue", collection.id)
            return
        fetch_collection_images.delay(str(collection.id), feed_media_adapter.dump_python(media, mode="json"))
