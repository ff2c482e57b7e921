from typing import Protocol

from collection.domain.entities.feed import FeedMedia
from collection.domain.models.collection import Collection


class ImageFetcherPort(Protocol):
    def fetch_images(self, collection: Collection, media: FeedMedia) -> None: ...
