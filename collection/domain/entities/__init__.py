from .collection import CollectionBase, CollectionCreate, CollectionMediaOut, CollectionOut, CreateCollectionIn
from .feed import FeedMedia, ImageMedia, MediaDescriptor, VideoMedia, feed_media_adapter, iter_descriptors

__all__ = [
    "CollectionBase",
    "CollectionCreate",
    "CollectionMediaOut",
    "CollectionOut",
    "CreateCollectionIn",
    "FeedMedia",
    "ImageMedia",
    "MediaDescriptor",
    "VideoMedia",
    "feed_media_adapter",
    "iter_descriptors",
]
