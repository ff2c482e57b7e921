from .collection import Collection
from .media import CollectionMedia, MediaType

__all__ = ["Collection", "CollectionMedia", "MediaType"]
