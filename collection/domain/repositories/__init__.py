from .collection_repository import CollectionRepository
from .media_repository import CollectionMediaRepository

__all__ = ["CollectionRepository", "CollectionMediaRepository"]
