from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.db import get_session
from collection.adapters.outbound.image_fetcher_celery import CeleryImageFetcher
from collection.adapters.outbound.instagram_feed import InstagramFeedProvider
from collection.domain.repositories import CollectionRepository
from collection.ports.outbound.feed_source_port import FeedSourcePort
from collection.ports.outbound.image_fetcher_port import ImageFetcherPort
from collection.services.access_validator import AccessValidator
from collection.services.collection_service import CollectionService
from organizations.domain.repositories import OrganizationRepository, ProjectRepository


def get_feed_source() -> FeedSourcePort:
    return InstagramFeedProvider()

def get_image_fetcher() -> ImageFetcherPort:
    return CeleryImageFetcher()

def get_access_validator(db: AsyncSession = Depends(get_session)) -> AccessValidator:
    return AccessValidator(OrganizationRepository(db), ProjectRepository(db), CollectionRepository(db))


def get_collection_service(
    db: AsyncSession = Depends(get_session),
    validator: AccessValidator = Depends(get_access_validator),
    feed_source: FeedSourcePort = Depends(get_feed_source),
    image_fetcher: ImageFetcherPort = Depends(get_image_fetcher),
) -> CollectionService:
    """
    Build the service with one DB session shared by the validator and the
    repository (FastAPI caches get_session per request).
    """
    return CollectionService(
        validator=validator,
        repo=CollectionRepository(db),
        feed_source=feed_source,
        image_fetcher=image_fetcher,
    )
