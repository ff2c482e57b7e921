import logging

from celery.signals import worker_process_init
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(settings.database_url, echo=settings.debug)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

async def get_session() -> AsyncSession:
    async with SessionLocal() as session:
        yield session


def _create_task_engine() -> AsyncEngine:
    """Engine for one task run. The caller owns it and must dispose it before its loop closes."""
    return create_async_engine(
        settings.database_url,  # must be asyncpg URL: postgresql+asyncpg://...
        pool_pre_ping=True,
    )

@worker_process_init.connect
def reset_db_connection(**kwargs):
    """
    Reset database connection pool when Celery worker process starts.
    This prevents sharing database connections between forked processes.
    """
    logger.info("Disposing database engine in Celery worker process")
    engine.sync_engine.dispose(close=False)
