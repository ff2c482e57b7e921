from contextlib import asynccontextmanager
from fastapi import FastAPI

from app.core.celery_app import celery_app  # noqa: F401  registers the app used by .delay()
from app.core.config import settings
from app.core.database.db import engine
from app.core.database.base import Base
from app.core.logging import configure_logging

# Models referenced only through foreign keys still need to be on Base.metadata
import organizations.domain.models  # noqa: F401
import users.models.user  # noqa: F401
import collection.domain.models  # noqa: F401

# Routers
from collection.routers import collections_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: dev-friendly table creation
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    # Shutdown
    await engine.dispose()


configure_logging()

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    debug=settings.debug,
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)


@app.get("/health", tags=["system"])
async def health():
    return {"status": "ok"}


app.include_router(collections_router)
