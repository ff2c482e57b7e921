# conftest.py
import os

# Settings are read at import time; give the required ones test values first.
os.environ.setdefault("DB_USER", "test")
os.environ.setdefault("DB_PASS", "test")
os.environ.setdefault("DB_HOST", "localhost")
os.environ.setdefault("DB_PORT", "5432")
os.environ.setdefault("DB_NAME", "test")
os.environ.setdefault("JWT_SECRET", "test-secret")

from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from app.main import app
from app.core.auth import optional_current_user
from app.core.database.db import get_session
from app.core.database.base import Base
from collection.domain.entities.feed import FeedMedia
from collection.ports.outbound.feed_source_port import FeedSourcePort
from collection.ports.outbound.image_fetcher_port import ImageFetcherPort
from organizations.domain.models import Organization, Project
from shared.wiring import get_feed_source, get_image_fetcher
from users.models.role import Role, RoleName
from users.models.user import User


# ---- Fakes ------------------------------------------------------------------

class FakeFeedSource(FeedSourcePort):
    def __init__(self, body: bytes | None = b'{"data": []}', error: Optional[Exception] = None) -> None:
        self.body = body
        self.error = error
        self.tokens: list[str] = []

    def fetch_recent_media(self, token: str) -> bytes:
        self.tokens.append(token)
        if self.error is not None:
            raise self.error
        return self.body


class FakeImageFetcher(ImageFetcherPort):
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def fetch_images(self, collection, media: FeedMedia) -> None:
        self.calls.append((collection, media))


# ---- Async engine + session --------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def async_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()

@pytest_asyncio.fixture(scope="function")
async def SessionMaker(async_engine):
    return async_sessionmaker(bind=async_engine, expire_on_commit=False, class_=AsyncSession)

@pytest_asyncio.fixture
async def db_session(SessionMaker):
    async with SessionMaker() as s:
        yield s

@pytest_asyncio.fixture(scope="function")
async def override_get_session(db_session):
    async def _dep():
        yield db_session
    app.dependency_overrides[get_session] = _dep
    yield
    app.dependency_overrides.pop(get_session, None)


# ---- Tenancy seed ------------------------------------------------------------

class Tenancy:
    """Two organizations, one project each, a member and a super admin."""

    def __init__(self, organization, other_organization, project, other_project, member, super_admin):
        self.organization = organization
        self.other_organization = other_organization
        self.project = project
        self.other_project = other_project
        self.member = member
        self.super_admin = super_admin

@pytest_asyncio.fixture
async def tenancy(db_session: AsyncSession) -> Tenancy:
    org = Organization(name="Acme")
    other_org = Organization(name="Globex")
    db_session.add_all([org, other_org])
    await db_session.flush()

    project = Project(name="Launch", organization_id=org.id)
    other_project = Project(name="Elsewhere", organization_id=other_org.id)

    editor = Role(name=RoleName.editor)
    root = Role(name=RoleName.super_admin)
    member = User(email="member@acme.test", organization_id=org.id, roles=[editor])
    super_admin = User(email="root@platform.test", organization_id=None, roles=[root])

    db_session.add_all([project, other_project, editor, root, member, super_admin])
    await db_session.commit()
    return Tenancy(org, other_org, project, other_project, member, super_admin)


# ---- Collaborator overrides ----------------------------------------------------

@pytest.fixture
def feed_source() -> FakeFeedSource:
    fs = FakeFeedSource()
    app.dependency_overrides[get_feed_source] = lambda: fs
    yield fs
    app.dependency_overrides.pop(get_feed_source, None)

@pytest.fixture
def image_fetcher() -> FakeImageFetcher:
    fi = FakeImageFetcher()
    app.dependency_overrides[get_image_fetcher] = lambda: fi
    yield fi
    app.dependency_overrides.pop(get_image_fetcher, None)

@pytest.fixture
def acting_user():
    """
    Pick the caller for a request: ``acting_user(user)``.
    Default is anonymous (None).
    """
    current = {"user": None}
    app.dependency_overrides[optional_current_user] = lambda: current["user"]

    def _set(user):
        current["user"] = user

    yield _set
    app.dependency_overrides.pop(optional_current_user, None)


# ---- HTTP client -------------------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def client(override_get_session, feed_source, image_fetcher) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as c:
        yield c
