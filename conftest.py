import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("API_TOKEN", "test-api-token")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool, StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as AsyncSessionSQLModel

import app.models  # noqa: F401
from app.core.config import settings
from app.db.database import get_db
from app.main import app as fastapi_app
from app.models.bookmark import Bookmark


def make_bookmarks_array():
    return [
        {
            "id": 1,
            "title": "Thinkful",
            "url": "https://www.thinkful.com",
            "description": "Think outside the classroom",
            "rating": 5,
        },
        {
            "id": 2,
            "title": "Google",
            "url": "https://www.google.com",
            "description": "Where we find everything else",
            "rating": 4,
        },
        {
            "id": 3,
            "title": "MDN",
            "url": "https://developer.mozilla.org",
            "description": "The only place to find web documentation",
            "rating": 5,
        },
    ]


def make_malicious_bookmark():
    malicious = {
        "id": 911,
        "title": 'Naughty naughty very naughty <script>alert("xss");</script>',
        "url": "https://www.hackers.com",
        "description": 'Bad image <img src="https://url.to.file.which/does-not.exist" onerror="alert(document.cookie);">. But not <strong>all</strong> bad.',
        "rating": 1,
    }
    sanitized = {
        **malicious,
        "title": 'Naughty naughty very naughty &lt;script&gt;alert("xss");&lt;/script&gt;',
        "description": 'Bad image <img src="https://url.to.file.which/does-not.exist">. But not <strong>all</strong> bad.',
    }
    return malicious, sanitized


@pytest_asyncio.fixture(scope="function")
async def async_test_engine():
    """Create fresh tables for each test, in memory unless TEST_DATABASE_URL is set."""
    db_url = settings.TEST_DATABASE_URL or "sqlite+aiosqlite://"
    if db_url.startswith("sqlite"):
        # One shared connection so every session sees the same in-memory database
        pool_options = {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    else:
        pool_options = {"poolclass": NullPool}

    test_engine = create_async_engine(
        db_url.replace("postgresql://", "postgresql+asyncpg://", 1),
        echo=False,
        future=True,
        **pool_options
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(async_test_engine):
    return sessionmaker(
        bind=async_test_engine,
        class_=AsyncSessionSQLModel,
        expire_on_commit=False,
        autoflush=False
    )


@pytest_asyncio.fixture(scope="function")
async def async_test_session(session_factory):
    """Session for arranging and inspecting data directly."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(session_factory):
    """HTTP client whose requests each get their own session on the test database."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://test") as ac:
        yield ac
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {settings.API_TOKEN}"}


@pytest_asyncio.fixture(scope="function")
async def test_bookmarks(async_test_session):
    bookmarks = make_bookmarks_array()
    async_test_session.add_all([Bookmark(**data) for data in bookmarks])
    await async_test_session.commit()
    return bookmarks


@pytest_asyncio.fixture(scope="function")
async def malicious_bookmark(async_test_session):
    malicious, sanitized = make_malicious_bookmark()
    async_test_session.add(Bookmark(**malicious))
    await async_test_session.commit()
    return malicious, sanitized
