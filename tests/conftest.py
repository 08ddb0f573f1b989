"""Pytest fixtures and configuration."""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing the app
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-at-least-32-characters-long")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from game_reviews.database import Base, get_db
from game_reviews.main import app
from game_reviews.models import Game, Genre
from tests.helpers import Caller, make_caller


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession]]:
    """Fresh in-memory database per test, with all tables created."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for exercising repositories and services directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing FastAPI endpoints against the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def catalog(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Seed two genres with one game each."""
    async with session_factory() as session:
        session.add_all(
            [
                Genre(id=1, name="Action"),
                Genre(id=2, name="Puzzle"),
            ]
        )
        await session.flush()
        session.add_all(
            [
                Game(id=1, title="Doom", description="Demons", image_url=None, genre_id=1),
                Game(id=2, title="Tetris", description=None, image_url="tetris.png", genre_id=2),
            ]
        )
        await session.commit()


@pytest.fixture
def alice() -> Caller:
    return make_caller("alice")


@pytest.fixture
def bob() -> Caller:
    return make_caller("bob")


@pytest.fixture
def admin() -> Caller:
    return make_caller("root", role="Admin")
