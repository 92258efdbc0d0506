"""Pytest configuration and fixtures for permgraph.

HTTP tests use create_app() with get_db / get_db_transactional overridden
to a per-test SQLite file database (aiosqlite), so no external database is
needed. Set DATABASE_URL before any permgraph import: settings validate it.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./permgraph-test.db")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from permgraph.core.config import get_settings
from permgraph.infrastructure.persistence import models  # noqa: F401  (registers tables)
from permgraph.infrastructure.persistence.database import (
    Base,
    build_engine,
    build_session_factory,
    get_db,
    get_db_transactional,
)
from permgraph.main import create_app


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop cached settings so env overrides in one test do not leak into the next."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def db_engine(tmp_path) -> AsyncEngine:
    """Per-test SQLite file database with the schema created from ORM metadata."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'permgraph.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(db_engine)


@pytest.fixture
async def db_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def app(session_factory: async_sessionmaker[AsyncSession]):
    """FastAPI app whose DB dependencies use the per-test database."""
    application = create_app()

    async def _get_db():
        async with session_factory() as session:
            yield session

    async def _get_db_transactional():
        async with session_factory() as session:
            async with session.begin():
                yield session

    application.dependency_overrides[get_db] = _get_db
    application.dependency_overrides[get_db_transactional] = _get_db_transactional
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
