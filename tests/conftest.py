from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from anime_api.db.session import Base, get_db
from anime_api.main import app

# Pytest only picks up fixtures from conftest.py files. Fixtures defined in other
# modules (like tests/seeds.py) are invisible unless we register them here.
pytest_plugins = ["tests.seeds"]


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    """Isolated SQLite database per test, schema built from Base.metadata."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    async with async_sessionmaker(engine, expire_on_commit=False)() as session:
        yield session


def _override_db(db: AsyncSession) -> None:
    async def override_get_db() -> AsyncIterator[AsyncSession]:
        yield db

    app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def credential_session(db: AsyncSession) -> Iterator[None]:
    """Point the authorization middleware's credential lookup at the test session."""

    @asynccontextmanager
    async def session_factory() -> AsyncIterator[AsyncSession]:
        yield db

    original = app.state.session_factory
    app.state.session_factory = session_factory
    yield
    app.state.session_factory = original


@pytest_asyncio.fixture
async def client(db: AsyncSession, credential_session: None) -> AsyncIterator[AsyncClient]:
    """HTTP client that uses the test database session."""
    _override_db(db)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def lenient_client(db: AsyncSession, credential_session: None) -> AsyncIterator[AsyncClient]:
    """Like ``client`` but returns 500 responses instead of re-raising the app's exception."""
    _override_db(db)

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
