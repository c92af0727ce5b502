"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from idears.config import Settings
from idears.db.session import Database
from idears.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway database file and upload directory."""
    return Settings(
        _env_file=None,
        environment="production",
        database_path=tmp_path / "data" / "test.db",
        upload_dir=tmp_path / "uploads",
        max_upload_size_bytes=1024,
        api_prefix="/api",
    )


@pytest.fixture
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    """Initialized store handle for repository-level tests."""
    db = Database(settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as s:
        yield s


@pytest.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """Application with its lifespan (database + upload dir) running."""
    application = create_app(settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def row_count(app: FastAPI) -> Callable[[type], Awaitable[int]]:
    """Count the rows of a model's table in the running app's database."""

    async def count(model: type) -> int:
        async with app.state.db.session() as s:
            result = await s.execute(select(func.count()).select_from(model))
            return result.scalar_one()

    return count
