"""Pytest fixtures backed by an in-memory SQLite database."""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator, List

# Keep module-level engine/config from touching a real database or the network
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SEED_ON_STARTUP", "false")

import pytest
import pytest_asyncio

from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from app.models.players import PlayerCreate


SAMPLE_PLAYERS = [
    PlayerCreate(
        name="Shai Gilgeous-Alexander",
        source_slug="gilgesh01",
        position="PG",
        age=26,
        team="OKC",
        games=76,
        points=32.7,
        rebounds=5.0,
        assists=6.4,
    ),
    PlayerCreate(
        name="Nikola Jokić",
        source_slug="jokicni01",
        position="C",
        age=29,
        team="DEN",
        games=70,
        points=29.6,
        rebounds=12.7,
        assists=10.2,
    ),
    PlayerCreate(
        name="Jayson Tatum",
        source_slug="tatumja01",
        position="PF",
        age=26,
        team="BOS",
        games=72,
        points=26.8,
        rebounds=8.7,
        assists=6.0,
    ),
]


@pytest_asyncio.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Yield an engine over a fresh in-memory database with the players table."""
    # Ensure SQLModel metadata is populated before creating tables.
    from app.schemas import players  # noqa: F401  # pylint: disable=unused-import

    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session bound to the test database."""
    session_factory = async_sessionmaker(
        async_engine, expire_on_commit=False, class_=AsyncSession
    )
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def seeded_players(db_session: AsyncSession) -> List[PlayerCreate]:
    """Insert the sample players and return what was inserted."""
    from app.services.player_service import add_all_players

    await add_all_players(db_session, SAMPLE_PLAYERS)
    return SAMPLE_PLAYERS


@asynccontextmanager
async def client_for(app: FastAPI, db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """Open an HTTP client against ``app`` with its sessions bound to ``db_session``."""
    from app.utils.db_async import get_session

    async def _get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_session] = _get_session_override
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_session, None)


@pytest_asyncio.fixture()
async def app_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the default (CORS-enabled) application."""
    from app.main import app

    async with client_for(app, db_session) as client:
        yield client


@pytest_asyncio.fixture()
async def plain_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for an application built without the CORS layer."""
    from app.config import Settings
    from app.main import create_app

    app = create_app(Settings(cors_enabled=False, seed_on_startup=False, _env_file=None))
    async with client_for(app, db_session) as client:
        yield client
