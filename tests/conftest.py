"""Shared test fixtures.

Every test gets a fresh in-memory SQLite database. All sessions share the one
connection held by the StaticPool, so a test must never keep a direct session
open while it drives the API client.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import AsyncGenerator

os.environ["BOLI_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["BOLI_REDIS_URL"] = ""
os.environ["BOLI_LOG_FORMAT"] = "console"
os.environ["BOLI_SEED_CATALOG_ON_STARTUP"] = "false"

import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from boli.config import get_settings  # noqa: E402

get_settings.cache_clear()

from boli.contributions.seed import seed_catalog  # noqa: E402
from boli.database import close_db, get_engine, get_session, init_db  # noqa: E402
from boli.db.base import Base  # noqa: E402
from boli.db.models import Dialect, Entry, Profile, SeedWord  # noqa: E402
from boli.gamification.seed import seed_badges  # noqa: E402
from boli.ledger.service import create_profile  # noqa: E402
from boli.main import create_app  # noqa: E402


async def _create_schema() -> None:
    await init_db(get_settings().database_url)
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """A session on an empty schema. The badge catalog is NOT seeded."""
    await _create_schema()
    async for session in get_session():
        yield session
    await close_db()


@pytest_asyncio.fixture
async def app() -> AsyncGenerator[FastAPI, None]:
    """The application over a fresh schema with badges and catalog seeded."""
    await _create_schema()
    async for session in get_session():
        await seed_badges(session)
        await seed_catalog(session)

    yield create_app()

    await close_db()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client over the seeded app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def dialect(db_session: AsyncSession) -> Dialect:
    row = Dialect(name="Multani", region="Multan")
    db_session.add(row)
    await db_session.commit()
    return row


@pytest_asyncio.fixture
async def other_dialect(db_session: AsyncSession) -> Dialect:
    row = Dialect(name="Pothwari", region="Rawalpindi")
    db_session.add(row)
    await db_session.commit()
    return row


@pytest_asyncio.fixture
async def seed_word(db_session: AsyncSession) -> SeedWord:
    row = SeedWord(word_en="water", word_ur="پانی", category="nature")
    db_session.add(row)
    await db_session.commit()
    return row


async def make_profile(db: AsyncSession, name: str = "Ayesha") -> Profile:
    """Create and commit a profile with a unique email."""
    profile = await create_profile(db, name, f"{name.lower()}-{uuid.uuid4().hex[:8]}@example.com")
    await db.commit()
    return profile


@pytest_asyncio.fixture
async def profile(db_session: AsyncSession) -> Profile:
    return await make_profile(db_session)


async def make_entry(db: AsyncSession, dialect: Dialect, word: str, meaning_en: str = "water") -> Entry:
    entry = Entry(word=word, dialect_id=dialect.id, meaning_en=meaning_en, meaning_ur="پانی")
    db.add(entry)
    await db.commit()
    return entry


async def api_profile(client: AsyncClient, name: str = "Bilal") -> str:
    """Create a profile through the API and return its id."""
    response = await client.post(
        "/api/v1/profiles",
        json={"name": name, "email": f"{name.lower()}-{uuid.uuid4().hex[:8]}@example.com"},
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]
