"""Dictionary reads: browse, search and look up vocabulary entries."""

from __future__ import annotations

import uuid

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from boli.db.models import AudioEntry, Entry, Profile
from boli.errors import NotFoundError


async def get_entry(db: AsyncSession, entry_id: uuid.UUID) -> Entry:
    result = await db.execute(select(Entry).where(Entry.id == entry_id))
    entry = result.scalar_one_or_none()
    if entry is None:
        raise NotFoundError(f"Entry {entry_id} not found")
    return entry


async def search_entries(
    db: AsyncSession,
    query: str | None = None,
    dialect_id: int | None = None,
    limit: int = 50,
    offset: int = 0,
) -> list[tuple[Entry, int]]:
    """Entries newest first, each with its number of recordings.

    ``query`` matches case-insensitively anywhere in the word or either
    meaning; LIKE wildcards in it are matched literally. Without a query or
    dialect this is the recent-entries feed.
    """
    audio_count = (
        select(func.count(AudioEntry.id))
        .where(AudioEntry.entry_id == Entry.id)
        .correlate(Entry)
        .scalar_subquery()
    )
    stmt = select(Entry, audio_count).order_by(Entry.created_at.desc(), Entry.id)

    query = (query or "").strip()
    if query:
        stmt = stmt.where(
            or_(
                Entry.word.icontains(query, autoescape=True),
                Entry.meaning_en.icontains(query, autoescape=True),
                Entry.meaning_ur.icontains(query, autoescape=True),
            )
        )
    if dialect_id is not None:
        stmt = stmt.where(Entry.dialect_id == dialect_id)

    result = await db.execute(stmt.limit(limit).offset(offset))
    return [(entry, count) for entry, count in result.all()]


async def get_entry_detail(db: AsyncSession, entry_id: uuid.UUID) -> dict:
    """An entry with its dialect, contributor name and recordings (oldest first)."""
    entry = await get_entry(db, entry_id)

    contributor_name = None
    if entry.created_by is not None:
        contributor_name = (
            await db.execute(select(Profile.name).where(Profile.id == entry.created_by))
        ).scalar_one_or_none()

    audio = await db.execute(
        select(AudioEntry)
        .where(AudioEntry.entry_id == entry_id)
        .order_by(AudioEntry.created_at, AudioEntry.id)
    )
    return {
        "id": entry.id,
        "word": entry.word,
        "meaning_en": entry.meaning_en,
        "meaning_ur": entry.meaning_ur,
        "script": entry.script,
        "example_sentence": entry.example_sentence,
        "dialect_id": entry.dialect_id,
        "dialect_name": entry.dialect.name if entry.dialect else None,
        "dialect_region": entry.dialect.region if entry.dialect else None,
        "created_by": entry.created_by,
        "contributor_name": contributor_name,
        "created_at": entry.created_at,
        "audio": list(audio.scalars().all()),
    }
