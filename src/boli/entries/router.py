"""Dictionary entry endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from boli.database import get_session
from boli.entries.schemas import (
    AudioEntryResponse,
    EntriesResponse,
    EntryDetailResponse,
    EntrySummary,
)
from boli.entries.service import get_entry_detail, search_entries

router = APIRouter(prefix="/api/v1/entries", tags=["Entries"])


@router.get("", response_model=EntriesResponse)
async def entries(
    q: str | None = Query(None, max_length=128),
    dialect_id: int | None = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_session),  # noqa: B008
):
    """Search the dictionary, newest entries first."""
    rows = await search_entries(db, query=q, dialect_id=dialect_id, limit=limit, offset=offset)
    return EntriesResponse(entries=[
        EntrySummary(
            id=entry.id,
            word=entry.word,
            meaning_en=entry.meaning_en,
            meaning_ur=entry.meaning_ur,
            dialect_id=entry.dialect_id,
            dialect_name=entry.dialect.name if entry.dialect else None,
            audio_count=audio_count,
            created_at=entry.created_at,
        )
        for entry, audio_count in rows
    ])


@router.get("/{entry_id}", response_model=EntryDetailResponse)
async def entry_detail(entry_id: uuid.UUID, db: AsyncSession = Depends(get_session)):  # noqa: B008
    """One entry with its recordings."""
    detail = await get_entry_detail(db, entry_id)
    audio = [AudioEntryResponse.model_validate(a) for a in detail.pop("audio")]
    return EntryDetailResponse(**detail, audio=audio)
