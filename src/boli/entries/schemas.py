"""Pydantic models for dictionary entry endpoints."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class EntrySummary(BaseModel):
    id: uuid.UUID
    word: str
    meaning_en: str
    meaning_ur: str
    dialect_id: int
    dialect_name: str | None = None
    audio_count: int
    created_at: datetime


class EntriesResponse(BaseModel):
    entries: list[EntrySummary]


class AudioEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    audio_url: str
    accent: str | None = None
    duration_seconds: float | None = None
    uploaded_by: uuid.UUID | None = None
    created_at: datetime


class EntryDetailResponse(BaseModel):
    id: uuid.UUID
    word: str
    meaning_en: str
    meaning_ur: str
    script: str | None = None
    example_sentence: str | None = None
    dialect_id: int
    dialect_name: str | None = None
    dialect_region: str | None = None
    created_by: uuid.UUID | None = None
    contributor_name: str | None = None
    created_at: datetime
    audio: list[AudioEntryResponse]
