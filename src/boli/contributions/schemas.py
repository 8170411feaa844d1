"""Pydantic models for contribution endpoints."""

from __future__ import annotations

import uuid
from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from boli.gamification.schemas import BadgeResponse


class AddWordRequest(BaseModel):
    word: str = Field(min_length=1, max_length=128)
    dialect_id: int
    meaning_en: str = Field(min_length=1)
    meaning_ur: str = Field(min_length=1)
    example_sentence: str | None = None
    script: str | None = None
    audio_url: str | None = None


class AddWordResponse(BaseModel):
    entry_id: uuid.UUID
    points_awarded: int
    new_badges: list[BadgeResponse] = []


class DailyLabelRequest(BaseModel):
    seed_word_id: int
    dialect_id: int | None = None
    label_text: str = Field(min_length=1, max_length=256)
    audio_url: str | None = None


class DailyLabelResponse(BaseModel):
    label_id: int
    points_awarded: int
    new_badges: list[BadgeResponse] = []


class SeedWordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    word_en: str
    word_ur: str | None = None
    category: str
    difficulty: str


class DailyWordsResponse(BaseModel):
    day: date
    words: list[SeedWordResponse]
    default_language_id: int | None = None
    default_dialect_id: int | None = None


class DialectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    region: str | None = None
    language_id: int | None = None


class LanguageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    native_name: str
    region: str
    iso_code: str | None = None
    speakers_estimate: str | None = None
