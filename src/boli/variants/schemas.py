"""Pydantic models for variant link endpoints."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class VariantResponse(BaseModel):
    link_id: uuid.UUID
    entry_id: uuid.UUID
    word: str
    meaning_en: str
    meaning_ur: str
    dialect_name: str | None = None
    confidence_score: float
    votes_up: int
    votes_down: int


class VariantsResponse(BaseModel):
    entry_id: uuid.UUID
    variants: list[VariantResponse]


class CreateLinkRequest(BaseModel):
    entry1_id: uuid.UUID
    entry2_id: uuid.UUID
    confidence_score: float


class LinkResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    entry1_id: uuid.UUID
    entry2_id: uuid.UUID
    confidence_score: float
    votes_up: int
    votes_down: int
    created_at: datetime
