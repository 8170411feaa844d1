"""Pydantic models for profile endpoints."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateProfileRequest(BaseModel):
    id: uuid.UUID | None = None
    name: str = Field(min_length=1, max_length=128)
    email: str = Field(min_length=3, max_length=320)


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    points: int
    words_added: int
    audio_uploaded: int
    votes_cast: int
    labels_added: int
    streak_days: int
    last_contribution_date: date | None = None
    default_language_id: int | None = None
    default_dialect_id: int | None = None
    created_at: datetime


class UpdatePreferencesRequest(BaseModel):
    """Fields left out are unchanged; an explicit null clears the default."""

    model_config = ConfigDict(extra="forbid")

    default_language_id: int | None = None
    default_dialect_id: int | None = None


class PointsEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    amount: int
    source: str
    source_id: str | None = None
    description: str | None = None
    occurred_on: date
    created_at: datetime


class PointsHistoryResponse(BaseModel):
    entries: list[PointsEntry]
    total_points: int
