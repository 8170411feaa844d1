"""Pydantic response models for leaderboard and competition endpoints."""

from __future__ import annotations

import uuid
from datetime import date

from pydantic import BaseModel


class LeaderboardBadge(BaseModel):
    name: str
    icon: str


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: uuid.UUID
    name: str
    points: int
    words_added: int
    audio_uploaded: int
    votes_cast: int
    streak_days: int
    badges: list[LeaderboardBadge] = []


class LeaderboardResponse(BaseModel):
    entries: list[LeaderboardEntry]


class DialectStanding(BaseModel):
    dialect_id: int
    dialect_name: str
    region: str | None = None
    total_points: int
    total_words: int
    total_audio: int
    total_labels: int
    contributor_count: int


class TopContributor(BaseModel):
    user_id: uuid.UUID
    user_name: str
    dialect_name: str
    points_earned: int
    words_added: int
    audio_uploaded: int
    labels_added: int


class WeeklyCompetitionResponse(BaseModel):
    week_iso: str
    week_start: date
    week_end: date
    dialects: list[DialectStanding]
    top_contributors: list[TopContributor]
