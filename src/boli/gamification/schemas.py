"""Pydantic response models for badge endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class BadgeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    icon: str
    category: str
    requirement_type: str
    requirement_value: int
    points_reward: int


class AllBadgesResponse(BaseModel):
    badges: list[BadgeResponse]


class EarnedBadgeResponse(BaseModel):
    badge: BadgeResponse
    earned_at: datetime


class BadgeProgressResponse(BaseModel):
    badge_id: int
    current: int
    required: int
    progress_percent: float
    earned: bool


class UserBadgesResponse(BaseModel):
    earned: list[EarnedBadgeResponse]
    progress: list[BadgeProgressResponse]
    total_available: int
    total_earned: int
