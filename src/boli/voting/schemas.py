"""Pydantic models for vote endpoints."""

from __future__ import annotations

import uuid

from pydantic import BaseModel

from boli.gamification.schemas import BadgeResponse
from boli.voting.service import VoteOutcome, VoteType


class CastVoteRequest(BaseModel):
    vote_type: VoteType


class VoteResponse(BaseModel):
    outcome: VoteOutcome
    vote_type: VoteType
    link_id: uuid.UUID
    votes_up: int
    votes_down: int
    points_awarded: int
    new_badges: list[BadgeResponse] = []
