"""Variant vote endpoint."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from boli.database import get_session
from boli.dependencies import get_current_user_id, get_redis_dep
from boli.gamification.badge_service import publish_badges_earned
from boli.gamification.schemas import BadgeResponse
from boli.voting.schemas import CastVoteRequest, VoteResponse
from boli.voting.service import cast_vote

router = APIRouter(prefix="/api/v1", tags=["Votes"])


@router.post("/variant-links/{link_id}/votes", response_model=VoteResponse)
async def vote(
    link_id: uuid.UUID,
    body: CastVoteRequest,
    user_id: uuid.UUID = Depends(get_current_user_id),  # noqa: B008
    db: AsyncSession = Depends(get_session),  # noqa: B008
    redis: object = Depends(get_redis_dep),  # noqa: B008
):
    """Cast, repeat or change the acting user's vote on a variant link."""
    result = await cast_vote(db, user_id, link_id, body.vote_type)
    await db.commit()
    await publish_badges_earned(redis, user_id, result.new_badges)
    return VoteResponse(
        outcome=result.outcome,
        vote_type=result.vote_type,
        link_id=result.link.id,
        votes_up=result.link.votes_up,
        votes_down=result.link.votes_down,
        points_awarded=result.points_awarded,
        new_badges=[BadgeResponse.model_validate(b) for b in result.new_badges],
    )
