"""Badge catalog and earned-badge endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from boli.database import get_session
from boli.gamification.badge_service import badge_progress, get_user_badges, load_catalog
from boli.gamification.schemas import (
    AllBadgesResponse,
    BadgeProgressResponse,
    BadgeResponse,
    EarnedBadgeResponse,
    UserBadgesResponse,
)
from boli.ledger.service import get_profile

router = APIRouter(prefix="/api/v1", tags=["Badges"])


@router.get("/badges", response_model=AllBadgesResponse)
async def list_badges(db: AsyncSession = Depends(get_session)):  # noqa: B008
    """Get the full badge catalog."""
    catalog = await load_catalog(db)
    return AllBadgesResponse(badges=[BadgeResponse.model_validate(b) for b in catalog])


@router.get("/profiles/{user_id}/badges", response_model=UserBadgesResponse)
async def list_user_badges(user_id: uuid.UUID, db: AsyncSession = Depends(get_session)):  # noqa: B008
    """Get a user's earned badges and progress toward the rest."""
    profile = await get_profile(db, user_id)
    catalog = await load_catalog(db)
    earned = await get_user_badges(db, user_id)
    earned_ids = {ub.badge_id for ub in earned}

    progress = []
    for badge in catalog:
        current, percent = badge_progress(profile, badge)
        progress.append(BadgeProgressResponse(
            badge_id=badge.id,
            current=current,
            required=badge.requirement_value,
            progress_percent=round(percent, 1),
            earned=badge.id in earned_ids,
        ))

    return UserBadgesResponse(
        earned=[
            EarnedBadgeResponse(badge=BadgeResponse.model_validate(ub.badge), earned_at=ub.earned_at)
            for ub in earned
        ],
        progress=progress,
        total_available=len(catalog),
        total_earned=len(earned),
    )
