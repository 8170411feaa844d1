"""Profile ledger endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from boli.database import get_session
from boli.dependencies import get_current_user_id
from boli.errors import ForbiddenError
from boli.ledger.schemas import (
    CreateProfileRequest,
    PointsEntry,
    PointsHistoryResponse,
    ProfileResponse,
    UpdatePreferencesRequest,
)
from boli.ledger.service import create_profile, get_points_history, get_profile, update_preferences

router = APIRouter(prefix="/api/v1/profiles", tags=["Profiles"])


@router.post("", response_model=ProfileResponse, status_code=201)
async def create(body: CreateProfileRequest, db: AsyncSession = Depends(get_session)):  # noqa: B008
    """Create the ledger profile for a newly registered account."""
    profile = await create_profile(db, body.name, body.email, user_id=body.id)
    await db.commit()
    return ProfileResponse.model_validate(profile)


@router.get("/{user_id}", response_model=ProfileResponse)
async def read(user_id: uuid.UUID, db: AsyncSession = Depends(get_session)):  # noqa: B008
    """Get a profile's counters."""
    return ProfileResponse.model_validate(await get_profile(db, user_id))


@router.patch("/{user_id}", response_model=ProfileResponse)
async def update(
    user_id: uuid.UUID,
    body: UpdatePreferencesRequest,
    acting_user_id: uuid.UUID = Depends(get_current_user_id),  # noqa: B008
    db: AsyncSession = Depends(get_session),  # noqa: B008
):
    """Set the acting user's default language and dialect."""
    if acting_user_id != user_id:
        raise ForbiddenError("You can only update your own profile")
    profile = await update_preferences(db, user_id, body.model_dump(exclude_unset=True))
    await db.commit()
    return ProfileResponse.model_validate(profile)


@router.get("/{user_id}/points", response_model=PointsHistoryResponse)
async def points_history(
    user_id: uuid.UUID,
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_session),  # noqa: B008
):
    """Get recent point grants for a profile."""
    profile = await get_profile(db, user_id)
    entries = await get_points_history(db, user_id, limit=limit)
    return PointsHistoryResponse(
        entries=[PointsEntry.model_validate(e) for e in entries],
        total_points=profile.points,
    )
