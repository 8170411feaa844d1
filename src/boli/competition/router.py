"""Leaderboard and weekly tribe competition endpoints."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from boli.competition.schemas import (
    DialectStanding,
    LeaderboardEntry,
    LeaderboardResponse,
    TopContributor,
    WeeklyCompetitionResponse,
)
from boli.competition.service import dialect_standings, leaderboard, top_contributors
from boli.competition.week_utils import get_week_dates, get_week_iso
from boli.config import get_settings
from boli.database import get_session

router = APIRouter(prefix="/api/v1", tags=["Competition"])


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(
    limit: int | None = Query(None, ge=1, le=200),
    db: AsyncSession = Depends(get_session),  # noqa: B008
):
    """All-time contributors by points."""
    rows = await leaderboard(db, limit=limit or get_settings().leaderboard_limit)
    return LeaderboardResponse(entries=[LeaderboardEntry(**r) for r in rows])


@router.get("/competition/weekly", response_model=WeeklyCompetitionResponse)
async def weekly_competition(
    week_of: date | None = Query(None, description="Any date inside the week; defaults to this week"),
    db: AsyncSession = Depends(get_session),  # noqa: B008
):
    """Dialect standings and top contributors for one ISO week."""
    monday, sunday = get_week_dates(week_of)
    standings = await dialect_standings(db, monday)
    top = await top_contributors(db, monday, limit=get_settings().weekly_top_contributors)
    return WeeklyCompetitionResponse(
        week_iso=get_week_iso(monday),
        week_start=monday,
        week_end=sunday,
        dialects=[DialectStanding(**s) for s in standings],
        top_contributors=[TopContributor(**c) for c in top],
    )
