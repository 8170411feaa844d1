"""Weekly tribe standings and all-time leaderboard.

Weekly totals are aggregated at read time from the points ledger: a dialect's
score for a week is the sum of its contributors' dialect-tagged grants dated
inside that ISO week.
"""

from __future__ import annotations

import uuid
from datetime import date, timedelta

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from boli.competition.week_utils import get_monday
from boli.db.models import Dialect, PointsLedger, Profile, UserBadge

_WORD_SOURCES = ("word",)
_AUDIO_SOURCES = ("audio", "label_audio")
_LABEL_SOURCES = ("label",)


def _count_sources(sources: tuple[str, ...]):  # noqa: ANN202
    return func.sum(case((PointsLedger.source.in_(sources), 1), else_=0))


def _week_filter(week_start: date):  # noqa: ANN202
    monday = get_monday(week_start)
    return (
        PointsLedger.occurred_on >= monday,
        PointsLedger.occurred_on <= monday + timedelta(days=6),
        PointsLedger.dialect_id.is_not(None),
    )


async def dialect_standings(db: AsyncSession, week_start: date) -> list[dict]:
    """Per-dialect totals for the ISO week containing ``week_start``, best first."""
    result = await db.execute(
        select(
            PointsLedger.dialect_id,
            Dialect.name,
            Dialect.region,
            func.sum(PointsLedger.amount).label("total_points"),
            _count_sources(_WORD_SOURCES).label("total_words"),
            _count_sources(_AUDIO_SOURCES).label("total_audio"),
            _count_sources(_LABEL_SOURCES).label("total_labels"),
            func.count(func.distinct(PointsLedger.user_id)).label("contributor_count"),
        )
        .join(Dialect, Dialect.id == PointsLedger.dialect_id)
        .where(*_week_filter(week_start))
        .group_by(PointsLedger.dialect_id, Dialect.name, Dialect.region)
        .order_by(func.sum(PointsLedger.amount).desc(), Dialect.name)
    )
    return [
        {
            "dialect_id": row.dialect_id,
            "dialect_name": row.name,
            "region": row.region,
            "total_points": int(row.total_points or 0),
            "total_words": int(row.total_words or 0),
            "total_audio": int(row.total_audio or 0),
            "total_labels": int(row.total_labels or 0),
            "contributor_count": int(row.contributor_count),
        }
        for row in result
    ]


async def top_contributors(db: AsyncSession, week_start: date, limit: int = 10) -> list[dict]:
    """Top (user, dialect) pairs by points earned in the ISO week."""
    result = await db.execute(
        select(
            PointsLedger.user_id,
            Profile.name.label("user_name"),
            Dialect.name.label("dialect_name"),
            func.sum(PointsLedger.amount).label("points_earned"),
            _count_sources(_WORD_SOURCES).label("words_added"),
            _count_sources(_AUDIO_SOURCES).label("audio_uploaded"),
            _count_sources(_LABEL_SOURCES).label("labels_added"),
        )
        .join(Profile, Profile.id == PointsLedger.user_id)
        .join(Dialect, Dialect.id == PointsLedger.dialect_id)
        .where(*_week_filter(week_start))
        .group_by(PointsLedger.user_id, Profile.name, PointsLedger.dialect_id, Dialect.name)
        .order_by(func.sum(PointsLedger.amount).desc(), Profile.name)
        .limit(limit)
    )
    return [
        {
            "user_id": row.user_id,
            "user_name": row.user_name,
            "dialect_name": row.dialect_name,
            "points_earned": int(row.points_earned or 0),
            "words_added": int(row.words_added or 0),
            "audio_uploaded": int(row.audio_uploaded or 0),
            "labels_added": int(row.labels_added or 0),
        }
        for row in result
    ]


async def leaderboard(db: AsyncSession, limit: int = 50) -> list[dict]:
    """All-time leaderboard by points, with each contributor's badges."""
    profiles = list(
        (
            await db.execute(
                select(Profile)
                .order_by(Profile.points.desc(), Profile.created_at)
                .limit(limit)
                .execution_options(populate_existing=True)
            )
        ).scalars().all()
    )
    if not profiles:
        return []

    badges: dict[uuid.UUID, list[dict]] = {p.id: [] for p in profiles}
    earned = await db.execute(select(UserBadge).where(UserBadge.user_id.in_(list(badges))))
    for ub in earned.scalars().unique():
        badges[ub.user_id].append({"name": ub.badge.name, "icon": ub.badge.icon})

    return [
        {
            "rank": rank,
            "user_id": p.id,
            "name": p.name,
            "points": p.points,
            "words_added": p.words_added,
            "audio_uploaded": p.audio_uploaded,
            "votes_cast": p.votes_cast,
            "streak_days": p.streak_days,
            "badges": badges[p.id],
        }
        for rank, p in enumerate(profiles, start=1)
    ]
