"""Badge evaluation with insert-if-absent awards and notification."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from boli.db.models import Badge, Profile, UserBadge
from boli.db.upsert import upsert_insert
from boli.errors import LedgerError
from boli.gamification.requirements import current_value, parse_requirement
from boli.ledger.service import add_points, get_profile, require_profile

logger = logging.getLogger(__name__)


async def load_catalog(db: AsyncSession) -> list[Badge]:
    """All badge definitions, lowest threshold first."""
    result = await db.execute(select(Badge).order_by(Badge.requirement_value, Badge.id))
    return list(result.scalars().all())


async def earned_badge_ids(db: AsyncSession, user_id: uuid.UUID) -> set[int]:
    """IDs of badges the user already holds."""
    result = await db.execute(select(UserBadge.badge_id).where(UserBadge.user_id == user_id))
    return set(result.scalars().all())


async def get_user_badges(db: AsyncSession, user_id: uuid.UUID) -> list[UserBadge]:
    """Badges earned by a user, most recent first."""
    result = await db.execute(
        select(UserBadge)
        .where(UserBadge.user_id == user_id)
        .order_by(UserBadge.earned_at.desc())
    )
    return list(result.scalars().unique().all())


async def award_badge(db: AsyncSession, user_id: uuid.UUID, badge: Badge) -> bool:
    """Award a badge to a user.

    Returns True if awarded, False if the (user, badge) row already existed.
    The reward is only granted when this call's insert won, so concurrent
    evaluations for the same user never pay out twice.
    """
    stmt = (
        upsert_insert(db, UserBadge)
        .values(user_id=user_id, badge_id=badge.id, earned_at=datetime.now(timezone.utc))
        .on_conflict_do_nothing(index_elements=["user_id", "badge_id"])
        .returning(UserBadge.id)
    )
    if (await db.execute(stmt)).scalar_one_or_none() is None:
        return False

    if badge.points_reward and badge.points_reward > 0:
        await add_points(
            db,
            user_id,
            badge.points_reward,
            source="badge",
            source_id=str(badge.id),
            description=f'Earned badge: "{badge.name}"',
            idempotency_key=f"badge:{badge.id}:{user_id}",
        )
    logger.info("Awarded badge %r to %s", badge.name, user_id)
    return True


async def _award_eligible(db: AsyncSession, user_id: uuid.UUID) -> list[Badge]:
    catalog = await load_catalog(db)
    if not catalog:
        return []

    owned = await earned_badge_ids(db, user_id)
    awarded: list[Badge] = []

    # Badge rewards add points, which can unlock points-based badges.
    progressed = True
    while progressed:
        progressed = False
        profile = await get_profile(db, user_id)
        for badge in catalog:
            if badge.id in owned:
                continue
            requirement = parse_requirement(badge.requirement_type)
            if requirement is None:
                logger.warning(
                    "Skipping badge %r with unknown requirement type %r",
                    badge.name,
                    badge.requirement_type,
                )
                continue
            if current_value(profile, requirement) < badge.requirement_value:
                continue
            owned.add(badge.id)
            if await award_badge(db, user_id, badge):
                awarded.append(badge)
                progressed = True
    return awarded


async def evaluate(db: AsyncSession, user_id: uuid.UUID) -> list[Badge]:
    """Award every newly satisfied badge exactly once and return them.

    Evaluation runs in a savepoint: a broken or unreachable catalog rolls back
    only the badge work and yields an empty list, never the triggering action.
    No ordering is guaranteed among the returned badges. Nothing is published
    here; callers announce the result with publish_badges_earned once their
    transaction has committed.
    """
    await require_profile(db, user_id)

    try:
        async with db.begin_nested():
            return await _award_eligible(db, user_id)
    except (SQLAlchemyError, LedgerError):
        logger.warning("Badge evaluation failed for %s", user_id, exc_info=True)
        return []


async def publish_badges_earned(
    redis: object, user_id: uuid.UUID, badges: list[Badge],
) -> None:
    """Publish badge-earned events for the notification layer.

    Call only after the awarding transaction committed. Delivery is best
    effort: a missing or failing Redis never fails the request.
    """
    if redis is None:
        return
    for badge in badges:
        try:
            await redis.publish(  # type: ignore[union-attr]
                "pubsub:badge_earned",
                json.dumps({
                    "user_id": str(user_id),
                    "badge_id": badge.id,
                    "badge_name": badge.name,
                    "icon": badge.icon,
                    "points_reward": badge.points_reward,
                }),
            )
        except Exception:
            logger.warning("Failed to publish badge_earned notification", exc_info=True)


def badge_progress(profile: Profile, badge: Badge) -> tuple[int, float]:
    """Current counter value and percent progress (capped at 100) toward a badge."""
    requirement = parse_requirement(badge.requirement_type)
    if requirement is None:
        return 0, 0.0
    current = current_value(profile, requirement)
    if badge.requirement_value <= 0:
        return current, 100.0
    return current, min(current / badge.requirement_value * 100, 100.0)
