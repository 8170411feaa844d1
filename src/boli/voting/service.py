"""Vote register: one effective vote per user per variant link.

Outcomes of ``cast_vote``:

* first vote on the link: inserted, aggregate +1, 1 point, badges evaluated
* same type again: no-op reported as ``already_voted``
* different type: row updated, old aggregate -1, new aggregate +1, no points

The (user_id, variant_link_id) unique constraint decides races. A writer that
loses the insert falls through to the same/replace branches, and whenever a
conflict was observed the link's aggregates are recounted from vote rows
instead of trusting incremental arithmetic.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from boli.db.models import Badge, VariantLink, Vote
from boli.db.upsert import upsert_insert
from boli.errors import NotFoundError, ValidationError
from boli.gamification.badge_service import evaluate
from boli.ledger.points import VOTE_POINTS
from boli.ledger.service import ContributionKind, add_points, record_contribution, require_profile, today_utc

logger = logging.getLogger(__name__)


class VoteType(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"


class VoteOutcome(str, Enum):
    RECORDED = "recorded"
    ALREADY_VOTED = "already_voted"
    CHANGED = "changed"


_AGGREGATE_FOR_TYPE: dict[VoteType, str] = {
    VoteType.CORRECT: "votes_up",
    VoteType.INCORRECT: "votes_down",
}


@dataclass
class VoteResult:
    outcome: VoteOutcome
    vote_type: VoteType
    link: VariantLink
    points_awarded: int = 0
    new_badges: list[Badge] = field(default_factory=list)


def parse_vote_type(raw: VoteType | str) -> VoteType:
    try:
        return VoteType(raw)
    except ValueError as exc:
        raise ValidationError(f"Unknown vote type: {raw!r}") from exc


async def get_link(db: AsyncSession, link_id: uuid.UUID) -> VariantLink:
    """Fetch a variant link with fresh aggregate values."""
    result = await db.execute(
        select(VariantLink)
        .where(VariantLink.id == link_id)
        .execution_options(populate_existing=True)
    )
    link = result.scalar_one_or_none()
    if link is None:
        raise NotFoundError(f"Variant link {link_id} not found")
    return link


async def get_vote(db: AsyncSession, user_id: uuid.UUID, link_id: uuid.UUID) -> Vote | None:
    result = await db.execute(
        select(Vote)
        .where(Vote.user_id == user_id, Vote.variant_link_id == link_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _insert_vote(
    db: AsyncSession,
    user_id: uuid.UUID,
    link_id: uuid.UUID,
    vote_type: VoteType,
) -> bool:
    """Insert-if-absent on (user, link). Returns True if this call created the row."""
    now = datetime.now(timezone.utc)
    stmt = (
        upsert_insert(db, Vote)
        .values(
            id=uuid.uuid4(),
            user_id=user_id,
            variant_link_id=link_id,
            vote_type=vote_type.value,
            created_at=now,
            updated_at=now,
        )
        .on_conflict_do_nothing(index_elements=["user_id", "variant_link_id"])
        .returning(Vote.id)
    )
    return (await db.execute(stmt)).scalar_one_or_none() is not None


async def _shift_aggregates(
    db: AsyncSession,
    link_id: uuid.UUID,
    increment: VoteType,
    decrement: VoteType | None = None,
) -> None:
    values = {}
    up = _AGGREGATE_FOR_TYPE[increment]
    values[up] = getattr(VariantLink, up) + 1
    if decrement is not None:
        down = _AGGREGATE_FOR_TYPE[decrement]
        values[down] = getattr(VariantLink, down) - 1
    await db.execute(
        update(VariantLink)
        .where(VariantLink.id == link_id)
        .values(values)
        .execution_options(synchronize_session=False)
    )


async def recount_votes(db: AsyncSession, link_id: uuid.UUID) -> None:
    """Recompute a link's aggregates from its vote rows in one statement."""

    def _count(vote_type: VoteType):  # noqa: ANN202
        return (
            select(func.count(Vote.id))
            .where(Vote.variant_link_id == link_id, Vote.vote_type == vote_type.value)
            .scalar_subquery()
        )

    await db.execute(
        update(VariantLink)
        .where(VariantLink.id == link_id)
        .values(votes_up=_count(VoteType.CORRECT), votes_down=_count(VoteType.INCORRECT))
        .execution_options(synchronize_session=False)
    )


async def cast_vote(
    db: AsyncSession,
    user_id: uuid.UUID,
    link_id: uuid.UUID,
    vote_type: VoteType | str,
    occurred_on: date | None = None,
) -> VoteResult:
    """Record a user's judgment on a variant link."""
    vote_type = parse_vote_type(vote_type)
    occurred_on = occurred_on or today_utc()
    await require_profile(db, user_id)
    await get_link(db, link_id)

    conflicted = False
    existing = await get_vote(db, user_id, link_id)
    if existing is None:
        if await _insert_vote(db, user_id, link_id, vote_type):
            await _shift_aggregates(db, link_id, increment=vote_type)
            awarded = await add_points(
                db,
                user_id,
                VOTE_POINTS,
                source="vote",
                source_id=str(link_id),
                description="Voted on a dialect variant",
                idempotency_key=f"vote:{link_id}:{user_id}",
                occurred_on=occurred_on,
            )
            await record_contribution(db, user_id, ContributionKind.VOTE, occurred_on)
            new_badges = await evaluate(db, user_id)
            return VoteResult(
                outcome=VoteOutcome.RECORDED,
                vote_type=vote_type,
                link=await get_link(db, link_id),
                points_awarded=VOTE_POINTS if awarded else 0,
                new_badges=new_badges,
            )

        # Another request inserted this user's vote between our read and insert.
        conflicted = True
        existing = await get_vote(db, user_id, link_id)
        if existing is None:
            raise NotFoundError(f"Vote on {link_id} disappeared during insert")

    if existing.vote_type == vote_type.value:
        if conflicted:
            await recount_votes(db, link_id)
        return VoteResult(
            outcome=VoteOutcome.ALREADY_VOTED,
            vote_type=vote_type,
            link=await get_link(db, link_id),
        )

    previous = VoteType(existing.vote_type)
    result = await db.execute(
        update(Vote)
        .where(Vote.id == existing.id, Vote.vote_type == previous.value)
        .values(vote_type=vote_type.value, updated_at=datetime.now(timezone.utc))
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 1 and not conflicted:
        await _shift_aggregates(db, link_id, increment=vote_type, decrement=previous)
    else:
        await recount_votes(db, link_id)

    logger.info("Vote on %s by %s changed %s -> %s", link_id, user_id, previous.value, vote_type.value)
    return VoteResult(
        outcome=VoteOutcome.CHANGED,
        vote_type=vote_type,
        link=await get_link(db, link_id),
    )

