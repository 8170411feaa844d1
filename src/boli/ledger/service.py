"""Profile ledger: atomic point grants, contribution counters and daily streaks."""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timedelta, timezone
from enum import Enum

from sqlalchemy import case, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from boli.db.models import Dialect, Language, PointsLedger, Profile
from boli.db.upsert import upsert_insert
from boli.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class ContributionKind(str, Enum):
    """Actions that bump a profile counter."""

    WORD = "word"
    AUDIO = "audio"
    VOTE = "vote"
    LABEL = "label"


_COUNTER_FOR_KIND: dict[ContributionKind, str] = {
    ContributionKind.WORD: "words_added",
    ContributionKind.AUDIO: "audio_uploaded",
    ContributionKind.VOTE: "votes_cast",
    ContributionKind.LABEL: "labels_added",
}


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


async def create_profile(
    db: AsyncSession,
    name: str,
    email: str,
    user_id: uuid.UUID | None = None,
) -> Profile:
    """Create the ledger profile for a new account."""
    existing = await db.execute(
        select(Profile.id).where((Profile.email == email) | (Profile.id == user_id))
    )
    if existing.first() is not None:
        raise ConflictError("Profile already exists")

    profile = Profile(id=user_id or uuid.uuid4(), name=name, email=email)
    db.add(profile)
    await db.flush()
    logger.info("Created profile %s", profile.id)
    return profile


async def get_profile(db: AsyncSession, user_id: uuid.UUID) -> Profile:
    """Fetch a profile with fresh counter values."""
    result = await db.execute(
        select(Profile)
        .where(Profile.id == user_id)
        .execution_options(populate_existing=True)
    )
    profile = result.scalar_one_or_none()
    if profile is None:
        raise NotFoundError(f"Profile {user_id} not found")
    return profile


async def require_profile(db: AsyncSession, user_id: uuid.UUID) -> None:
    """Raise NotFoundError unless the profile exists."""
    result = await db.execute(select(Profile.id).where(Profile.id == user_id))
    if result.scalar_one_or_none() is None:
        raise NotFoundError(f"Profile {user_id} not found")


_PREFERENCE_FIELDS = frozenset({"default_language_id", "default_dialect_id"})


async def update_preferences(
    db: AsyncSession,
    user_id: uuid.UUID,
    changes: dict[str, int | None],
) -> Profile:
    """Set the profile's default language and dialect for the daily challenge.

    Only keys present in ``changes`` are touched and ``None`` clears a default.
    Changing the language without naming a dialect resets the dialect. A
    dialect chosen without a language brings its own language along; naming
    both requires the dialect to belong to that language.
    """
    unknown = set(changes) - _PREFERENCE_FIELDS
    if unknown:
        raise ValidationError(f"Unknown preference(s): {', '.join(sorted(unknown))}")

    profile = await get_profile(db, user_id)
    language_id = changes.get("default_language_id", profile.default_language_id)
    dialect_id = changes.get("default_dialect_id", profile.default_dialect_id)

    if "default_dialect_id" not in changes and language_id != profile.default_language_id:
        dialect_id = None

    if language_id is not None and await db.get(Language, language_id) is None:
        raise NotFoundError(f"Language {language_id} not found")
    if dialect_id is not None:
        dialect = await db.get(Dialect, dialect_id)
        if dialect is None:
            raise NotFoundError(f"Dialect {dialect_id} not found")
        if language_id is None or "default_language_id" not in changes:
            language_id = dialect.language_id
        elif dialect.language_id != language_id:
            raise ValidationError(f"Dialect {dialect_id} does not belong to language {language_id}")

    await db.execute(
        update(Profile)
        .where(Profile.id == user_id)
        .values(default_language_id=language_id, default_dialect_id=dialect_id)
        .execution_options(synchronize_session=False)
    )
    logger.info("Profile %s defaults: language=%s dialect=%s", user_id, language_id, dialect_id)
    return await get_profile(db, user_id)


async def add_points(
    db: AsyncSession,
    user_id: uuid.UUID,
    amount: int,
    source: str,
    source_id: str | None = None,
    dialect_id: int | None = None,
    description: str | None = None,
    idempotency_key: str | None = None,
    occurred_on: date | None = None,
) -> bool:
    """Grant points to a user. Returns True if granted, False if duplicate.

    The ledger row is inserted first; the profile total is only bumped when
    that insert actually happened, so a repeated idempotency key never counts
    twice. The bump itself is a single ``points = points + :amount`` UPDATE.
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise ValidationError(f"Point amount must be a positive integer, got {amount!r}")

    await require_profile(db, user_id)

    stmt = (
        upsert_insert(db, PointsLedger)
        .values(
            user_id=user_id,
            amount=amount,
            source=source,
            source_id=source_id,
            dialect_id=dialect_id,
            description=description,
            idempotency_key=idempotency_key,
            occurred_on=occurred_on or today_utc(),
            created_at=datetime.now(timezone.utc),
        )
        .on_conflict_do_nothing(index_elements=["idempotency_key"])
        .returning(PointsLedger.id)
    )
    inserted = (await db.execute(stmt)).scalar_one_or_none()
    if inserted is None:
        logger.debug("Duplicate points grant ignored: %s", idempotency_key)
        return False

    await db.execute(
        update(Profile)
        .where(Profile.id == user_id)
        .values(points=Profile.points + amount)
        .execution_options(synchronize_session=False)
    )
    return True


async def record_contribution(
    db: AsyncSession,
    user_id: uuid.UUID,
    kind: ContributionKind | str,
    occurred_on: date,
) -> None:
    """Bump the counter for ``kind`` and roll the daily streak.

    Streak rules, evaluated against the stored ``last_contribution_date``:
    the next calendar day extends it, the same day leaves it, anything else
    (first contribution, a gap, an earlier date) restarts it at 1.

    ``last_contribution_date`` always becomes ``occurred_on``, even when that
    is earlier than the stored date. Callers replaying backdated work should
    replay it in date order, or the stored date moves backwards with the
    restarted streak.
    """
    try:
        kind = ContributionKind(kind)
    except ValueError as exc:
        raise ValidationError(f"Unknown contribution kind: {kind!r}") from exc

    if isinstance(occurred_on, datetime):
        occurred_on = occurred_on.date()

    counter = _COUNTER_FOR_KIND[kind]
    previous_day = occurred_on - timedelta(days=1)
    streak = case(
        (Profile.last_contribution_date == previous_day, Profile.streak_days + 1),
        (Profile.last_contribution_date == occurred_on, Profile.streak_days),
        else_=1,
    )

    result = await db.execute(
        update(Profile)
        .where(Profile.id == user_id)
        .values({
            counter: getattr(Profile, counter) + 1,
            "streak_days": streak,
            "last_contribution_date": occurred_on,
        })
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise NotFoundError(f"Profile {user_id} not found")


async def ledger_total(db: AsyncSession, user_id: uuid.UUID) -> int:
    """Sum of all point grants recorded for a user."""
    result = await db.execute(
        select(func.coalesce(func.sum(PointsLedger.amount), 0)).where(PointsLedger.user_id == user_id)
    )
    return int(result.scalar_one())


async def get_points_history(
    db: AsyncSession,
    user_id: uuid.UUID,
    limit: int = 50,
) -> list[PointsLedger]:
    """Most recent point grants for a user."""
    result = await db.execute(
        select(PointsLedger)
        .where(PointsLedger.user_id == user_id)
        .order_by(PointsLedger.created_at.desc(), PointsLedger.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())
