"""Contribution triggers: each action feeds the profile ledger and badge evaluator."""

from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from boli.db.models import AudioEntry, Badge, DailyLabel, Dialect, Entry, Language, SeedWord
from boli.db.upsert import upsert_insert
from boli.errors import ConflictError, NotFoundError, ValidationError
from boli.gamification.badge_service import evaluate
from boli.ledger.points import LABEL_AUDIO_BONUS, LABEL_POINTS, WORD_AUDIO_BONUS, WORD_POINTS
from boli.ledger.service import (
    ContributionKind,
    add_points,
    get_profile,
    record_contribution,
    require_profile,
    today_utc,
)

logger = logging.getLogger(__name__)


@dataclass
class ContributionResult:
    points_awarded: int
    new_badges: list[Badge] = field(default_factory=list)
    entry: Entry | None = None
    label: DailyLabel | None = None


async def get_dialect(db: AsyncSession, dialect_id: int) -> Dialect:
    dialect = await db.get(Dialect, dialect_id)
    if dialect is None:
        raise NotFoundError(f"Dialect {dialect_id} not found")
    return dialect


async def list_languages(db: AsyncSession) -> list[Language]:
    result = await db.execute(select(Language).order_by(Language.name))
    return list(result.scalars().all())


async def list_dialects(db: AsyncSession, language_id: int | None = None) -> list[Dialect]:
    """Dialects by name, optionally only those of one language."""
    query = select(Dialect).order_by(Dialect.name)
    if language_id is not None:
        query = query.where(Dialect.language_id == language_id)
    result = await db.execute(query)
    return list(result.scalars().all())


async def add_word(
    db: AsyncSession,
    user_id: uuid.UUID,
    word: str,
    dialect_id: int,
    meaning_en: str,
    meaning_ur: str,
    example_sentence: str | None = None,
    script: str | None = None,
    audio_url: str | None = None,
    occurred_on: date | None = None,
) -> ContributionResult:
    """Add a vocabulary entry: 10 points, plus 5 when a pronunciation comes with it."""
    word = word.strip()
    if not word:
        raise ValidationError("Word must not be empty")
    occurred_on = occurred_on or today_utc()

    await require_profile(db, user_id)
    await get_dialect(db, dialect_id)

    entry = Entry(
        word=word,
        dialect_id=dialect_id,
        meaning_en=meaning_en,
        meaning_ur=meaning_ur,
        example_sentence=example_sentence,
        script=script,
        created_by=user_id,
        created_at=datetime.now(timezone.utc),
    )
    db.add(entry)
    await db.flush()

    points = WORD_POINTS
    await add_points(
        db, user_id, WORD_POINTS, source="word", source_id=str(entry.id),
        dialect_id=dialect_id, description=f'Added "{word}"', occurred_on=occurred_on,
    )
    await record_contribution(db, user_id, ContributionKind.WORD, occurred_on)

    if audio_url:
        db.add(AudioEntry(entry_id=entry.id, audio_url=audio_url, uploaded_by=user_id))
        await add_points(
            db, user_id, WORD_AUDIO_BONUS, source="audio", source_id=str(entry.id),
            dialect_id=dialect_id, description=f'Recorded "{word}"', occurred_on=occurred_on,
        )
        await record_contribution(db, user_id, ContributionKind.AUDIO, occurred_on)
        points += WORD_AUDIO_BONUS

    new_badges = await evaluate(db, user_id)
    logger.info("Word %r added by %s (+%d)", word, user_id, points)
    return ContributionResult(points_awarded=points, new_badges=new_badges, entry=entry)


async def submit_daily_label(
    db: AsyncSession,
    user_id: uuid.UUID,
    seed_word_id: int,
    dialect_id: int | None,
    label_text: str,
    audio_url: str | None = None,
    occurred_on: date | None = None,
) -> ContributionResult:
    """Label a seed word in the user's dialect: 5 points, plus 3 with audio.

    A user labels each seed word once per dialect; a repeat is a ConflictError
    so the caller can tell the user, and nothing is awarded. Without an
    explicit dialect the profile's default dialect is used.
    """
    label_text = label_text.strip()
    if not label_text:
        raise ValidationError("Label must not be empty")
    occurred_on = occurred_on or today_utc()

    profile = await get_profile(db, user_id)
    if dialect_id is None:
        dialect_id = profile.default_dialect_id
        if dialect_id is None:
            raise ValidationError("Choose a dialect or set a default dialect on your profile")
    await get_dialect(db, dialect_id)
    if await db.get(SeedWord, seed_word_id) is None:
        raise NotFoundError(f"Seed word {seed_word_id} not found")

    stmt = (
        upsert_insert(db, DailyLabel)
        .values(
            user_id=user_id,
            seed_word_id=seed_word_id,
            dialect_id=dialect_id,
            label_text=label_text,
            audio_url=audio_url,
            created_at=datetime.now(timezone.utc),
        )
        .on_conflict_do_nothing(index_elements=["user_id", "seed_word_id", "dialect_id"])
        .returning(DailyLabel.id)
    )
    label_id = (await db.execute(stmt)).scalar_one_or_none()
    if label_id is None:
        raise ConflictError("You've already labeled this word in this dialect")

    points = LABEL_POINTS
    await add_points(
        db, user_id, LABEL_POINTS, source="label", source_id=str(label_id),
        dialect_id=dialect_id, description="Daily challenge label", occurred_on=occurred_on,
    )
    await record_contribution(db, user_id, ContributionKind.LABEL, occurred_on)

    if audio_url:
        await add_points(
            db, user_id, LABEL_AUDIO_BONUS, source="label_audio", source_id=str(label_id),
            dialect_id=dialect_id, description="Daily challenge pronunciation", occurred_on=occurred_on,
        )
        await record_contribution(db, user_id, ContributionKind.AUDIO, occurred_on)
        points += LABEL_AUDIO_BONUS

    new_badges = await evaluate(db, user_id)
    label = await db.get(DailyLabel, label_id)
    return ContributionResult(points_awarded=points, new_badges=new_badges, label=label)


async def get_daily_words(
    db: AsyncSession,
    day: date,
    count: int,
    category: str | None = None,
) -> list[SeedWord]:
    """Seed words for a day's challenge. Same day and category, same words."""
    query = select(SeedWord).order_by(SeedWord.id)
    if category:
        query = query.where(SeedWord.category == category)
    words = list((await db.execute(query)).scalars().all())
    if len(words) <= count:
        random.Random(day.toordinal()).shuffle(words)
        return words
    return random.Random(day.toordinal()).sample(words, count)
