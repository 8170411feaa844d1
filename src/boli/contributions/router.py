"""Contribution endpoints: add word, daily challenge, language and dialect lookup."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from boli.config import get_settings
from boli.contributions.schemas import (
    AddWordRequest,
    AddWordResponse,
    DailyLabelRequest,
    DailyLabelResponse,
    DailyWordsResponse,
    DialectResponse,
    LanguageResponse,
    SeedWordResponse,
)
from boli.contributions.service import (
    add_word,
    get_daily_words,
    list_dialects,
    list_languages,
    submit_daily_label,
)
from boli.database import get_session
from boli.dependencies import get_current_user_id, get_optional_user_id, get_redis_dep
from boli.gamification.badge_service import publish_badges_earned
from boli.gamification.schemas import BadgeResponse
from boli.ledger.service import get_profile, today_utc

router = APIRouter(prefix="/api/v1", tags=["Contributions"])


@router.get("/languages", response_model=list[LanguageResponse])
async def languages(db: AsyncSession = Depends(get_session)):  # noqa: B008
    """List languages, alphabetically."""
    return [LanguageResponse.model_validate(lang) for lang in await list_languages(db)]


@router.get("/dialects", response_model=list[DialectResponse])
async def dialects(
    language_id: int | None = Query(None),
    db: AsyncSession = Depends(get_session),  # noqa: B008
):
    """List dialects contributors can tag words with, optionally for one language."""
    return [DialectResponse.model_validate(d) for d in await list_dialects(db, language_id=language_id)]


@router.post("/contributions/words", response_model=AddWordResponse, status_code=201)
async def contribute_word(
    body: AddWordRequest,
    user_id: uuid.UUID = Depends(get_current_user_id),  # noqa: B008
    db: AsyncSession = Depends(get_session),  # noqa: B008
    redis: object = Depends(get_redis_dep),  # noqa: B008
):
    """Add a word (optionally with a pronunciation URL) to the dictionary."""
    result = await add_word(
        db,
        user_id,
        word=body.word,
        dialect_id=body.dialect_id,
        meaning_en=body.meaning_en,
        meaning_ur=body.meaning_ur,
        example_sentence=body.example_sentence,
        script=body.script,
        audio_url=body.audio_url,
    )
    await db.commit()
    await publish_badges_earned(redis, user_id, result.new_badges)
    return AddWordResponse(
        entry_id=result.entry.id,
        points_awarded=result.points_awarded,
        new_badges=[BadgeResponse.model_validate(b) for b in result.new_badges],
    )


@router.get("/contributions/daily-words", response_model=DailyWordsResponse)
async def daily_words(
    category: str | None = Query(None, max_length=32),
    user_id: uuid.UUID | None = Depends(get_optional_user_id),  # noqa: B008
    db: AsyncSession = Depends(get_session),  # noqa: B008
):
    """Today's daily-challenge words, with the caller's default language and dialect."""
    day = today_utc()
    words = await get_daily_words(db, day, get_settings().daily_challenge_size, category=category)
    response = DailyWordsResponse(day=day, words=[SeedWordResponse.model_validate(w) for w in words])
    if user_id is not None:
        profile = await get_profile(db, user_id)
        response.default_language_id = profile.default_language_id
        response.default_dialect_id = profile.default_dialect_id
    return response


@router.post("/contributions/daily-labels", response_model=DailyLabelResponse, status_code=201)
async def contribute_label(
    body: DailyLabelRequest,
    user_id: uuid.UUID = Depends(get_current_user_id),  # noqa: B008
    db: AsyncSession = Depends(get_session),  # noqa: B008
    redis: object = Depends(get_redis_dep),  # noqa: B008
):
    """Submit a daily-challenge label for a seed word."""
    result = await submit_daily_label(
        db,
        user_id,
        seed_word_id=body.seed_word_id,
        dialect_id=body.dialect_id,
        label_text=body.label_text,
        audio_url=body.audio_url,
    )
    await db.commit()
    await publish_badges_earned(redis, user_id, result.new_badges)
    return DailyLabelResponse(
        label_id=result.label.id,
        points_awarded=result.points_awarded,
        new_badges=[BadgeResponse.model_validate(b) for b in result.new_badges],
    )
