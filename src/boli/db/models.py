"""ORM models for the contribution ledger.

Counters on ``profiles`` and aggregates on ``variant_links`` are only ever
changed with server-side arithmetic (``col = col + n``), never written back
from values read into Python.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from boli.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Catalog: languages, dialects, seed words
# ---------------------------------------------------------------------------


class Language(Base):
    """Maps to the 'languages' table."""

    __tablename__ = "languages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    native_name: Mapped[str] = mapped_column(String(64), nullable=False)
    region: Mapped[str] = mapped_column(String(128), nullable=False)
    iso_code: Mapped[str | None] = mapped_column(String(8), nullable=True)
    speakers_estimate: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    dialects: Mapped[list[Dialect]] = relationship("Dialect", back_populates="language")


class Dialect(Base):
    """Maps to the 'dialects' table."""

    __tablename__ = "dialects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    region: Mapped[str | None] = mapped_column(String(128), nullable=True)
    iso_code: Mapped[str | None] = mapped_column(String(8), nullable=True)
    language_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("languages.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    language: Mapped[Language | None] = relationship("Language", back_populates="dialects")


class SeedWord(Base):
    """Concept words offered in the daily labelling challenge."""

    __tablename__ = "seed_words"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    word_en: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    word_ur: Mapped[str | None] = mapped_column(String(128), nullable=True)
    category: Mapped[str] = mapped_column(String(32), nullable=False, default="general")
    difficulty: Mapped[str] = mapped_column(String(16), nullable=False, default="easy")


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


class Profile(Base):
    """Per-user cumulative counters. Mutated only by the profile ledger."""

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("points >= 0", name="ck_profiles_points_non_negative"),
        CheckConstraint("streak_days >= 0", name="ck_profiles_streak_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    words_added: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    audio_uploaded: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    votes_cast: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    labels_added: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    streak_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    last_contribution_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    default_language_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("languages.id", ondelete="SET NULL"), nullable=True
    )
    default_dialect_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("dialects.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)


class PointsLedger(Base):
    """Immutable points transaction log with optional idempotency key."""

    __tablename__ = "points_ledger"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    source: Mapped[str] = mapped_column(String(32), nullable=False)
    source_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    dialect_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("dialects.id"), nullable=True)
    description: Mapped[str | None] = mapped_column(String(256), nullable=True)
    idempotency_key: Mapped[str | None] = mapped_column(String(256), unique=True, nullable=True)
    occurred_on: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)


# ---------------------------------------------------------------------------
# Badges
# ---------------------------------------------------------------------------


class Badge(Base):
    """Admin-defined badge catalog. Read-only to the ledger."""

    __tablename__ = "badges"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    icon: Mapped[str] = mapped_column(String(64), nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False, default="contribution")
    requirement_type: Mapped[str] = mapped_column(String(32), nullable=False)
    requirement_value: Mapped[int] = mapped_column(Integer, nullable=False)
    points_reward: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)


class UserBadge(Base):
    """Badges earned by users. UNIQUE(user_id, badge_id) makes awarding idempotent."""

    __tablename__ = "user_badges"
    __table_args__ = (
        UniqueConstraint("user_id", "badge_id", name="user_badges_user_id_badge_id_key"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    badge_id: Mapped[int] = mapped_column(Integer, ForeignKey("badges.id"), nullable=False)
    earned_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    badge: Mapped[Badge] = relationship("Badge", lazy="joined")


# ---------------------------------------------------------------------------
# Vocabulary: entries, audio, variant links, votes
# ---------------------------------------------------------------------------


class Entry(Base):
    """A vocabulary word in one dialect."""

    __tablename__ = "entries"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    word: Mapped[str] = mapped_column(String(128), nullable=False)
    dialect_id: Mapped[int] = mapped_column(Integer, ForeignKey("dialects.id"), nullable=False, index=True)
    meaning_en: Mapped[str] = mapped_column(Text, nullable=False)
    meaning_ur: Mapped[str] = mapped_column(Text, nullable=False)
    script: Mapped[str | None] = mapped_column(String(32), nullable=True)
    example_sentence: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("profiles.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    dialect: Mapped[Dialect] = relationship("Dialect", lazy="joined")


class AudioEntry(Base):
    """Pronunciation recording reference for an entry."""

    __tablename__ = "audio_entries"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    entry_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("entries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    audio_url: Mapped[str] = mapped_column(Text, nullable=False)
    accent: Mapped[str | None] = mapped_column(String(64), nullable=True)
    duration_seconds: Mapped[float | None] = mapped_column(Float, nullable=True)
    uploaded_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("profiles.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)


class VariantLink(Base):
    """Claimed equivalence between two entries across dialects."""

    __tablename__ = "variant_links"
    __table_args__ = (
        CheckConstraint("entry1_id <> entry2_id", name="ck_variant_links_distinct_entries"),
        CheckConstraint(
            "confidence_score >= 0 AND confidence_score <= 1",
            name="ck_variant_links_confidence_range",
        ),
        CheckConstraint("votes_up >= 0 AND votes_down >= 0", name="ck_variant_links_votes_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    entry1_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("entries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    entry2_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("entries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    confidence_score: Mapped[float] = mapped_column(Float, nullable=False)
    votes_up: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    votes_down: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)


class Vote(Base):
    """One user's judgment on a variant link. UNIQUE(user_id, variant_link_id)."""

    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint("user_id", "variant_link_id", name="votes_user_id_variant_link_id_key"),
        CheckConstraint("vote_type IN ('correct', 'incorrect')", name="ck_votes_vote_type"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    variant_link_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("variant_links.id", ondelete="CASCADE"), nullable=False, index=True
    )
    vote_type: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)


# ---------------------------------------------------------------------------
# Daily challenge
# ---------------------------------------------------------------------------


class DailyLabel(Base):
    """A user's rendering of a seed word in their dialect."""

    __tablename__ = "daily_labels"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "seed_word_id", "dialect_id",
            name="daily_labels_user_id_seed_word_id_dialect_id_key",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    seed_word_id: Mapped[int] = mapped_column(Integer, ForeignKey("seed_words.id"), nullable=False)
    dialect_id: Mapped[int] = mapped_column(Integer, ForeignKey("dialects.id"), nullable=False)
    label_text: Mapped[str] = mapped_column(String(256), nullable=False)
    audio_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
