"""Catalog and profile tables.

Creates languages, dialects, seed_words, profiles (with the user's default
language and dialect) and the points_ledger.

Revision ID: 001_catalog_and_profiles
Revises: None
Create Date: 2026-10-12
"""

from collections.abc import Sequence

from alembic import op

revision: str = "001_catalog_and_profiles"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # --- Languages ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS languages (
            id SERIAL PRIMARY KEY,
            name VARCHAR(64) UNIQUE NOT NULL,
            native_name VARCHAR(64) NOT NULL,
            region VARCHAR(128) NOT NULL,
            iso_code VARCHAR(8),
            speakers_estimate VARCHAR(32),
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)

    # --- Dialects ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS dialects (
            id SERIAL PRIMARY KEY,
            name VARCHAR(64) UNIQUE NOT NULL,
            region VARCHAR(128),
            iso_code VARCHAR(8),
            language_id INTEGER REFERENCES languages(id),
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)

    # --- Seed words for the daily challenge ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS seed_words (
            id SERIAL PRIMARY KEY,
            word_en VARCHAR(128) UNIQUE NOT NULL,
            word_ur VARCHAR(128),
            category VARCHAR(32) NOT NULL DEFAULT 'general',
            difficulty VARCHAR(16) NOT NULL DEFAULT 'easy'
        )
    """)

    # --- Profiles ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS profiles (
            id UUID PRIMARY KEY,
            name VARCHAR(128) NOT NULL,
            email VARCHAR(320) UNIQUE NOT NULL,
            points INTEGER NOT NULL DEFAULT 0,
            words_added INTEGER NOT NULL DEFAULT 0,
            audio_uploaded INTEGER NOT NULL DEFAULT 0,
            votes_cast INTEGER NOT NULL DEFAULT 0,
            labels_added INTEGER NOT NULL DEFAULT 0,
            streak_days INTEGER NOT NULL DEFAULT 0,
            last_contribution_date DATE,
            default_language_id INTEGER REFERENCES languages(id) ON DELETE SET NULL,
            default_dialect_id INTEGER REFERENCES dialects(id) ON DELETE SET NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_profiles_points_non_negative CHECK (points >= 0),
            CONSTRAINT ck_profiles_streak_non_negative CHECK (streak_days >= 0)
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_profiles_points
        ON profiles(points DESC)
    """)

    # --- Points Ledger ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS points_ledger (
            id BIGSERIAL PRIMARY KEY,
            user_id UUID NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
            amount INTEGER NOT NULL,
            source VARCHAR(32) NOT NULL,
            source_id VARCHAR(128),
            dialect_id INTEGER REFERENCES dialects(id),
            description VARCHAR(256),
            idempotency_key VARCHAR(256) UNIQUE,
            occurred_on DATE NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS ix_points_ledger_user_id
        ON points_ledger(user_id)
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS ix_points_ledger_occurred_on
        ON points_ledger(occurred_on)
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS points_ledger CASCADE")
    op.execute("DROP TABLE IF EXISTS profiles CASCADE")
    op.execute("DROP TABLE IF EXISTS seed_words CASCADE")
    op.execute("DROP TABLE IF EXISTS dialects CASCADE")
    op.execute("DROP TABLE IF EXISTS languages CASCADE")
