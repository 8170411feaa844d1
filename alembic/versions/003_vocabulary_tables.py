"""Vocabulary entries, audio, variant links, votes and daily labels.

Revision ID: 003_vocabulary_tables
Revises: 002_badge_tables
Create Date: 2026-10-13
"""

from collections.abc import Sequence

from alembic import op

revision: str = "003_vocabulary_tables"
down_revision: str | None = "002_badge_tables"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # --- Entries ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS entries (
            id UUID PRIMARY KEY,
            word VARCHAR(128) NOT NULL,
            dialect_id INTEGER NOT NULL REFERENCES dialects(id),
            meaning_en TEXT NOT NULL,
            meaning_ur TEXT NOT NULL,
            script VARCHAR(32),
            example_sentence TEXT,
            created_by UUID REFERENCES profiles(id),
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS ix_entries_dialect_id
        ON entries(dialect_id)
    """)

    # --- Audio ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS audio_entries (
            id UUID PRIMARY KEY,
            entry_id UUID NOT NULL REFERENCES entries(id) ON DELETE CASCADE,
            audio_url TEXT NOT NULL,
            accent VARCHAR(64),
            duration_seconds DOUBLE PRECISION,
            uploaded_by UUID REFERENCES profiles(id),
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS ix_audio_entries_entry_id
        ON audio_entries(entry_id)
    """)

    # --- Variant links ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS variant_links (
            id UUID PRIMARY KEY,
            entry1_id UUID NOT NULL REFERENCES entries(id) ON DELETE CASCADE,
            entry2_id UUID NOT NULL REFERENCES entries(id) ON DELETE CASCADE,
            confidence_score DOUBLE PRECISION NOT NULL,
            votes_up INTEGER NOT NULL DEFAULT 0,
            votes_down INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_variant_links_distinct_entries CHECK (entry1_id <> entry2_id),
            CONSTRAINT ck_variant_links_confidence_range
                CHECK (confidence_score >= 0 AND confidence_score <= 1),
            CONSTRAINT ck_variant_links_votes_non_negative
                CHECK (votes_up >= 0 AND votes_down >= 0)
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS ix_variant_links_entry1_id
        ON variant_links(entry1_id)
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS ix_variant_links_entry2_id
        ON variant_links(entry2_id)
    """)

    # --- Votes ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS votes (
            id UUID PRIMARY KEY,
            user_id UUID NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
            variant_link_id UUID NOT NULL REFERENCES variant_links(id) ON DELETE CASCADE,
            vote_type VARCHAR(16) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT votes_user_id_variant_link_id_key UNIQUE (user_id, variant_link_id),
            CONSTRAINT ck_votes_vote_type CHECK (vote_type IN ('correct', 'incorrect'))
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS ix_votes_variant_link_id
        ON votes(variant_link_id)
    """)

    # --- Daily challenge labels ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS daily_labels (
            id SERIAL PRIMARY KEY,
            user_id UUID NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
            seed_word_id INTEGER NOT NULL REFERENCES seed_words(id),
            dialect_id INTEGER NOT NULL REFERENCES dialects(id),
            label_text VARCHAR(256) NOT NULL,
            audio_url TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT daily_labels_user_id_seed_word_id_dialect_id_key
                UNIQUE (user_id, seed_word_id, dialect_id)
        )
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS daily_labels CASCADE")
    op.execute("DROP TABLE IF EXISTS votes CASCADE")
    op.execute("DROP TABLE IF EXISTS variant_links CASCADE")
    op.execute("DROP TABLE IF EXISTS audio_entries CASCADE")
    op.execute("DROP TABLE IF EXISTS entries CASCADE")
