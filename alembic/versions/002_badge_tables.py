"""Badge catalog and earned badges.

Revision ID: 002_badge_tables
Revises: 001_catalog_and_profiles
Create Date: 2026-10-12
"""

from collections.abc import Sequence

from alembic import op

revision: str = "002_badge_tables"
down_revision: str | None = "001_catalog_and_profiles"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE IF NOT EXISTS badges (
            id SERIAL PRIMARY KEY,
            name VARCHAR(128) UNIQUE NOT NULL,
            description TEXT NOT NULL,
            icon VARCHAR(64) NOT NULL,
            category VARCHAR(32) NOT NULL DEFAULT 'contribution',
            requirement_type VARCHAR(32) NOT NULL,
            requirement_value INTEGER NOT NULL,
            points_reward INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)

    op.execute("""
        CREATE TABLE IF NOT EXISTS user_badges (
            id SERIAL PRIMARY KEY,
            user_id UUID NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
            badge_id INTEGER NOT NULL REFERENCES badges(id),
            earned_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT user_badges_user_id_badge_id_key UNIQUE (user_id, badge_id)
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS ix_user_badges_user_id
        ON user_badges(user_id)
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS user_badges CASCADE")
    op.execute("DROP TABLE IF EXISTS badges CASCADE")
