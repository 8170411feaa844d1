"""Badge catalog seed data, upserted by name on startup."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from boli.db.models import Badge
from boli.db.upsert import upsert_insert

logger = logging.getLogger(__name__)

BADGE_SEED_DATA: list[dict] = [
    # Contribution
    {
        "name": "First Word",
        "description": "Add your first word to the dialect dictionary",
        "icon": "BookOpen",
        "category": "contribution",
        "requirement_type": "words_added",
        "requirement_value": 1,
        "points_reward": 5,
    },
    {
        "name": "Word Collector",
        "description": "Add 10 words in any dialect",
        "icon": "BookOpen",
        "category": "contribution",
        "requirement_type": "words_added",
        "requirement_value": 10,
        "points_reward": 25,
    },
    {
        "name": "Lexicographer",
        "description": "Add 50 words and build a dictionary of your own",
        "icon": "Crown",
        "category": "contribution",
        "requirement_type": "words_added",
        "requirement_value": 50,
        "points_reward": 100,
    },
    {
        "name": "First Voice",
        "description": "Upload your first pronunciation",
        "icon": "Mic",
        "category": "contribution",
        "requirement_type": "audio_uploaded",
        "requirement_value": 1,
        "points_reward": 5,
    },
    {
        "name": "Voice of the Village",
        "description": "Upload 25 pronunciations",
        "icon": "Volume2",
        "category": "contribution",
        "requirement_type": "audio_uploaded",
        "requirement_value": 25,
        "points_reward": 50,
    },
    {
        "name": "Daily Labeller",
        "description": "Label 10 words in the daily challenge",
        "icon": "Radio",
        "category": "contribution",
        "requirement_type": "labels_added",
        "requirement_value": 10,
        "points_reward": 20,
    },
    # Engagement
    {
        "name": "Fact Checker",
        "description": "Vote on 10 dialect variants",
        "icon": "Shield",
        "category": "engagement",
        "requirement_type": "votes_cast",
        "requirement_value": 10,
        "points_reward": 10,
    },
    {
        "name": "Guardian",
        "description": "Vote on 100 dialect variants",
        "icon": "Users",
        "category": "engagement",
        "requirement_type": "votes_cast",
        "requirement_value": 100,
        "points_reward": 50,
    },
    {
        "name": "Rising Star",
        "description": "Earn 100 points",
        "icon": "Star",
        "category": "engagement",
        "requirement_type": "points",
        "requirement_value": 100,
        "points_reward": 0,
    },
    {
        "name": "Champion",
        "description": "Earn 1,000 points",
        "icon": "Trophy",
        "category": "engagement",
        "requirement_type": "points",
        "requirement_value": 1000,
        "points_reward": 0,
    },
    # Streaks
    {
        "name": "On Fire",
        "description": "Contribute 3 days in a row",
        "icon": "Flame",
        "category": "streak",
        "requirement_type": "streak_days",
        "requirement_value": 3,
        "points_reward": 10,
    },
    {
        "name": "Unstoppable",
        "description": "Contribute 7 days in a row",
        "icon": "Zap",
        "category": "streak",
        "requirement_type": "streak_days",
        "requirement_value": 7,
        "points_reward": 30,
    },
]


async def seed_badges(db: AsyncSession) -> int:
    """Upsert the badge catalog. Returns number of badges seeded."""
    seeded = 0
    for badge_data in BADGE_SEED_DATA:
        stmt = upsert_insert(db, Badge).values(**badge_data)
        stmt = stmt.on_conflict_do_update(
            index_elements=["name"],
            set_={
                "description": stmt.excluded.description,
                "icon": stmt.excluded.icon,
                "category": stmt.excluded.category,
                "requirement_type": stmt.excluded.requirement_type,
                "requirement_value": stmt.excluded.requirement_value,
                "points_reward": stmt.excluded.points_reward,
            },
        )
        await db.execute(stmt)
        seeded += 1

    await db.commit()
    logger.info("Seeded %d badge definitions", seeded)
    return seeded
