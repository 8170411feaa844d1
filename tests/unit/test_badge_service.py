"""Badge evaluator unit tests: eligibility, idempotent awards, failure isolation."""

from __future__ import annotations

import json
import uuid
from datetime import date

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from boli.contributions.service import add_word
from boli.db.models import Badge, PointsLedger, UserBadge
from boli.errors import NotFoundError
from boli.gamification import badge_service
from boli.gamification.badge_service import (
    award_badge,
    badge_progress,
    evaluate,
    get_user_badges,
    publish_badges_earned,
)
from boli.gamification.requirements import (
    RequirementType,
    current_value,
    parse_requirement,
    validate_requirement_accessors,
)
from boli.gamification.seed import BADGE_SEED_DATA, seed_badges
from boli.ledger.service import add_points, get_profile, record_contribution


async def _add_badge(db, name, requirement_type, requirement_value, points_reward=0) -> Badge:
    badge = Badge(
        name=name,
        description=f"{name} badge",
        icon="Award",
        category="contribution",
        requirement_type=requirement_type,
        requirement_value=requirement_value,
        points_reward=points_reward,
    )
    db.add(badge)
    await db.commit()
    return badge


async def _user_badge_count(db, user_id) -> int:
    result = await db.execute(select(func.count(UserBadge.id)).where(UserBadge.user_id == user_id))
    return result.scalar_one()


class TestRequirements:

    def test_accessors_match_profile_columns(self):
        validate_requirement_accessors()

    def test_parse_known(self):
        assert parse_requirement("words_added") is RequirementType.WORDS_ADDED
        assert parse_requirement("points") is RequirementType.POINTS

    def test_parse_unknown_returns_none(self):
        assert parse_requirement("comments_posted") is None

    def test_seed_catalog_uses_known_requirements(self):
        for badge in BADGE_SEED_DATA:
            assert parse_requirement(badge["requirement_type"]) is not None

    @pytest.mark.asyncio
    async def test_current_value_reads_counter(self, db_session, profile):
        await record_contribution(db_session, profile.id, "vote", date(2026, 3, 2))
        fresh = await get_profile(db_session, profile.id)
        assert current_value(fresh, RequirementType.VOTES_CAST) == 1
        assert current_value(fresh, RequirementType.STREAK_DAYS) == 1
        assert current_value(fresh, RequirementType.WORDS_ADDED) == 0


class TestEvaluate:

    @pytest.mark.asyncio
    async def test_word_scenario(self, db_session, profile, dialect):
        """Two words (one with audio), then a threshold-2 badge pays out once."""
        await add_word(db_session, profile.id, "پاݨی", dialect.id, "water", "پانی")
        fresh = await get_profile(db_session, profile.id)
        assert fresh.points == 10
        assert fresh.words_added == 1

        await add_word(
            db_session, profile.id, "مینہ", dialect.id, "rain", "بارش",
            audio_url="https://cdn.example.com/meenh.webm",
        )
        fresh = await get_profile(db_session, profile.id)
        assert fresh.points == 25
        assert fresh.words_added == 2
        assert fresh.audio_uploaded == 1
        await db_session.commit()

        await _add_badge(db_session, "First Words", "words_added", 2, points_reward=20)
        awarded = await evaluate(db_session, profile.id)

        assert [b.name for b in awarded] == ["First Words"]
        fresh = await get_profile(db_session, profile.id)
        assert fresh.points == 45

    @pytest.mark.asyncio
    async def test_second_evaluation_awards_nothing(self, db_session, profile):
        await record_contribution(db_session, profile.id, "word", date(2026, 3, 2))
        await _add_badge(db_session, "First Word", "words_added", 1, points_reward=5)

        first = await evaluate(db_session, profile.id)
        second = await evaluate(db_session, profile.id)

        assert len(first) == 1
        assert second == []
        assert await _user_badge_count(db_session, profile.id) == 1
        assert (await get_profile(db_session, profile.id)).points == 5

    @pytest.mark.asyncio
    async def test_below_threshold_not_awarded(self, db_session, profile):
        await record_contribution(db_session, profile.id, "word", date(2026, 3, 2))
        await _add_badge(db_session, "Word Collector", "words_added", 10, points_reward=25)

        assert await evaluate(db_session, profile.id) == []
        assert await _user_badge_count(db_session, profile.id) == 0

    @pytest.mark.asyncio
    async def test_existing_user_badge_not_rewarded_again(self, db_session, profile):
        await record_contribution(db_session, profile.id, "word", date(2026, 3, 2))
        badge = await _add_badge(db_session, "First Word", "words_added", 1, points_reward=5)
        db_session.add(UserBadge(user_id=profile.id, badge_id=badge.id))
        await db_session.commit()

        assert await evaluate(db_session, profile.id) == []
        assert (await get_profile(db_session, profile.id)).points == 0

    @pytest.mark.asyncio
    async def test_reward_can_unlock_points_badge(self, db_session, profile):
        await add_points(db_session, profile.id, 10, source="word")
        await record_contribution(db_session, profile.id, "word", date(2026, 3, 2))
        await _add_badge(db_session, "First Word", "words_added", 1, points_reward=100)
        await _add_badge(db_session, "Rising Star", "points", 100)

        awarded = await evaluate(db_session, profile.id)

        assert {b.name for b in awarded} == {"First Word", "Rising Star"}
        assert (await get_profile(db_session, profile.id)).points == 110

    @pytest.mark.asyncio
    async def test_zero_reward_badge_grants_no_points(self, db_session, profile):
        await add_points(db_session, profile.id, 100, source="word")
        await _add_badge(db_session, "Rising Star", "points", 100)

        awarded = await evaluate(db_session, profile.id)

        assert len(awarded) == 1
        rows = await db_session.execute(select(PointsLedger).where(PointsLedger.source == "badge"))
        assert rows.scalars().all() == []

    @pytest.mark.asyncio
    async def test_empty_catalog_returns_empty(self, db_session, profile):
        await record_contribution(db_session, profile.id, "word", date(2026, 3, 2))
        assert await evaluate(db_session, profile.id) == []

    @pytest.mark.asyncio
    async def test_unknown_requirement_type_skipped(self, db_session, profile):
        await _add_badge(db_session, "Chatterbox", "comments_posted", 0, points_reward=50)
        await _add_badge(db_session, "Zero Hero", "words_added", 0)

        awarded = await evaluate(db_session, profile.id)

        assert [b.name for b in awarded] == ["Zero Hero"]
        assert (await get_profile(db_session, profile.id)).points == 0

    @pytest.mark.asyncio
    async def test_catalog_failure_is_swallowed(self, db_session, profile, monkeypatch):
        async def broken_catalog(_db):
            raise OperationalError("SELECT * FROM badges", {}, Exception("connection lost"))

        monkeypatch.setattr(badge_service, "load_catalog", broken_catalog)
        await record_contribution(db_session, profile.id, "word", date(2026, 3, 2))

        assert await evaluate(db_session, profile.id) == []

        # The triggering contribution survives the failed evaluation.
        await db_session.commit()
        assert (await get_profile(db_session, profile.id)).words_added == 1

    @pytest.mark.asyncio
    async def test_unknown_user_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await evaluate(db_session, uuid.uuid4())

    @pytest.mark.asyncio
    async def test_does_not_publish(self, db_session, profile):
        # Publishing happens after commit, in the router.
        await record_contribution(db_session, profile.id, "word", date(2026, 3, 2))
        await _add_badge(db_session, "First Word", "words_added", 1)

        awarded = await evaluate(db_session, profile.id)

        assert [b.name for b in awarded] == ["First Word"]


class FakeRedis:
    def __init__(self, fail=False):
        self.published = []
        self.fail = fail

    async def publish(self, channel, message):
        if self.fail:
            raise ConnectionError("redis down")
        self.published.append((channel, json.loads(message)))


class TestPublishBadgesEarned:

    @pytest.mark.asyncio
    async def test_one_event_per_badge(self, db_session, profile):
        first = await _add_badge(db_session, "First Word", "words_added", 1)
        second = await _add_badge(db_session, "Voice of the Village", "audio_recorded", 1)
        redis = FakeRedis()

        await publish_badges_earned(redis, profile.id, [first, second])

        assert [channel for channel, _ in redis.published] == ["pubsub:badge_earned"] * 2
        assert redis.published[0][1]["user_id"] == str(profile.id)
        assert redis.published[0][1]["badge_name"] == "First Word"
        assert redis.published[1][1]["badge_id"] == second.id

    @pytest.mark.asyncio
    async def test_no_redis_is_a_no_op(self, db_session, profile):
        badge = await _add_badge(db_session, "First Word", "words_added", 1)
        await publish_badges_earned(None, profile.id, [badge])

    @pytest.mark.asyncio
    async def test_publish_failure_is_swallowed(self, db_session, profile):
        badge = await _add_badge(db_session, "First Word", "words_added", 1)
        redis = FakeRedis(fail=True)

        await publish_badges_earned(redis, profile.id, [badge])

        assert redis.published == []


class TestAwardBadge:

    @pytest.mark.asyncio
    async def test_duplicate_award_returns_false(self, db_session, profile):
        badge = await _add_badge(db_session, "Fact Checker", "votes_cast", 10, points_reward=10)

        assert await award_badge(db_session, profile.id, badge) is True
        assert await award_badge(db_session, profile.id, badge) is False

        assert await _user_badge_count(db_session, profile.id) == 1
        assert (await get_profile(db_session, profile.id)).points == 10

    @pytest.mark.asyncio
    async def test_user_badges_listed(self, db_session, profile):
        badge = await _add_badge(db_session, "Fact Checker", "votes_cast", 10)
        await award_badge(db_session, profile.id, badge)
        await db_session.commit()

        earned = await get_user_badges(db_session, profile.id)
        assert [ub.badge.name for ub in earned] == ["Fact Checker"]


class TestBadgeProgress:

    @pytest.mark.asyncio
    async def test_progress_is_capped(self, db_session, profile):
        await add_points(db_session, profile.id, 250, source="word")
        fresh = await get_profile(db_session, profile.id)
        badge = Badge(name="Rising Star", requirement_type="points", requirement_value=100)

        assert badge_progress(fresh, badge) == (250, 100.0)

    @pytest.mark.asyncio
    async def test_partial_progress(self, db_session, profile):
        await record_contribution(db_session, profile.id, "word", date(2026, 3, 2))
        fresh = await get_profile(db_session, profile.id)
        badge = Badge(name="Word Collector", requirement_type="words_added", requirement_value=10)

        assert badge_progress(fresh, badge) == (1, 10.0)


class TestSeedBadges:

    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, db_session):
        await seed_badges(db_session)
        await seed_badges(db_session)

        result = await db_session.execute(select(func.count(Badge.id)))
        assert result.scalar_one() == len(BADGE_SEED_DATA)
