"""Badge requirement types and the profile counters they read."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from operator import attrgetter

from boli.db.models import Profile

logger = logging.getLogger(__name__)


class RequirementType(str, Enum):
    """Closed set of profile counters a badge threshold may target."""

    WORDS_ADDED = "words_added"
    AUDIO_UPLOADED = "audio_uploaded"
    VOTES_CAST = "votes_cast"
    LABELS_ADDED = "labels_added"
    STREAK_DAYS = "streak_days"
    POINTS = "points"


REQUIREMENT_ACCESSORS: dict[RequirementType, Callable[[Profile], int]] = {
    requirement: attrgetter(requirement.value) for requirement in RequirementType
}


def validate_requirement_accessors() -> None:
    """Fail fast if a requirement type names no integer counter on Profile."""
    columns = Profile.__table__.columns
    broken = [
        requirement.value
        for requirement in RequirementType
        if requirement not in REQUIREMENT_ACCESSORS
        or requirement.value not in columns
        or columns[requirement.value].type.python_type is not int
    ]
    if broken:
        msg = f"Badge requirement types without a profile counter: {', '.join(broken)}"
        raise RuntimeError(msg)


def parse_requirement(raw: str) -> RequirementType | None:
    """Map a catalog ``requirement_type`` string to the enum, or None if unknown."""
    try:
        return RequirementType(raw)
    except ValueError:
        return None


def current_value(profile: Profile, requirement: RequirementType) -> int:
    """Read the counter a requirement targets."""
    return REQUIREMENT_ACCESSORS[requirement](profile) or 0
