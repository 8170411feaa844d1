"""Point schedule for contribution actions.

Fixed business rules: a word is worth 10, its audio 5 more; a vote 1; a
daily-challenge label 5, its audio 3 more.
"""

from __future__ import annotations

WORD_POINTS = 10
WORD_AUDIO_BONUS = 5
VOTE_POINTS = 1
LABEL_POINTS = 5
LABEL_AUDIO_BONUS = 3


def word_points(has_audio: bool) -> int:
    """Total points for adding a word."""
    return WORD_POINTS + (WORD_AUDIO_BONUS if has_audio else 0)


def label_points(has_audio: bool) -> int:
    """Total points for submitting a daily-challenge label."""
    return LABEL_POINTS + (LABEL_AUDIO_BONUS if has_audio else 0)
