"""Shared constants for the scoring grid and royalty points.

Placed here so both the models and the core can import them without a
layer violation.
"""

from __future__ import annotations

# Grid: 4 sets -> 3 categories -> 8 questions, plus an optional bonus set.
SETS_PER_GAME = 4
CATEGORIES_PER_SET = 3
QUESTIONS_PER_CATEGORY = 8

# Point value used when neither an explicit value nor sticky points exist.
DEFAULT_QUESTION_POINTS = 1

# Feedback rating assumed for a team that gave none at archival time.
DEFAULT_FEEDBACK_RATING = 10

MAX_HOSTS_PER_GAME = 5

# Royalty standings: one point for showing up, then a bonus by dense rank.
PARTICIPATION_POINTS = 1
RANK_BONUS_POINTS: dict[int, int] = {
    1: 10,
    2: 5,
    3: 3,
}

UNKNOWN_NAME = "Unknown"
