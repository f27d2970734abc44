"""Stage counter: mixed-radix position over (set, category, question).

The regular grid is ``SETS_PER_GAME`` sets of ``CATEGORIES_PER_SET``
categories of ``QUESTIONS_PER_CATEGORY`` questions. An optional bonus set
sits at index ``SETS_PER_GAME`` and must itself be completed before the
game is over.
"""

from __future__ import annotations

from dataclasses import dataclass

from trivianight.models.constants import (
    CATEGORIES_PER_SET,
    QUESTIONS_PER_CATEGORY,
    SETS_PER_GAME,
)
from trivianight.models.game import Stage

START_STAGE = Stage(set=0, category=0, question=0)


@dataclass(frozen=True)
class StageTransition:
    """Result of advancing: the new stage and whether a set just finished."""

    stage: Stage
    crossed_set_boundary: bool


def advance(stage: Stage) -> StageTransition:
    """Move to the next question, carrying into category and set."""
    set_idx, category, question = stage.as_tuple()

    question += 1
    if question >= QUESTIONS_PER_CATEGORY:
        question = 0
        category += 1
        if category >= CATEGORIES_PER_SET:
            category = 0
            set_idx += 1

    return StageTransition(
        stage=Stage(set=set_idx, category=category, question=question),
        crossed_set_boundary=set_idx > stage.set,
    )


def retreat(stage: Stage) -> Stage:
    """Move to the previous question, borrowing from category and set.

    At the very first question this is a no-op and returns ``stage``.
    """
    set_idx, category, question = stage.as_tuple()

    question -= 1
    if question < 0:
        question = QUESTIONS_PER_CATEGORY - 1
        category -= 1
        if category < 0:
            category = CATEGORIES_PER_SET - 1
            set_idx -= 1

    if set_idx < 0:
        return stage
    return Stage(set=set_idx, category=category, question=question)


def is_game_over(stage: Stage, has_bonus_round: bool) -> bool:
    if has_bonus_round:
        return stage.set > SETS_PER_GAME
    return stage.set >= SETS_PER_GAME


def set_count(has_bonus_round: bool) -> int:
    """Number of sets played, bonus included."""
    return SETS_PER_GAME + (1 if has_bonus_round else 0)


def is_bonus_set(set_idx: int) -> bool:
    return set_idx == SETS_PER_GAME


def set_label(set_idx: int) -> str:
    """Human label for a set column: ``"Set 1"`` .. ``"Set 4"``, ``"Bonus"``."""
    if is_bonus_set(set_idx):
        return "Bonus"
    return f"Set {set_idx + 1}"


def category_key(set_idx: int, category: int) -> str:
    """Key used by ``Game.category_configs``."""
    return f"{set_idx}-{category}"
