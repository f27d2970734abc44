"""Score aggregation over the result ledger and adjustment log.

Scores are defined only over the game's participating teams. Ledger entries
and adjustments that reference anyone else (stale references after a roster
edit) are ignored rather than rejected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from trivianight.core import adjustments, ledger
from trivianight.core.stage import advance, is_game_over, set_count
from trivianight.models.constants import DEFAULT_QUESTION_POINTS
from trivianight.models.game import Game, QuestionResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordOutcome:
    """A game after recording a result, plus the set-boundary signal."""

    game: Game
    crossed_set_boundary: bool


@dataclass
class SetSummaryRow:
    """One team's per-set score columns and their total."""

    team_id: str
    set_scores: list[int] = field(default_factory=list)
    total: int = 0


def calculate_game_scores(game: Game) -> dict[str, int]:
    """Whole-game total per participating team."""
    return {
        tid: ledger.score_for(game.results, tid)
        + adjustments.sum_for(game.manual_adjustments, tid)
        for tid in game.participating_team_ids
    }


def calculate_set_scores(game: Game, set_id: int) -> dict[str, int]:
    """Per-set total per participating team, adjustments for that set included."""
    return {
        tid: ledger.score_for_set(game.results, tid, set_id)
        + adjustments.sum_for_set(game.manual_adjustments, tid, set_id)
        for tid in game.participating_team_ids
    }


def set_breakdown(game: Game, through_set: int | None = None) -> list[SetSummaryRow]:
    """Column-by-set summary rows, highest total first.

    ``through_set`` is inclusive; by default every set of the game is shown,
    the bonus set included when enabled. Summing the columns of a full
    breakdown gives exactly ``calculate_game_scores``.
    """
    last = set_count(game.has_bonus_round) - 1 if through_set is None else through_set
    per_set = [calculate_set_scores(game, s) for s in range(last + 1)]

    rows = []
    for tid in game.participating_team_ids:
        set_scores = [scores[tid] for scores in per_set]
        rows.append(SetSummaryRow(team_id=tid, set_scores=set_scores, total=sum(set_scores)))

    return sorted(rows, key=lambda r: (-r.total, r.team_id))


def resolve_points(
    game: Game,
    explicit_points: int | None = None,
    default_points: int = DEFAULT_QUESTION_POINTS,
) -> int:
    """Point value for the current question.

    Resolution order:
    1. A value the operator typed for this question.
    2. The game's sticky points (last value used). A sticky value of 0
       counts as unset.
    3. ``default_points``.
    """
    if explicit_points is not None:
        return explicit_points
    if game.sticky_points:
        return game.sticky_points
    return default_points


def record_result(
    game: Game,
    correct_team_ids: list[str] | set[str],
    explicit_points: int | None = None,
    default_points: int = DEFAULT_QUESTION_POINTS,
) -> RecordOutcome:
    """Record the current question's outcome and move to the next question.

    The entry is upserted at ``game.current_stage``; ``sticky_points`` is
    overwritten with the value used so the next question defaults to it.

    Raises:
        ValueError: If the game is not live or already past its last set.
    """
    if not game.is_live:
        raise ValueError(f"Cannot record results for game {game.id} with status {game.status}")
    if is_game_over(game.current_stage, game.has_bonus_round):
        raise ValueError(f"Game {game.id} has no questions left to score")

    points = resolve_points(game, explicit_points, default_points)
    stage = game.current_stage
    result = QuestionResult(
        set_id=stage.set,
        category_id=stage.category,
        question_index=stage.question,
        correct_team_ids=sorted(set(correct_team_ids)),
        points=points,
    )
    transition = advance(stage)

    updated = game.model_copy(
        update={
            "results": ledger.upsert(game.results, result),
            "sticky_points": points,
            "current_stage": transition.stage,
        }
    )
    logger.info(
        "result_recorded game=%s stage=%s correct=%d points=%d",
        game.id,
        "-".join(str(v) for v in stage.as_tuple()),
        len(result.correct_team_ids),
        points,
    )
    return RecordOutcome(game=updated, crossed_set_boundary=transition.crossed_set_boundary)
