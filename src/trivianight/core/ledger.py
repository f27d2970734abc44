"""Result ledger: one QuestionResult per (set, category, question).

Entry order is insertion order, except that re-recording a coordinate
replaces the entry at its original position. Breakdown displays walk the
ledger in this order.
"""

from __future__ import annotations

from trivianight.models.game import QuestionResult, Stage


def upsert(results: list[QuestionResult], result: QuestionResult) -> list[QuestionResult]:
    """Return a new ledger with ``result`` replacing or appended."""
    updated = list(results)
    for i, existing in enumerate(updated):
        if existing.key == result.key:
            updated[i] = result
            return updated
    updated.append(result)
    return updated


def find_result(results: list[QuestionResult], stage: Stage) -> QuestionResult | None:
    """The recorded outcome at ``stage``, if any."""
    key = stage.as_tuple()
    for existing in results:
        if existing.key == key:
            return existing
    return None


def score_for(results: list[QuestionResult], team_id: str) -> int:
    return sum(r.points for r in results if team_id in r.correct_team_ids)


def score_for_set(results: list[QuestionResult], team_id: str, set_id: int) -> int:
    return sum(
        r.points for r in results if r.set_id == set_id and team_id in r.correct_team_ids
    )
