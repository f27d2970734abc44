"""Dense competition ranking over any team -> score mapping.

Ties share a rank and the next distinct score takes the immediately
following rank: {A: 10, B: 10, C: 5} ranks A=1, B=1, C=2.
"""

from __future__ import annotations

from collections.abc import Mapping


def dense_ranks(scores: Mapping[str, float]) -> dict[str, int]:
    """Rank of every team in ``scores``."""
    distinct = sorted(set(scores.values()), reverse=True)
    rank_of_value = {value: i + 1 for i, value in enumerate(distinct)}
    return {team_id: rank_of_value[score] for team_id, score in scores.items()}


def rank_for(scores: Mapping[str, float], team_id: str) -> int:
    """Rank of one team; a team with no entry is ranked as a score of 0."""
    score = scores.get(team_id, 0)
    return 1 + len({v for v in scores.values() if v > score})


def ordered_by_score(scores: Mapping[str, float]) -> list[tuple[str, float, int]]:
    """``(team_id, score, rank)`` rows, highest score first, then by team id."""
    ranks = dense_ranks(scores)
    return [
        (team_id, score, ranks[team_id])
        for team_id, score in sorted(scores.items(), key=lambda kv: (-kv[1], kv[0]))
    ]
