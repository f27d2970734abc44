"""Adjustment log: append-only signed corrections scoped to a team and set."""

from __future__ import annotations

from trivianight.models.game import ManualAdjustment


def build_adjustment(
    adjustment_id: str,
    team_id: str,
    points: int,
    set_id: int,
    reason: str = "",
) -> ManualAdjustment:
    """Create an adjustment stamped with the current UTC time."""
    return ManualAdjustment(
        id=adjustment_id,
        team_id=team_id,
        points=points,
        set_id=set_id,
        reason=reason,
    )


def append(log: list[ManualAdjustment], adjustment: ManualAdjustment) -> list[ManualAdjustment]:
    return [*log, adjustment]


def sum_for(log: list[ManualAdjustment], team_id: str) -> int:
    return sum(a.points for a in log if a.team_id == team_id)


def sum_for_set(log: list[ManualAdjustment], team_id: str, set_id: int) -> int:
    return sum(a.points for a in log if a.team_id == team_id and a.set_id == set_id)
