"""Builders for games and ledger entries used across tests."""

import datetime as dt

from trivianight.models.game import Game, ManualAdjustment, QuestionResult, Stage


def make_game(
    game_id: str = "g-1",
    season_id: str = "s-1",
    teams: tuple[str, ...] = ("A", "B", "C"),
    status: str = "Live",
    **overrides,
) -> Game:
    """Build a game with the given participating teams."""
    data = {
        "id": game_id,
        "season_id": season_id,
        "host_ids": ["h-1"],
        "date": dt.date(2024, 5, 1),
        "status": status,
        "participating_team_ids": list(teams),
    }
    data.update(overrides)
    return Game(**data)


def result(
    set_id: int,
    category_id: int,
    question_index: int,
    correct: list[str],
    points: int = 1,
) -> QuestionResult:
    return QuestionResult(
        set_id=set_id,
        category_id=category_id,
        question_index=question_index,
        correct_team_ids=correct,
        points=points,
    )


def adjustment(team_id: str, points: int, set_id: int = 0, adj_id: str = "") -> ManualAdjustment:
    return ManualAdjustment(
        id=adj_id or f"adj-{team_id}-{set_id}-{points}",
        team_id=team_id,
        points=points,
        set_id=set_id,
    )


def stage(set_idx: int, category: int, question: int) -> Stage:
    return Stage(set=set_idx, category=category, question=question)
