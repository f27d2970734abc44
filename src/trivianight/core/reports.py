"""Read-only report views: name lookups, accuracy, category stats, team and
host history.

All functions are pure and total. Unknown ids resolve to ``"Unknown"`` and
zero denominators report 0%.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field

from trivianight.core.ranking import rank_for
from trivianight.core.scoring import calculate_game_scores
from trivianight.core.stage import category_key, set_count
from trivianight.models.constants import CATEGORIES_PER_SET, UNKNOWN_NAME
from trivianight.models.game import CategoryConfig, Game
from trivianight.models.team import Host, Team


def team_name(teams: list[Team], team_id: str) -> str:
    for team in teams:
        if team.id == team_id:
            return team.name
    return UNKNOWN_NAME


def host_names(hosts: list[Host], host_ids: list[str]) -> str:
    """Comma-joined host names, ``"Unknown"`` for ids not on record."""
    if not host_ids:
        return UNKNOWN_NAME
    by_id = {h.id: h.name for h in hosts}
    return ", ".join(by_id.get(hid, UNKNOWN_NAME) for hid in host_ids)


def _pct(numerator: int, denominator: int) -> int:
    if not denominator:
        return 0
    return round(numerator / denominator * 100)


def team_accuracy(game: Game, team_id: str) -> int:
    """Percent of recorded questions the team got right."""
    correct = sum(1 for r in game.results if team_id in r.correct_team_ids)
    return _pct(correct, len(game.results))


@dataclass
class CategoryPerformance:
    """How the room did on one category."""

    key: str
    set_id: int
    category_id: int
    config: CategoryConfig
    questions: int
    pct_correct: int


def category_performance(game: Game) -> list[CategoryPerformance]:
    """Percent correct per played category, in grid order.

    Possible answers are questions recorded times participating teams.
    Categories with no recorded question are left out.
    """
    team_count = len(game.participating_team_ids)
    rows = []
    for s in range(set_count(game.has_bonus_round)):
        for c in range(CATEGORIES_PER_SET):
            cat_results = [r for r in game.results if r.set_id == s and r.category_id == c]
            if not cat_results:
                continue
            key = category_key(s, c)
            correct = sum(len(r.correct_team_ids) for r in cat_results)
            rows.append(
                CategoryPerformance(
                    key=key,
                    set_id=s,
                    category_id=c,
                    config=game.category_configs.get(key, CategoryConfig()),
                    questions=len(cat_results),
                    pct_correct=_pct(correct, len(cat_results) * team_count),
                )
            )
    return rows


def memorable_category_options(game: Game) -> list[tuple[str, str]]:
    """``(key, label)`` choices for the feedback form, bonus set included."""
    options = []
    for s in range(set_count(game.has_bonus_round)):
        for c in range(CATEGORIES_PER_SET):
            key = category_key(s, c)
            cfg = game.category_configs.get(key)
            if cfg and cfg.name:
                label = f"S{s + 1}-C{c + 1}: {cfg.name}"
            else:
                label = f"Set {s + 1} Category {c + 1}"
            options.append((key, label))
    return options


@dataclass
class TeamHistoryEntry:
    """One archived game from a team's point of view."""

    game: Game
    score: int
    rank: int
    host_names: str


def team_history(team_id: str, games: list[Game], hosts: list[Host]) -> list[TeamHistoryEntry]:
    """Archived games the team played, most recent first."""
    history = []
    for game in games:
        if not game.is_archived or team_id not in game.participating_team_ids:
            continue
        scores = calculate_game_scores(game)
        history.append(
            TeamHistoryEntry(
                game=game,
                score=scores.get(team_id, 0),
                rank=rank_for(scores, team_id),
                host_names=host_names(hosts, game.host_ids),
            )
        )
    return sorted(history, key=lambda e: e.game.date, reverse=True)


@dataclass
class HostComment:
    team_name: str
    text: str
    rating: int
    date: dt.date


@dataclass
class HostStats:
    host_id: str
    games_hosted: int = 0
    rating_count: int = 0
    average_rating: float | None = None
    comments: list[HostComment] = field(default_factory=list)


def host_stats(host_id: str, games: list[Game], teams: list[Team]) -> HostStats:
    """Feedback summary over every archived game the host ran.

    ``average_rating`` is ``None`` when no team left a rating.
    """
    hosted = [g for g in games if g.is_archived and host_id in g.host_ids]
    stats = HostStats(host_id=host_id, games_hosted=len(hosted))

    total = 0
    for game in hosted:
        for fb in game.feedback or []:
            total += fb.rating
            stats.rating_count += 1
            if fb.remarks:
                stats.comments.append(
                    HostComment(
                        team_name=team_name(teams, fb.team_id),
                        text=fb.remarks,
                        rating=fb.rating,
                        date=game.date,
                    )
                )

    if stats.rating_count:
        stats.average_rating = round(total / stats.rating_count, 1)
    return stats
