"""Royalty standings: the cumulative season table built from archived games.

Each eligible game awards every participating team one participation point
plus a bonus by dense rank within that game (see ``RANK_BONUS_POINTS``).
Rank 1 also counts as a win, so tied leaders all collect the win.
"""

from __future__ import annotations

import logging

from trivianight.core.ranking import dense_ranks
from trivianight.core.scoring import calculate_game_scores
from trivianight.models.constants import PARTICIPATION_POINTS, RANK_BONUS_POINTS
from trivianight.models.game import Game, RoyaltyStanding
from trivianight.models.team import Team

logger = logging.getLogger(__name__)


def counts_toward_standings(game: Game) -> bool:
    """Whether an archived game feeds the royalty table.

    Legacy records carry no ``count_in_royalty``; for those, Regular games
    count and Special games do not.
    """
    if game.count_in_royalty is not None:
        return game.count_in_royalty
    return game.type == "Regular"


def eligible_games(season_id: str, games: list[Game]) -> list[Game]:
    return [
        g
        for g in games
        if g.season_id == season_id and g.is_archived and counts_toward_standings(g)
    ]


def compute_royalty_standings(
    season_id: str,
    games: list[Game],
    teams: list[Team],
) -> list[RoyaltyStanding]:
    """Compute season standings from every eligible game.

    Args:
        season_id: Season to compute.
        games: All games on record; filtered here by season, status and
               eligibility.
        teams: Full roster, archived teams included. Every team gets a row,
               even with no games played.

    Returns:
        Standings sorted by points desc, then team id for a stable order.
    """
    table: dict[str, RoyaltyStanding] = {
        t.id: RoyaltyStanding(team_id=t.id, team_name=t.name) for t in teams
    }

    counted = eligible_games(season_id, games)
    for game in counted:
        scores = calculate_game_scores(game)
        ranks = dense_ranks(scores)

        for team_id, rank in ranks.items():
            row = table.get(team_id)
            if row is None:
                logger.warning(
                    "royalty_unknown_team game=%s team=%s skipped",
                    game.id,
                    team_id,
                )
                continue

            row.games_played += 1
            row.points += PARTICIPATION_POINTS + RANK_BONUS_POINTS.get(rank, 0)
            if rank == 1:
                row.wins += 1

    logger.info(
        "royalty_standings_computed season=%s games=%d teams=%d",
        season_id,
        len(counted),
        len(table),
    )
    return sorted(table.values(), key=lambda s: (-s.points, s.team_id))
