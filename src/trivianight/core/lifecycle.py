"""Game lifecycle: Upcoming -> Live -> Archived, and the edits allowed on the way.

Every function returns a new Game; the caller persists it. Invalid
transitions raise ``ValueError``.
"""

from __future__ import annotations

import datetime as dt
import logging

from trivianight.core import adjustments
from trivianight.core.stage import START_STAGE, is_game_over, retreat
from trivianight.models.constants import (
    DEFAULT_FEEDBACK_RATING,
    MAX_HOSTS_PER_GAME,
    SETS_PER_GAME,
)
from trivianight.models.game import (
    CategoryConfig,
    CategoryType,
    Game,
    GameFeedback,
    GameType,
    ManualAdjustment,
)

logger = logging.getLogger(__name__)

REGULAR_GAME_TITLE = "Regular Game"


def create_game(
    game_id: str,
    season_id: str,
    host_ids: list[str],
    date: dt.date,
    game_type: GameType = "Regular",
    title: str = "",
    has_bonus_round: bool = False,
    count_in_royalty: bool | None = None,
    max_hosts: int = MAX_HOSTS_PER_GAME,
) -> Game:
    """Create an Upcoming game at the first stage with an empty ledger.

    Blank host entries are dropped. Regular games always carry the generic
    title; Special games keep the one given.

    Raises:
        ValueError: If no host remains or more than ``max_hosts`` are given.
    """
    hosts = [h for h in host_ids if h.strip()]
    if not hosts:
        raise ValueError("A game needs at least one host")
    if len(hosts) > max_hosts:
        raise ValueError(f"A game takes at most {max_hosts} hosts, got {len(hosts)}")

    return Game(
        id=game_id,
        season_id=season_id,
        host_ids=hosts,
        type=game_type,
        title=title if game_type == "Special" else REGULAR_GAME_TITLE,
        date=date,
        status="Upcoming",
        participating_team_ids=[],
        has_bonus_round=has_bonus_round,
        count_in_royalty=count_in_royalty,
        current_stage=START_STAGE,
        results=[],
        manual_adjustments=[],
    )


def start_game(game: Game) -> Game:
    """Go live.

    A game that was never started gets an empty roster; re-entering a live
    game keeps the teams already picked.
    """
    if game.is_archived:
        raise ValueError(f"Game {game.id} is archived and cannot be restarted")

    participating = [] if game.status == "Upcoming" else list(game.participating_team_ids)
    logger.info("game_started game=%s from=%s", game.id, game.status)
    return game.model_copy(update={"status": "Live", "participating_team_ids": participating})


def _require_live(game: Game, action: str) -> None:
    if not game.is_live:
        raise ValueError(f"Cannot {action} game {game.id} with status {game.status}")


def update_roster(game: Game, team_ids: list[str]) -> Game:
    """Replace the participating teams, keeping their given order, deduplicated."""
    _require_live(game, "edit roster of")
    roster = list(dict.fromkeys(team_ids))
    return game.model_copy(update={"participating_team_ids": roster})


def update_category_config(
    game: Game,
    key: str,
    name: str | None = None,
    category_type: CategoryType | None = None,
) -> Game:
    """Set the display name and/or content type of one ``"set-category"`` key."""
    if game.is_archived:
        raise ValueError(f"Game {game.id} is archived")

    current = game.category_configs.get(key, CategoryConfig())
    changes: dict[str, str] = {}
    if name is not None:
        changes["name"] = name
    if category_type is not None:
        changes["type"] = category_type

    configs = dict(game.category_configs)
    configs[key] = current.model_copy(update=changes)
    return game.model_copy(update={"category_configs": configs})


def retreat_stage(game: Game) -> Game:
    """Step back one question; a no-op at the first question."""
    _require_live(game, "move stage of")
    return game.model_copy(update={"current_stage": retreat(game.current_stage)})


def add_adjustment(game: Game, adjustment: ManualAdjustment) -> Game:
    """Append a correction while the game is live and still has a set in play.

    Raises:
        ValueError: If the game is not live or already past its last set.
    """
    _require_live(game, "adjust scores of")
    if is_game_over(game.current_stage, game.has_bonus_round):
        raise ValueError(f"Game {game.id} is over; no set left to adjust")
    logger.info(
        "adjustment_added game=%s team=%s points=%d set=%d",
        game.id,
        adjustment.team_id,
        adjustment.points,
        adjustment.set_id,
    )
    return game.model_copy(
        update={"manual_adjustments": adjustments.append(game.manual_adjustments, adjustment)}
    )


def enable_bonus_round(game: Game) -> Game:
    """Turn on the bonus set. The stage does not move, so a game that just
    finished its regular sets resumes at the first bonus question."""
    if game.is_archived:
        raise ValueError(f"Game {game.id} is archived")
    return game.model_copy(update={"has_bonus_round": True})


def disable_bonus_round(game: Game) -> Game:
    """Turn off the bonus set, only while play has not reached it.

    Raises:
        ValueError: If the game is archived or already in (or past) the bonus set.
    """
    if game.is_archived:
        raise ValueError(f"Game {game.id} is archived")
    if game.has_bonus_round and game.current_stage.set >= SETS_PER_GAME:
        raise ValueError(f"Game {game.id} has already reached the bonus round")
    return game.model_copy(update={"has_bonus_round": False})


def archive_game(
    game: Game,
    feedback: list[GameFeedback] | None = None,
    default_rating: int = DEFAULT_FEEDBACK_RATING,
) -> Game:
    """Archive a live game, attaching one feedback entry per participating team.

    Teams that gave no feedback get ``default_rating``; entries for teams not
    in the game are dropped.
    """
    _require_live(game, "archive")

    given = {f.team_id: f for f in feedback or []}
    entries = [
        given.get(tid) or GameFeedback(team_id=tid, rating=default_rating)
        for tid in game.participating_team_ids
    ]

    logger.info("game_archived game=%s teams=%d", game.id, len(entries))
    return game.model_copy(update={"status": "Archived", "feedback": entries})
