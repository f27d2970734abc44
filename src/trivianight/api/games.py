"""Game API endpoints: lifecycle actions, live scoring, and game reports."""

from __future__ import annotations

import datetime as dt
import uuid
from collections.abc import Callable

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from trivianight.api.deps import SettingsDep, StoreDep
from trivianight.core import lifecycle
from trivianight.core.adjustments import build_adjustment
from trivianight.core.ledger import find_result
from trivianight.core.ranking import ordered_by_score
from trivianight.core.reports import (
    category_performance,
    host_names,
    memorable_category_options,
    team_accuracy,
    team_name,
)
from trivianight.core.scoring import (
    calculate_game_scores,
    record_result,
    resolve_points,
    set_breakdown,
)
from trivianight.core.stage import is_game_over, set_count, set_label
from trivianight.models.game import CategoryType, Game, GameFeedback, GameType
from trivianight.store import LeagueStore

router = APIRouter(prefix="/api/games", tags=["games"])


class CreateGameRequest(BaseModel):
    """Request body for scheduling a game."""

    host_ids: list[str]
    date: dt.date
    type: GameType = "Regular"
    title: str = ""
    has_bonus_round: bool = False
    count_in_royalty: bool | None = None
    season_id: str | None = None


class RosterRequest(BaseModel):
    team_ids: list[str]


class CategoryRequest(BaseModel):
    name: str | None = None
    type: CategoryType | None = None


class RecordResultRequest(BaseModel):
    """Teams that answered the current question correctly.

    ``points`` is the value typed for this question; omit it to reuse the
    sticky value.
    """

    correct_team_ids: list[str] = Field(default_factory=list)
    points: int | None = None


class AdjustmentRequest(BaseModel):
    team_id: str
    points: int
    reason: str = ""


class ArchiveRequest(BaseModel):
    feedback: list[GameFeedback] = Field(default_factory=list)


def _get_game(store: LeagueStore, game_id: str) -> Game:
    game = store.get_game(game_id)
    if game is None:
        raise HTTPException(404, "Game not found")
    return game


def _apply(store: LeagueStore, game_id: str, action: Callable[[Game], Game]) -> Game:
    """Run a lifecycle action and store the new game; invalid transitions are 409s."""
    game = _get_game(store, game_id)
    try:
        updated = action(game)
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return store.put_game(updated)


def _game_payload(game: Game, settings_default_points: int) -> dict:
    """Game state plus what the scorer screen needs for the current question."""
    existing = find_result(game.results, game.current_stage)
    return {
        **game.model_dump(mode="json"),
        "is_game_over": is_game_over(game.current_stage, game.has_bonus_round),
        "current_points": (
            existing.points
            if existing
            else resolve_points(game, default_points=settings_default_points)
        ),
        "current_selection": existing.correct_team_ids if existing else [],
    }


@router.post("")
async def create_game(body: CreateGameRequest, store: StoreDep, settings: SettingsDep) -> dict:
    """Schedule a game in the given season, or the current one."""
    season_id = body.season_id
    if season_id is None:
        season = store.current_season()
        if season is None:
            raise HTTPException(409, "No season to schedule the game in")
        season_id = season.id

    try:
        game = lifecycle.create_game(
            game_id=str(uuid.uuid4()),
            season_id=season_id,
            host_ids=body.host_ids,
            date=body.date,
            game_type=body.type,
            title=body.title,
            has_bonus_round=body.has_bonus_round,
            count_in_royalty=body.count_in_royalty,
            max_hosts=settings.trivianight_max_hosts,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    store.put_game(game)
    return {"data": _game_payload(game, settings.trivianight_default_points)}


@router.get("")
async def list_games(store: StoreDep, season_id: str | None = None) -> dict:
    games = [g for g in store.games() if season_id is None or g.season_id == season_id]
    return {
        "data": [
            {
                "id": g.id,
                "title": g.title,
                "type": g.type,
                "date": g.date.isoformat(),
                "status": g.status,
                "has_bonus_round": g.has_bonus_round,
                "hosts": host_names(store.hosts(), g.host_ids),
            }
            for g in games
        ],
    }


@router.get("/{game_id}")
async def get_game(game_id: str, store: StoreDep, settings: SettingsDep) -> dict:
    game = _get_game(store, game_id)
    return {"data": _game_payload(game, settings.trivianight_default_points)}


@router.post("/{game_id}/start")
async def start_game(game_id: str, store: StoreDep, settings: SettingsDep) -> dict:
    game = _apply(store, game_id, lifecycle.start_game)
    return {"data": _game_payload(game, settings.trivianight_default_points)}


@router.put("/{game_id}/roster")
async def update_roster(
    game_id: str, body: RosterRequest, store: StoreDep, settings: SettingsDep
) -> dict:
    game = _apply(store, game_id, lambda g: lifecycle.update_roster(g, body.team_ids))
    return {"data": _game_payload(game, settings.trivianight_default_points)}


@router.put("/{game_id}/categories/{key}")
async def update_category(
    game_id: str, key: str, body: CategoryRequest, store: StoreDep, settings: SettingsDep
) -> dict:
    game = _apply(
        store,
        game_id,
        lambda g: lifecycle.update_category_config(g, key, body.name, body.type),
    )
    return {"data": _game_payload(game, settings.trivianight_default_points)}


@router.post("/{game_id}/results")
async def record_question(
    game_id: str, body: RecordResultRequest, store: StoreDep, settings: SettingsDep
) -> dict:
    """Record the current question and advance.

    ``set_finished`` tells the client to show the set summary.
    """
    game = _get_game(store, game_id)
    try:
        outcome = record_result(
            game,
            body.correct_team_ids,
            explicit_points=body.points,
            default_points=settings.trivianight_default_points,
        )
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    store.put_game(outcome.game)
    return {
        "data": _game_payload(outcome.game, settings.trivianight_default_points),
        "set_finished": outcome.crossed_set_boundary,
    }


@router.post("/{game_id}/retreat")
async def retreat_question(game_id: str, store: StoreDep, settings: SettingsDep) -> dict:
    game = _apply(store, game_id, lifecycle.retreat_stage)
    return {"data": _game_payload(game, settings.trivianight_default_points)}


@router.post("/{game_id}/adjustments")
async def add_adjustment(
    game_id: str, body: AdjustmentRequest, store: StoreDep, settings: SettingsDep
) -> dict:
    """Apply a manual correction, scoped to the set currently being played."""
    game = _get_game(store, game_id)
    adjustment = build_adjustment(
        adjustment_id=str(uuid.uuid4()),
        team_id=body.team_id,
        points=body.points,
        set_id=game.current_stage.set,
        reason=body.reason,
    )
    game = _apply(store, game_id, lambda g: lifecycle.add_adjustment(g, adjustment))
    return {"data": _game_payload(game, settings.trivianight_default_points)}


@router.post("/{game_id}/bonus")
async def enable_bonus(game_id: str, store: StoreDep, settings: SettingsDep) -> dict:
    game = _apply(store, game_id, lifecycle.enable_bonus_round)
    return {"data": _game_payload(game, settings.trivianight_default_points)}


@router.delete("/{game_id}/bonus")
async def disable_bonus(game_id: str, store: StoreDep, settings: SettingsDep) -> dict:
    game = _apply(store, game_id, lifecycle.disable_bonus_round)
    return {"data": _game_payload(game, settings.trivianight_default_points)}


@router.post("/{game_id}/archive")
async def archive_game(
    game_id: str, body: ArchiveRequest, store: StoreDep, settings: SettingsDep
) -> dict:
    game = _apply(
        store,
        game_id,
        lambda g: lifecycle.archive_game(
            g,
            body.feedback,
            default_rating=settings.trivianight_default_feedback_rating,
        ),
    )
    return {"data": _game_payload(game, settings.trivianight_default_points)}


@router.get("/{game_id}/scores")
async def get_scores(game_id: str, store: StoreDep) -> dict:
    """Live leaderboard with dense ranks and the per-set breakdown."""
    game = _get_game(store, game_id)
    teams = store.teams()
    scores = calculate_game_scores(game)
    breakdown = {row.team_id: row.set_scores for row in set_breakdown(game)}

    return {
        "data": {
            "sets": [set_label(s) for s in range(set_count(game.has_bonus_round))],
            "teams": [
                {
                    "team_id": team_id,
                    "team_name": team_name(teams, team_id),
                    "score": score,
                    "rank": rank,
                    "set_scores": breakdown.get(team_id, []),
                }
                for team_id, score, rank in ordered_by_score(scores)
            ],
        },
    }


@router.get("/{game_id}/report")
async def get_report(game_id: str, store: StoreDep) -> dict:
    """Post-game stats: category performance, team accuracy, feedback choices."""
    game = _get_game(store, game_id)
    teams = store.teams()
    return {
        "data": {
            "categories": [
                {
                    "key": row.key,
                    "set": set_label(row.set_id),
                    "name": row.config.name or f"Category {row.category_id + 1}",
                    "type": row.config.type,
                    "questions": row.questions,
                    "pct_correct": row.pct_correct,
                }
                for row in category_performance(game)
            ],
            "accuracy": [
                {
                    "team_id": tid,
                    "team_name": team_name(teams, tid),
                    "pct_correct": team_accuracy(game, tid),
                }
                for tid in game.participating_team_ids
            ],
            "memorable_category_options": [
                {"key": key, "label": label} for key, label in memorable_category_options(game)
            ],
        },
    }
