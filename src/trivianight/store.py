"""In-memory league store.

Holds teams, hosts, seasons and games for the API. Games are replaced as
whole values; callers are expected to keep a single writer per game.
Snapshots use the same ``{teams, hosts, seasons, games}`` shape the
front-end syncs, and game records are normalized once when loaded.
"""

from __future__ import annotations

import logging
from typing import Any

from trivianight.core.legacy import normalize_games
from trivianight.models.game import Game
from trivianight.models.team import Host, Season, Team, current_season

logger = logging.getLogger(__name__)


class LeagueStore:
    """Dict-backed store keyed by opaque ids, preserving insertion order."""

    def __init__(self) -> None:
        self._teams: dict[str, Team] = {}
        self._hosts: dict[str, Host] = {}
        self._seasons: dict[str, Season] = {}
        self._games: dict[str, Game] = {}

    # --- Teams / hosts ---

    def put_team(self, team: Team) -> Team:
        self._teams[team.id] = team
        return team

    def get_team(self, team_id: str) -> Team | None:
        return self._teams.get(team_id)

    def teams(self) -> list[Team]:
        return list(self._teams.values())

    def put_host(self, host: Host) -> Host:
        self._hosts[host.id] = host
        return host

    def get_host(self, host_id: str) -> Host | None:
        return self._hosts.get(host_id)

    def hosts(self) -> list[Host]:
        return list(self._hosts.values())

    # --- Seasons ---

    def add_season(self, season_id: str, name: str) -> Season:
        """Create a season and make it the only active one."""
        for sid, existing in self._seasons.items():
            if existing.is_active:
                self._seasons[sid] = existing.model_copy(update={"is_active": False})
        season = Season(id=season_id, name=name, is_active=True)
        self._seasons[season.id] = season
        logger.info("season_created season=%s name=%s", season.id, name)
        return season

    def seasons(self) -> list[Season]:
        return list(self._seasons.values())

    def current_season(self) -> Season | None:
        return current_season(self.seasons())

    # --- Games ---

    def put_game(self, game: Game) -> Game:
        self._games[game.id] = game
        return game

    def get_game(self, game_id: str) -> Game | None:
        return self._games.get(game_id)

    def games(self) -> list[Game]:
        return list(self._games.values())

    # --- Snapshots ---

    def load_snapshot(self, snapshot: dict[str, Any]) -> None:
        """Replace every collection present in ``snapshot``."""
        if "teams" in snapshot:
            self._teams = {t.id: t for t in map(Team.model_validate, snapshot["teams"])}
        if "hosts" in snapshot:
            self._hosts = {h.id: h for h in map(Host.model_validate, snapshot["hosts"])}
        if "seasons" in snapshot:
            self._seasons = {s.id: s for s in map(Season.model_validate, snapshot["seasons"])}
        if "games" in snapshot:
            self._games = {g.id: g for g in normalize_games(snapshot["games"])}
        logger.info(
            "snapshot_loaded teams=%d hosts=%d seasons=%d games=%d",
            len(self._teams),
            len(self._hosts),
            len(self._seasons),
            len(self._games),
        )

    def dump_snapshot(self) -> dict[str, Any]:
        return {
            "teams": [t.model_dump(mode="json", by_alias=True) for t in self.teams()],
            "hosts": [h.model_dump(mode="json", by_alias=True) for h in self.hosts()],
            "seasons": [s.model_dump(mode="json", by_alias=True) for s in self.seasons()],
            "games": [g.model_dump(mode="json", by_alias=True) for g in self.games()],
        }
