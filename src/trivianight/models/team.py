"""Team, Host, and Season models.

Wire format is camelCase so records written by the scoring front-end load
as-is; Python attributes stay snake_case.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting both camelCase aliases and field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Member(CamelModel):
    """A person on a team roster."""

    name: str
    contact: str | None = None


class Team(CamelModel):
    """A trivia team.

    Archived teams drop out of selection pools for new games but keep
    counting in every historical computation.
    """

    id: str
    name: str
    leader: str = ""
    leader_contact: str | None = None
    members: list[Member] = Field(default_factory=list)
    is_archived: bool = False


class Host(CamelModel):
    """A quiz host. Read-only reference for scoring."""

    id: str
    name: str
    team_id: str | None = None
    gender: Literal["Male", "Female", "Other"] | None = None
    age: int | None = Field(default=None, ge=0)


class Season(CamelModel):
    """A season of games. At most one is active at a time."""

    id: str
    name: str
    is_active: bool = False


def active_teams(teams: list[Team], keep_ids: set[str] | None = None) -> list[Team]:
    """Teams available for selection: not archived, or already in ``keep_ids``."""
    keep = keep_ids or set()
    return [t for t in teams if not t.is_archived or t.id in keep]


def current_season(seasons: list[Season]) -> Season | None:
    """The active season, falling back to the first one on record."""
    for season in seasons:
        if season.is_active:
            return season
    return seasons[0] if seasons else None
