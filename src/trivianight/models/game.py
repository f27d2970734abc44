"""Game models: the mutable aggregate and its ledger entries.

A Game is replaced as a whole on every change (``model_copy``); the Result
Ledger and Adjustment Log live only inside their Game.
"""

from __future__ import annotations

import datetime as dt
from datetime import UTC
from typing import Literal

from pydantic import ConfigDict, Field

from trivianight.models.team import CamelModel

GameType = Literal["Regular", "Special"]
GameStatus = Literal["Upcoming", "Live", "Archived"]
CategoryType = Literal["Text", "Picture", "Audio", "Others"]


class Stage(CamelModel):
    """Coordinate of the question currently being scored."""

    model_config = ConfigDict(frozen=True)

    set: int = Field(default=0, ge=0)
    category: int = Field(default=0, ge=0)
    question: int = Field(default=0, ge=0)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.set, self.category, self.question)


class QuestionResult(CamelModel):
    """Outcome of one question: which teams were right, and for how much."""

    set_id: int = Field(ge=0)
    category_id: int = Field(ge=0)
    question_index: int = Field(ge=0)
    correct_team_ids: list[str] = Field(default_factory=list)
    points: int

    @property
    def key(self) -> tuple[int, int, int]:
        return (self.set_id, self.category_id, self.question_index)


class ManualAdjustment(CamelModel):
    """Signed point correction for one team, scoped to a set."""

    id: str
    team_id: str
    points: int
    set_id: int = Field(ge=0)
    reason: str = ""
    timestamp: dt.datetime = Field(default_factory=lambda: dt.datetime.now(UTC))


class CategoryConfig(CamelModel):
    """Display name and content type of a category."""

    name: str = ""
    type: CategoryType = "Text"


class GameFeedback(CamelModel):
    """A team's rating of the night, collected at archival."""

    team_id: str
    rating: int = Field(ge=1, le=10)
    remarks: str | None = None
    memorable_category_key: str | None = None


class Game(CamelModel):
    """A single trivia game.

    ``sticky_points`` is the last point value used; it becomes the default
    for the next question. ``count_in_royalty`` is ``None`` on legacy
    records, in which case the game type decides eligibility.
    """

    id: str
    season_id: str
    host_ids: list[str] = Field(default_factory=list)
    type: GameType = "Regular"
    title: str = "Regular Game"
    date: dt.date
    status: GameStatus = "Upcoming"
    participating_team_ids: list[str] = Field(default_factory=list)

    # Configuration
    has_bonus_round: bool = False
    category_points: dict[str, int] = Field(default_factory=dict)
    category_configs: dict[str, CategoryConfig] = Field(default_factory=dict)
    sticky_points: int | None = None
    count_in_royalty: bool | None = None

    # State
    current_stage: Stage = Field(default_factory=Stage)
    results: list[QuestionResult] = Field(default_factory=list)
    manual_adjustments: list[ManualAdjustment] = Field(default_factory=list)

    # Post game
    feedback: list[GameFeedback] | None = None

    @property
    def is_live(self) -> bool:
        return self.status == "Live"

    @property
    def is_archived(self) -> bool:
        return self.status == "Archived"


class RoyaltyStanding(CamelModel):
    """One row of the season-long royalty table."""

    team_id: str
    team_name: str
    points: int = 0
    games_played: int = 0
    wins: int = 0
