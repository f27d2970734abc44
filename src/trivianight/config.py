"""Application settings via pydantic-settings. Loads from environment and .env file."""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from trivianight.models.constants import (
    DEFAULT_FEEDBACK_RATING,
    DEFAULT_QUESTION_POINTS,
    MAX_HOSTS_PER_GAME,
)


class Settings(BaseSettings):
    """Trivia night application configuration.

    All values can be overridden via environment variables or .env file.
    """

    # Environment
    trivianight_env: str = "development"
    trivianight_docs_enabled: bool = True

    # Scoring defaults
    trivianight_default_points: int = Field(default=DEFAULT_QUESTION_POINTS, ge=1)
    trivianight_default_feedback_rating: int = Field(default=DEFAULT_FEEDBACK_RATING, ge=1, le=10)
    trivianight_max_hosts: int = Field(default=MAX_HOSTS_PER_GAME, ge=1)

    # Optional JSON snapshot ({teams, hosts, seasons, games}) loaded at startup
    trivianight_snapshot_path: str = ""

    # Logging
    trivianight_log_level: str = "INFO"

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _hide_docs_in_production(self) -> Settings:
        """Interactive API docs are never served in production."""
        if self.trivianight_env == "production":
            self.trivianight_docs_enabled = False
        return self
