"""Shared test fixtures."""

import pytest

from trivianight.config import Settings
from trivianight.models.team import Team


@pytest.fixture
def settings() -> Settings:
    """Test settings with defaults."""
    return Settings(trivianight_env="development")


@pytest.fixture
def roster() -> list[Team]:
    return [
        Team(id="A", name="Quizzly Bears"),
        Team(id="B", name="Les Quizerables"),
        Team(id="C", name="Trivia Newton John"),
        Team(id="D", name="Retired Team", is_archived=True),
    ]
