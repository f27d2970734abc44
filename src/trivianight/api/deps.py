"""FastAPI dependency injection for the league store and settings."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from trivianight.config import Settings
from trivianight.store import LeagueStore


async def get_store(request: Request) -> LeagueStore:
    """Get the league store from app state."""
    return request.app.state.store


async def get_settings(request: Request) -> Settings:
    return request.app.state.settings


StoreDep = Annotated[LeagueStore, Depends(get_store)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
