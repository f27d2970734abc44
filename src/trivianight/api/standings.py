"""Royalty standings API endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from trivianight.api.deps import StoreDep
from trivianight.core.season import compute_royalty_standings

router = APIRouter(prefix="/api", tags=["standings"])


@router.get("/standings")
async def get_standings(store: StoreDep, season_id: str | None = None) -> dict:
    """Royalty standings for a season, the current one by default."""
    if season_id is None:
        season = store.current_season()
        if season is None:
            return {"data": []}
        season_id = season.id

    standings = compute_royalty_standings(season_id, store.games(), store.teams())
    return {"data": [s.model_dump(mode="json") for s in standings]}
