"""Season API endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from trivianight.api.deps import StoreDep

router = APIRouter(prefix="/api/seasons", tags=["seasons"])


class CreateSeasonRequest(BaseModel):
    """Request body for starting a new season. The new season becomes active."""

    name: str


@router.post("")
async def create_season(body: CreateSeasonRequest, store: StoreDep) -> dict:
    if not body.name.strip():
        raise HTTPException(status_code=400, detail="Season name is required")
    season = store.add_season(str(uuid.uuid4()), body.name)
    return {"data": season.model_dump(mode="json")}


@router.get("")
async def list_seasons(store: StoreDep) -> dict:
    return {"data": [s.model_dump(mode="json") for s in store.seasons()]}


@router.get("/current")
async def get_current_season(store: StoreDep) -> dict:
    season = store.current_season()
    if season is None:
        raise HTTPException(404, "No season on record")
    return {"data": season.model_dump(mode="json")}
