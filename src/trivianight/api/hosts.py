"""Host API endpoints."""

from __future__ import annotations

import uuid
from typing import Literal

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from trivianight.api.deps import StoreDep
from trivianight.core.reports import host_stats
from trivianight.models.team import Host

router = APIRouter(prefix="/api/hosts", tags=["hosts"])


class CreateHostRequest(BaseModel):
    name: str
    team_id: str | None = None
    gender: Literal["Male", "Female", "Other"] | None = None
    age: int | None = Field(default=None, ge=0)


@router.post("")
async def create_host(body: CreateHostRequest, store: StoreDep) -> dict:
    host = Host(id=str(uuid.uuid4()), **body.model_dump())
    store.put_host(host)
    return {"data": host.model_dump(mode="json")}


@router.get("")
async def list_hosts(store: StoreDep) -> dict:
    return {"data": [h.model_dump(mode="json") for h in store.hosts()]}


@router.get("/{host_id}/stats")
async def get_host_stats(host_id: str, store: StoreDep) -> dict:
    """Games hosted, average rating, and the remarks teams left."""
    if not store.get_host(host_id):
        raise HTTPException(404, "Host not found")
    stats = host_stats(host_id, store.games(), store.teams())
    return {
        "data": {
            "host_id": stats.host_id,
            "games_hosted": stats.games_hosted,
            "rating_count": stats.rating_count,
            "average_rating": stats.average_rating,
            "comments": [
                {
                    "team_name": c.team_name,
                    "text": c.text,
                    "rating": c.rating,
                    "date": c.date.isoformat(),
                }
                for c in stats.comments
            ],
        },
    }
