"""Team API endpoints: roster management and per-team game history."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from trivianight.api.deps import StoreDep
from trivianight.core.reports import team_history
from trivianight.models.team import Member, Team, active_teams

router = APIRouter(prefix="/api/teams", tags=["teams"])


class CreateTeamRequest(BaseModel):
    """Request body for registering a team."""

    name: str
    leader: str = ""
    leader_contact: str | None = None
    members: list[Member] = Field(default_factory=list)


@router.post("")
async def create_team(body: CreateTeamRequest, store: StoreDep) -> dict:
    team = Team(
        id=str(uuid.uuid4()),
        name=body.name,
        leader=body.leader,
        leader_contact=body.leader_contact,
        members=body.members,
    )
    store.put_team(team)
    return {"data": team.model_dump(mode="json")}


@router.get("")
async def list_teams(store: StoreDep, include_archived: bool = False) -> dict:
    """List teams; archived ones only when asked for."""
    teams = store.teams() if include_archived else active_teams(store.teams())
    return {
        "data": [
            {
                "id": t.id,
                "name": t.name,
                "leader": t.leader,
                "member_count": len(t.members),
                "is_archived": t.is_archived,
            }
            for t in teams
        ],
    }


@router.post("/{team_id}/archive")
async def toggle_archive(team_id: str, store: StoreDep) -> dict:
    """Archive an active team or restore an archived one."""
    team = store.get_team(team_id)
    if not team:
        raise HTTPException(404, "Team not found")
    team = store.put_team(team.model_copy(update={"is_archived": not team.is_archived}))
    return {"data": team.model_dump(mode="json")}


@router.get("/{team_id}/history")
async def get_team_history(team_id: str, store: StoreDep) -> dict:
    """Archived games the team played, newest first, with score and rank."""
    team = store.get_team(team_id)
    if not team:
        raise HTTPException(404, "Team not found")
    history = team_history(team_id, store.games(), store.hosts())
    return {
        "data": [
            {
                "game_id": entry.game.id,
                "title": entry.game.title,
                "date": entry.game.date.isoformat(),
                "score": entry.score,
                "rank": entry.rank,
                "hosts": entry.host_names,
            }
            for entry in history
        ],
    }
