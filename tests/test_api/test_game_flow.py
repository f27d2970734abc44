"""End-to-end API test: teams -> season -> game -> scoring -> archive -> standings."""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from trivianight.config import Settings
from trivianight.main import create_app, load_snapshot_file


@pytest.fixture
def app():
    return create_app(Settings(trivianight_env="development"))


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _setup_league(client: AsyncClient) -> dict[str, str]:
    """Create three teams, a host and an active season. Returns name -> id."""
    ids: dict[str, str] = {}
    for name in ("Alpha", "Bravo", "Charlie"):
        resp = await client.post("/api/teams", json={"name": name, "leader": f"{name} lead"})
        assert resp.status_code == 200
        ids[name] = resp.json()["data"]["id"]

    resp = await client.post("/api/hosts", json={"name": "Sam"})
    ids["host"] = resp.json()["data"]["id"]

    resp = await client.post("/api/seasons", json={"name": "Season 1"})
    ids["season"] = resp.json()["data"]["id"]
    return ids


async def _live_game(client: AsyncClient, ids: dict[str, str], **body) -> str:
    payload = {"host_ids": [ids["host"]], "date": "2024-05-01", **body}
    resp = await client.post("/api/games", json=payload)
    assert resp.status_code == 200
    game_id = resp.json()["data"]["id"]

    await client.post(f"/api/games/{game_id}/start")
    resp = await client.put(
        f"/api/games/{game_id}/roster",
        json={"team_ids": [ids["Alpha"], ids["Bravo"], ids["Charlie"]]},
    )
    assert resp.status_code == 200
    return game_id


class TestHealth:
    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/health")
        assert resp.json() == {"status": "ok", "env": "development"}


class TestGameFlow:
    async def test_create_game_defaults(self, client: AsyncClient) -> None:
        ids = await _setup_league(client)
        resp = await client.post(
            "/api/games", json={"host_ids": [ids["host"]], "date": "2024-05-01"}
        )
        data = resp.json()["data"]
        assert data["status"] == "Upcoming"
        assert data["season_id"] == ids["season"]
        assert data["current_points"] == 1
        assert data["is_game_over"] is False

    async def test_create_game_needs_host(self, client: AsyncClient) -> None:
        await _setup_league(client)
        resp = await client.post("/api/games", json={"host_ids": [""], "date": "2024-05-01"})
        assert resp.status_code == 400

    async def test_create_game_needs_season(self, client: AsyncClient) -> None:
        resp = await client.post("/api/games", json={"host_ids": ["h"], "date": "2024-05-01"})
        assert resp.status_code == 409

    async def test_record_and_revise(self, client: AsyncClient) -> None:
        ids = await _setup_league(client)
        game_id = await _live_game(client, ids)

        resp = await client.post(
            f"/api/games/{game_id}/results",
            json={"correct_team_ids": [ids["Alpha"]], "points": 2},
        )
        body = resp.json()
        assert body["set_finished"] is False
        assert body["data"]["current_stage"] == {"set": 0, "category": 0, "question": 1}
        assert body["data"]["current_points"] == 2

        # Step back and revise the first question
        resp = await client.post(f"/api/games/{game_id}/retreat")
        data = resp.json()["data"]
        assert data["current_selection"] == [ids["Alpha"]]
        assert data["current_points"] == 2

        await client.post(
            f"/api/games/{game_id}/results",
            json={"correct_team_ids": [ids["Bravo"]], "points": 3},
        )
        resp = await client.get(f"/api/games/{game_id}/scores")
        teams = resp.json()["data"]["teams"]
        assert teams[0]["team_id"] == ids["Bravo"]
        assert teams[0]["score"] == 3
        assert teams[0]["rank"] == 1
        assert {t["team_name"] for t in teams} == {"Alpha", "Bravo", "Charlie"}
        assert len(resp.json()["data"]["sets"]) == 4

    async def test_set_boundary_flag(self, client: AsyncClient) -> None:
        ids = await _setup_league(client)
        game_id = await _live_game(client, ids)

        flags = []
        for _ in range(24):
            resp = await client.post(f"/api/games/{game_id}/results", json={})
            flags.append(resp.json()["set_finished"])
        assert flags[-1] is True
        assert not any(flags[:-1])

    async def test_record_on_upcoming_game_conflicts(self, client: AsyncClient) -> None:
        ids = await _setup_league(client)
        resp = await client.post(
            "/api/games", json={"host_ids": [ids["host"]], "date": "2024-05-01"}
        )
        game_id = resp.json()["data"]["id"]
        resp = await client.post(f"/api/games/{game_id}/results", json={})
        assert resp.status_code == 409

    async def test_unknown_game_404(self, client: AsyncClient) -> None:
        resp = await client.get("/api/games/missing")
        assert resp.status_code == 404

    async def test_adjustment_scoped_to_current_set(self, client: AsyncClient) -> None:
        ids = await _setup_league(client)
        game_id = await _live_game(client, ids)

        resp = await client.post(
            f"/api/games/{game_id}/adjustments",
            json={"team_id": ids["Charlie"], "points": -2, "reason": "phone"},
        )
        adj = resp.json()["data"]["manual_adjustments"][0]
        assert adj["set_id"] == 0
        assert adj["points"] == -2

        resp = await client.get(f"/api/games/{game_id}/scores")
        charlie = next(t for t in resp.json()["data"]["teams"] if t["team_id"] == ids["Charlie"])
        assert charlie["score"] == -2
        assert charlie["set_scores"][0] == -2

    async def test_bonus_round_toggle(self, client: AsyncClient) -> None:
        ids = await _setup_league(client)
        game_id = await _live_game(client, ids)

        resp = await client.post(f"/api/games/{game_id}/bonus")
        assert resp.json()["data"]["has_bonus_round"] is True
        resp = await client.delete(f"/api/games/{game_id}/bonus")
        assert resp.status_code == 200
        assert resp.json()["data"]["has_bonus_round"] is False

    async def test_category_config(self, client: AsyncClient) -> None:
        ids = await _setup_league(client)
        game_id = await _live_game(client, ids)
        resp = await client.put(
            f"/api/games/{game_id}/categories/0-0", json={"name": "Movies", "type": "Picture"}
        )
        assert resp.json()["data"]["category_configs"]["0-0"] == {
            "name": "Movies",
            "type": "Picture",
        }

    async def test_category_config_locked_after_archive(self, client: AsyncClient) -> None:
        ids = await _setup_league(client)
        game_id = await _live_game(client, ids)
        await client.post(f"/api/games/{game_id}/archive", json={})

        resp = await client.put(f"/api/games/{game_id}/categories/0-0", json={"name": "Changed"})
        assert resp.status_code == 409
        resp = await client.get(f"/api/games/{game_id}")
        assert resp.json()["data"]["category_configs"] == {}

    async def test_adjustment_after_last_set_conflicts(self, client: AsyncClient) -> None:
        ids = await _setup_league(client)
        game_id = await _live_game(client, ids)
        for _ in range(96):
            await client.post(f"/api/games/{game_id}/results", json={})

        resp = await client.get(f"/api/games/{game_id}")
        assert resp.json()["data"]["is_game_over"] is True

        resp = await client.post(
            f"/api/games/{game_id}/adjustments",
            json={"team_id": ids["Alpha"], "points": 5},
        )
        assert resp.status_code == 409

        resp = await client.get(f"/api/games/{game_id}/scores")
        for row in resp.json()["data"]["teams"]:
            assert row["score"] == sum(row["set_scores"]) == 0


class TestArchiveAndStandings:
    async def test_full_night(self, client: AsyncClient) -> None:
        """A beats B beats C; archive; check report, standings, history, host stats."""
        ids = await _setup_league(client)
        game_id = await _live_game(client, ids)
        alpha, bravo, charlie = ids["Alpha"], ids["Bravo"], ids["Charlie"]

        await client.post(
            f"/api/games/{game_id}/results",
            json={"correct_team_ids": [alpha, bravo], "points": 2},
        )
        await client.post(f"/api/games/{game_id}/results", json={"correct_team_ids": [alpha]})

        resp = await client.get(f"/api/games/{game_id}/report")
        report = resp.json()["data"]
        assert report["categories"][0]["pct_correct"] == 50
        accuracy = {row["team_id"]: row["pct_correct"] for row in report["accuracy"]}
        assert accuracy == {alpha: 100, bravo: 50, charlie: 0}

        resp = await client.post(
            f"/api/games/{game_id}/archive",
            json={"feedback": [{"team_id": alpha, "rating": 8, "remarks": "loved it"}]},
        )
        assert resp.json()["data"]["status"] == "Archived"
        ratings = {f["team_id"]: f["rating"] for f in resp.json()["data"]["feedback"]}
        assert ratings == {alpha: 8, bravo: 10, charlie: 10}

        resp = await client.post(f"/api/games/{game_id}/archive", json={})
        assert resp.status_code == 409

        resp = await client.get("/api/standings")
        table = {row["team_id"]: row for row in resp.json()["data"]}
        assert table[alpha]["points"] == 11
        assert table[alpha]["wins"] == 1
        assert table[bravo]["points"] == 6
        assert table[charlie]["points"] == 4
        assert resp.json()["data"][0]["team_id"] == alpha

        resp = await client.get(f"/api/teams/{bravo}/history")
        history = resp.json()["data"]
        assert history == [
            {
                "game_id": game_id,
                "title": "Regular Game",
                "date": "2024-05-01",
                "score": 2,
                "rank": 2,
                "hosts": "Sam",
            }
        ]

        resp = await client.get(f"/api/hosts/{ids['host']}/stats")
        stats = resp.json()["data"]
        assert stats["games_hosted"] == 1
        assert stats["average_rating"] == 9.3
        assert stats["comments"][0]["team_name"] == "Alpha"

    async def test_special_game_excluded_by_default(self, client: AsyncClient) -> None:
        ids = await _setup_league(client)
        game_id = await _live_game(client, ids, type="Special", title="Finals")
        await client.post(f"/api/games/{game_id}/results", json={"correct_team_ids": [ids["Alpha"]]})
        await client.post(f"/api/games/{game_id}/archive", json={})

        resp = await client.get("/api/standings", params={"season_id": ids["season"]})
        assert all(row["points"] == 0 for row in resp.json()["data"])


class TestTeams:
    async def test_archived_teams_hidden_by_default(self, client: AsyncClient) -> None:
        ids = await _setup_league(client)
        await client.post(f"/api/teams/{ids['Charlie']}/archive")

        resp = await client.get("/api/teams")
        assert {t["name"] for t in resp.json()["data"]} == {"Alpha", "Bravo"}
        resp = await client.get("/api/teams", params={"include_archived": True})
        assert len(resp.json()["data"]) == 3

    async def test_history_unknown_team(self, client: AsyncClient) -> None:
        resp = await client.get("/api/teams/nope/history")
        assert resp.status_code == 404


class TestSnapshotFile:
    def test_load_snapshot_file(self, app, tmp_path) -> None:
        path = tmp_path / "league.json"
        path.write_text(
            json.dumps(
                {
                    "games": [
                        {"id": "g", "seasonId": "s", "hostId": "h", "date": "2024-01-01"}
                    ]
                }
            )
        )
        assert load_snapshot_file(app.state.store, str(path)) is True
        assert app.state.store.get_game("g").host_ids == ["h"]

    def test_missing_snapshot_file(self, app, tmp_path) -> None:
        assert load_snapshot_file(app.state.store, str(tmp_path / "nope.json")) is False
