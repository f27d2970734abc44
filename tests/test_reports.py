"""Tests for report views: name lookups, accuracy, categories, history, hosts."""

import datetime as dt

from tests.factories import make_game, result
from trivianight.core.reports import (
    category_performance,
    host_names,
    host_stats,
    memorable_category_options,
    team_accuracy,
    team_history,
    team_name,
)
from trivianight.models.game import CategoryConfig, GameFeedback
from trivianight.models.team import Host, Team


class TestNameLookups:
    def test_team_name(self, roster: list[Team]) -> None:
        assert team_name(roster, "A") == "Quizzly Bears"
        assert team_name(roster, "nope") == "Unknown"

    def test_host_names(self) -> None:
        hosts = [Host(id="h-1", name="Sam"), Host(id="h-2", name="Ari")]
        assert host_names(hosts, ["h-1", "h-2"]) == "Sam, Ari"
        assert host_names(hosts, ["h-1", "gone"]) == "Sam, Unknown"
        assert host_names(hosts, []) == "Unknown"


class TestAccuracy:
    def test_percent_of_questions(self) -> None:
        game = make_game(
            results=[
                result(0, 0, 0, ["A"]),
                result(0, 0, 1, ["A", "B"]),
                result(0, 0, 2, []),
            ]
        )
        assert team_accuracy(game, "A") == 67
        assert team_accuracy(game, "B") == 33
        assert team_accuracy(game, "C") == 0

    def test_empty_ledger_is_zero(self) -> None:
        assert team_accuracy(make_game(), "A") == 0


class TestCategoryPerformance:
    def test_pct_over_questions_times_teams(self) -> None:
        game = make_game(
            results=[
                result(0, 0, 0, ["A", "B", "C"]),
                result(0, 0, 1, ["A"]),
                result(1, 2, 0, []),
            ],
            category_configs={"0-0": CategoryConfig(name="Music", type="Audio")},
        )
        rows = category_performance(game)
        assert [r.key for r in rows] == ["0-0", "1-2"]
        assert rows[0].pct_correct == 67
        assert rows[0].questions == 2
        assert rows[0].config.name == "Music"
        assert rows[1].pct_correct == 0
        assert rows[1].config.type == "Text"

    def test_no_teams_is_zero_not_error(self) -> None:
        game = make_game(teams=(), results=[result(0, 0, 0, ["A"])])
        assert category_performance(game)[0].pct_correct == 0

    def test_bonus_categories_reported_when_enabled(self) -> None:
        game = make_game(has_bonus_round=True, results=[result(4, 0, 0, ["A"])])
        assert [r.key for r in category_performance(game)] == ["4-0"]

    def test_memorable_options(self) -> None:
        game = make_game(category_configs={"1-2": CategoryConfig(name="Flags")})
        options = dict(memorable_category_options(game))
        assert len(options) == 12
        assert options["1-2"] == "S2-C3: Flags"
        assert options["0-0"] == "Set 1 Category 1"
        bonus = make_game(has_bonus_round=True)
        assert len(memorable_category_options(bonus)) == 15


class TestTeamHistory:
    def test_archived_games_newest_first(self) -> None:
        hosts = [Host(id="h-1", name="Sam")]
        older = make_game(
            game_id="old",
            status="Archived",
            date=dt.date(2024, 1, 5),
            results=[result(0, 0, 0, ["B"], points=3)],
        )
        newer = make_game(
            game_id="new",
            status="Archived",
            date=dt.date(2024, 3, 5),
            results=[result(0, 0, 0, ["A"], points=2)],
        )
        live = make_game(game_id="live", status="Live")
        skipped = make_game(game_id="other", status="Archived", teams=("B", "C"))

        history = team_history("A", [older, live, newer, skipped], hosts)
        assert [e.game.id for e in history] == ["new", "old"]
        assert history[0].score == 2
        assert history[0].rank == 1
        assert history[1].score == 0
        assert history[1].rank == 2
        assert history[0].host_names == "Sam"


class TestHostStats:
    def test_ratings_and_comments(self, roster: list[Team]) -> None:
        hosted = make_game(
            status="Archived",
            host_ids=["h-1", "h-2"],
            feedback=[
                GameFeedback(team_id="A", rating=9, remarks="great"),
                GameFeedback(team_id="B", rating=6),
                GameFeedback(team_id="ghost", rating=8, remarks="who?"),
            ],
        )
        not_hosted = make_game(game_id="g-2", status="Archived", host_ids=["h-3"])
        stats = host_stats("h-2", [hosted, not_hosted], roster)

        assert stats.games_hosted == 1
        assert stats.rating_count == 3
        assert stats.average_rating == 7.7
        assert [(c.team_name, c.text) for c in stats.comments] == [
            ("Quizzly Bears", "great"),
            ("Unknown", "who?"),
        ]

    def test_no_ratings(self, roster: list[Team]) -> None:
        stats = host_stats("h-1", [make_game(status="Archived")], roster)
        assert stats.games_hosted == 1
        assert stats.average_rating is None
