"""Tests for CLI commands."""

from __future__ import annotations

import json
from datetime import date, datetime, timezone

import pytest
from typer.testing import CliRunner

from fitplan import cli, clock
from fitplan.cli import app, parse_day
from fitplan.config import Settings
from fitplan.db import connection

runner = CliRunner()

DAY = "2026-10-18"


@pytest.fixture(autouse=True)
def cli_db(temp_db):
    """Point the CLI at the temporary database."""
    previous = connection._db
    connection.set_db(temp_db)
    yield temp_db
    connection.set_db(previous)


def invoke_json(*args: str) -> dict:
    result = runner.invoke(app, [*args, "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestMainCommands:
    """Tests for main CLI commands."""

    def test_help(self):
        """Test that --help works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "fitplan" in result.output.lower()

    @pytest.mark.parametrize("group", ["profile", "workout", "meals", "nutrition", "mental"])
    def test_group_help(self, group):
        result = runner.invoke(app, [group, "--help"])
        assert result.exit_code == 0

    def test_init(self, cli_db):
        response = invoke_json("init")
        assert response["success"] is True
        assert response["data"]["db_path"] == str(cli_db.db_path)
        assert response["data"]["collections"] == {}

    def test_init_counts_documents(self):
        invoke_json("profile", "set", "--goal", "general")
        counts = invoke_json("init")["data"]["collections"]
        assert counts["profiles"] == 1
        assert counts["nutritionGoals"] == 1

    def test_targets_for_default_profile(self):
        response = invoke_json("targets")
        assert response["data"]["calories"] == 2200


class TestProfileCommands:
    """Tests for profile subcommands."""

    def test_show_without_profile_fails(self):
        result = runner.invoke(app, ["profile", "show"])
        assert result.exit_code == 1

    def test_set_and_show(self):
        response = invoke_json("profile", "set", "--goal", "weightLoss", "--workouts", "4")
        assert response["data"]["profile"]["primary_goal"] == "weightLoss"
        assert response["data"]["nutrition_goals"]["daily_calories"] == 1800

        response = invoke_json("profile", "show")
        assert response["data"]["weekly_workouts"] == 4

    def test_bad_goal(self):
        result = runner.invoke(app, ["profile", "set", "--goal", "bulk"])
        assert result.exit_code == 1

    def test_users_are_separate(self):
        invoke_json("--user", "alice", "profile", "set", "--goal", "strength")
        result = runner.invoke(app, ["--user", "bob", "profile", "show"])
        assert result.exit_code == 1


class TestWorkoutCommands:
    def test_today_and_done(self):
        invoke_json("profile", "set", "--goal", "weightLoss", "--level", "beginner")

        response = invoke_json("workout", "today", "--date", DAY)
        names = [e["name"] for e in response["data"]["exercises"]]
        assert names == ["Jumping Jacks", "Squats"]

        response = invoke_json("workout", "done", "0", "--date", DAY)
        assert response["data"]["completed"] is False
        response = invoke_json("workout", "done", "1", "--date", DAY)
        assert response["data"]["completed"] is True

    def test_done_bad_index(self):
        invoke_json("workout", "today", "--date", DAY)
        result = runner.invoke(app, ["workout", "done", "9", "--date", DAY, "--json"])
        assert result.exit_code == 1
        assert json.loads(result.output)["success"] is False

    def test_bad_date(self):
        result = runner.invoke(app, ["workout", "today", "--date", "18/10/2026"])
        assert result.exit_code != 0

    def test_log_accumulates(self):
        response = invoke_json("workout", "log", "squats", "20", "--sets", "3", "--reps", "12")
        assert len(response["data"]["sets"]) == 3
        assert response["data"]["progress"]["total_sessions"] == 1

        response = invoke_json("workout", "log", "squats", "15", "--weight", "40", "--sets", "1")
        progress = response["data"]["progress"]
        assert progress["total_sessions"] == 2
        assert progress["total_duration"] == 35
        assert progress["personal_bests"]["max_weight"] == 40

    def test_log_bad_rating(self):
        result = runner.invoke(app, ["workout", "log", "squats", "20", "--rating", "9"])
        assert result.exit_code == 1


class TestMealCommands:
    def test_today_needs_goals(self):
        result = runner.invoke(app, ["meals", "today", "--date", DAY])
        assert result.exit_code == 1

    def test_today_and_done(self):
        invoke_json("profile", "set", "--goal", "general")
        invoke_json("nutrition", "goals", "--restrict", "vegan")

        response = invoke_json("meals", "today", "--date", DAY)
        assert len(response["data"]["snacks"]) == 1

        response = invoke_json("meals", "done", "--date", DAY)
        assert response["data"]["completed"] is True


class TestNutritionCommands:
    def test_goals_update(self):
        response = invoke_json("nutrition", "goals", "--calories", "2200", "-x", "peanut")
        assert response["data"]["daily_calories"] == 2200
        assert response["data"]["excluded_ingredients"] == ["peanut"]

    def test_bad_restriction(self):
        result = runner.invoke(app, ["nutrition", "goals", "--restrict", "carnivore"])
        assert result.exit_code == 1

    def test_log_recipe_and_water(self):
        response = invoke_json(
            "nutrition", "log", "breakfast", "--recipe", "avocado-toast", "--date", DAY
        )
        assert response["data"]["total_nutrition"]["calories"] == 350

        response = invoke_json("nutrition", "water", "500", "--date", DAY)
        assert response["data"]["water_intake_ml"] == 500

        response = invoke_json("nutrition", "summary", "--date", DAY)
        assert response["data"]["calories"] == 350
        assert response["data"]["days"] == 1

    def test_log_custom_meal(self):
        response = invoke_json(
            "nutrition", "log", "snack", "--name", "Apple", "--calories", "95",
            "--servings", "2", "--date", DAY,
        )
        assert response["data"]["total_nutrition"]["calories"] == 190

    def test_log_unknown_recipe(self):
        result = runner.invoke(app, ["nutrition", "log", "lunch", "--recipe", "nope"])
        assert result.exit_code == 1

    def test_log_unknown_meal_type(self):
        result = runner.invoke(app, ["nutrition", "log", "brunch", "--calories", "300"])
        assert result.exit_code == 1

    def test_empty_summary(self):
        response = invoke_json("nutrition", "summary")
        assert response["data"] == {}


class TestMentalCommands:
    def test_journal_and_stats(self):
        response = invoke_json("mental", "journal", "Good day", "--mood", "4", "-t", "happy")
        assert response["data"]["mood"] == 4
        assert response["data"]["mood_tags"] == ["happy"]

        response = invoke_json("mental", "stats")
        assert response["data"]["average_mood"] == 4.0
        assert response["data"]["journal_streak"] == 1
        assert response["data"]["common_mood_tags"] == ["happy"]

    def test_journal_bad_mood(self):
        result = runner.invoke(app, ["mental", "journal", "Hmm", "--mood", "9"])
        assert result.exit_code == 1

    def test_breathe(self):
        response = invoke_json("mental", "breathe", "64")
        assert response["data"]["completed_repetitions"] == 4

        response = invoke_json("mental", "stats")
        assert response["data"]["breathing_minutes"] == 1

    def test_breathe_unknown_pattern(self):
        result = runner.invoke(app, ["mental", "breathe", "60", "--pattern", "fast"])
        assert result.exit_code == 1

    def test_mood_check_in_and_history(self):
        response = invoke_json("mental", "mood", "bad", "--note", "Slept badly")
        assert response["data"]["mood"] == "bad"

        response = invoke_json("mental", "mood", "good", "--breathing-done")
        assert response["data"]["mood"] == "good"
        assert response["data"]["journal_entry"] == "Slept badly"
        assert response["data"]["completed_breathing"] is True

        response = invoke_json("mental", "history")
        assert [e["mood"] for e in response["data"]] == ["good"]

    def test_mood_unknown_label(self):
        result = runner.invoke(app, ["mental", "mood", "meh"])
        assert result.exit_code == 1

    def test_search(self):
        invoke_json("mental", "journal", "Long run by the river", "--mood", "4", "-t", "energetic")
        invoke_json("mental", "journal", "Stuck at my desk", "--mood", "2", "-t", "stressed")

        response = invoke_json("mental", "search", "--term", "RIVER")
        assert [e["content"] for e in response["data"]] == ["Long run by the river"]

        response = invoke_json("mental", "search", "--mood", "2")
        assert [e["content"] for e in response["data"]] == ["Stuck at my desk"]

        response = invoke_json("mental", "search", "-t", "stressed", "-t", "energetic")
        assert len(response["data"]) == 2


class TestOutputFormat:
    def test_configured_json_without_flag(self, monkeypatch):
        settings = Settings()
        settings.defaults.output_format = "json"
        monkeypatch.setattr(cli, "get_settings", lambda: settings)

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["success"] is True

    def test_table_by_default(self):
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert "Database ready at" in result.output


class TestDefaultDay:
    """Commands without --date use the same UTC day that stamps records."""

    @pytest.fixture
    def late_evening_utc(self, monkeypatch):
        moment = datetime(2026, 10, 18, 23, 30, tzinfo=timezone.utc)
        monkeypatch.setattr(clock, "utc_now", lambda: moment)
        return moment

    def test_parse_day_defaults_to_utc_day(self, late_evening_utc):
        assert parse_day(None) == date(2026, 10, 18)

    def test_workout_and_journal_agree_on_day(self, late_evening_utc):
        plan = invoke_json("workout", "today")["data"]
        entry = invoke_json("mental", "journal", "Late session")["data"]

        assert plan["date"] == "2026-10-18"
        assert entry["date"].startswith("2026-10-18")

    def test_mood_check_in_uses_same_day(self, late_evening_utc):
        entry = invoke_json("mental", "mood", "okay")["data"]
        assert entry["entry_id"] == "local_2026-10-18"
