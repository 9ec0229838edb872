"""End-to-end tests for the click command-line interface."""

from __future__ import annotations

import logging

import pytest
from click.testing import CliRunner
from sqlalchemy.exc import OperationalError

from habita.cli import main
from habita.infra.repositories import SQLModelHabitRepository
from habita.logging_config import ROOT_LOGGER_NAME


@pytest.fixture
def cli(tmp_path, monkeypatch):
    """Invoke the CLI against a fresh database in ``tmp_path``."""
    monkeypatch.setenv("HABITA_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("HABITA_DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setenv("HABITA_DEV_MODE", "0")
    runner = CliRunner()

    def _invoke(*args: str):
        return runner.invoke(main, list(args))

    yield _invoke

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_init_reports_missing_profile(cli):
    result = cli("init")

    assert result.exit_code == 0
    assert "Database ready" in result.output
    assert "No profile yet." in result.output


def test_profile_create_and_show(cli):
    assert cli("profile").exit_code == 1

    created = cli("profile", "--name", "Jane", "--surname", "Doe", "--age", "30")
    assert created.exit_code == 0
    assert "Profile saved for Jane Doe." in created.output

    shown = cli("profile")
    assert shown.exit_code == 0
    assert "Jane Doe, 30" in shown.output
    assert "Profile found." in cli("init").output


def test_profile_validation_error(cli):
    result = cli("profile", "--name", "Jane", "--surname", "Doe", "--age", "old")

    assert result.exit_code == 1
    assert "Please enter a valid age" in result.output


def test_add_and_list(cli):
    added = cli("add", "Run", "--days", "1,3,5")
    assert added.exit_code == 0
    assert "Added habit 1:" in added.output
    assert "(Mon, Wed, Fri)" in added.output

    monday = cli("list", "--date", "2024-01-08")
    assert "[1]" in monday.output
    assert "Run (Quantitative)" in monday.output

    tuesday = cli("list", "--date", "2024-01-09")
    assert "No habits for this day." in tuesday.output

    assert "Run" in cli("list", "--all", "--date", "2024-01-09").output


def test_add_rejects_invalid_form(cli):
    result = cli("add", "Water", "--type", "qualitative")

    assert result.exit_code == 1
    assert "Please enter a valid target value (greater than 0)" in result.output


def test_mark_and_stats(cli):
    cli("add", "Run", "--days", "1,3,5")
    cli("--today", "2024-01-10", "mark", "1", "--date", "2024-01-08", "--done")
    marked = cli("--today", "2024-01-10", "mark", "1", "--date", "2024-01-10", "--done")

    assert marked.exit_code == 0
    assert "Current streak: 2" in marked.output

    result = cli("--today", "2024-01-10", "stats", "1")
    assert result.exit_code == 0
    assert "Current streak: 2" in result.output
    assert "Best streak: 2" in result.output
    assert "Completion: 100%" in result.output
    assert "Week Jan 8 - Jan 14:" in result.output

    monthly = cli("--today", "2024-01-10", "stats", "1", "--range", "month")
    assert "Week 4" in monthly.output


def test_mark_unscheduled_day(cli):
    cli("add", "Run", "--days", "1")

    result = cli("mark", "1", "--date", "2024-01-09", "--done")

    assert result.exit_code == 1
    assert "This habit isn't scheduled for this day" in result.output


def test_mark_qualitative_and_wrong_value(cli):
    cli("add", "Water", "--type", "qualitative", "--target", "3")

    assert cli("mark", "1", "--date", "2024-01-08", "--quantity", "4").exit_code == 0

    wrong = cli("mark", "1", "--date", "2024-01-08", "--done")
    assert wrong.exit_code == 1
    assert "Enter a count for this habit" in wrong.output

    stats = cli("--today", "2024-01-08", "stats", "1")
    assert "Total count: 4" in stats.output


def test_clear_day(cli):
    cli("add", "Run")
    cli("mark", "1", "--date", "2024-01-08", "--done")

    assert "Record removed." in cli("clear", "1", "--date", "2024-01-08").output
    assert "Nothing recorded for that day." in cli("clear", "1", "--date", "2024-01-08").output


def test_edit_habit(cli):
    cli("add", "Run")

    result = cli("edit", "1", "--name", "Sprint", "--days", "6,7")

    assert result.exit_code == 0
    assert "Saved habit 1:" in result.output
    assert "Sprint (Sat, Sun)" in result.output

    assert "💪 Sprint" in cli("edit", "1", "--emoji", "💪").output
    assert cli("edit", "1", "--emoji", "x").exit_code == 2


def test_summary(cli):
    assert "No stats to display" in cli("summary").output

    cli("add", "Run")
    cli("mark", "1", "--date", "2024-01-08", "--done")
    cli("mark", "1", "--date", "2024-01-09", "--not-done")

    result = cli("--today", "2024-01-09", "summary")
    assert "Total habits: 1" in result.output
    assert "Avg completion: 50%" in result.output
    assert "Active days: 2" in result.output


def test_chart_writes_png(cli, tmp_path):
    cli("add", "Run")
    cli("mark", "1", "--date", "2024-01-08", "--done")
    output = tmp_path / "week.png"

    result = cli("--today", "2024-01-10", "chart", "1", "--output", str(output))

    assert result.exit_code == 0
    assert output.exists()


def test_delete_habit(cli):
    cli("add", "Run")

    result = cli("delete", "1", "--yes")
    assert result.exit_code == 0
    assert "Deleted habit 1." in result.output

    missing = cli("stats", "1")
    assert missing.exit_code == 1
    assert "Habit 1 not found" in missing.output


def test_store_failure_is_reported_as_message(cli, monkeypatch):
    cli("add", "Run")

    def _broken_load(session, habit_id):
        raise OperationalError("SELECT habit", {}, Exception("disk I/O error"))

    monkeypatch.setattr(SQLModelHabitRepository, "_load", staticmethod(_broken_load))

    result = cli("mark", "1", "--date", "2024-01-08", "--done")

    assert result.exit_code == 1
    assert "Error: Failed to load habit" in result.output
