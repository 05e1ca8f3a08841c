"""Tests for CLI date resolution in the business timezone."""

import re
from datetime import timedelta
from types import SimpleNamespace

from dateutil.relativedelta import relativedelta

from yardroute.cli.date_filters import business_today, resolve_cli_date, resolve_cli_month
from yardroute.cli.main import cli
from yardroute.domain.schedule import local_today

# UTC+14 and UTC-11: their calendar dates always differ
EAST = "Pacific/Kiritimati"
WEST = "Pacific/Pago_Pago"


def make_ctx(timezone):
    return SimpleNamespace(obj={"timezone": timezone})


def test_business_today_uses_selected_zone():
    assert business_today(make_ctx(EAST)) == local_today(EAST)
    assert business_today(make_ctx(EAST)) != business_today(make_ctx(WEST))


def test_resolve_relative_date():
    expected = local_today(EAST) + timedelta(days=1)
    assert resolve_cli_date(make_ctx(EAST), "tomorrow") == expected


def test_resolve_absolute_date_ignores_zone():
    assert resolve_cli_date(make_ctx(EAST), "2024-01-03") == resolve_cli_date(make_ctx(WEST), "2024-01-03")


def test_resolve_last_month():
    previous = local_today(WEST) - relativedelta(months=1)
    assert resolve_cli_month(make_ctx(WEST), "last month") == (previous.month, previous.year)


def test_remind_defaults_to_tomorrow_in_business_zone(cli_runner, temp_db):
    """The reminder date comes from the business zone, not the host clock."""
    outputs = {}
    for zone in (EAST, WEST):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "--timezone", zone, "remind"])
        assert result.exit_code == 0, result.output
        outputs[zone] = re.search(r"Reminders for (\S+) complete:", result.output).group(1)

    assert outputs[EAST] == str(local_today(EAST) + timedelta(days=1))
    assert outputs[WEST] == str(local_today(WEST) + timedelta(days=1))
    assert outputs[EAST] != outputs[WEST]


def test_remind_sends_for_business_tomorrow(cli_runner, temp_db, sample_customer):
    temp_db.create_visit(sample_customer.id, local_today(EAST) + timedelta(days=1))

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--timezone", EAST, "remind"], env={"YARDROUTE_TIMEZONE": WEST}
    )

    assert result.exit_code == 0, result.output
    # No provider is configured, so the attempt is logged as failed
    assert "Failed: 1" in result.output


def test_timezone_from_environment(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "bill"], env={"YARDROUTE_TIMEZONE": EAST}
    )

    previous = local_today(EAST) - relativedelta(months=1)
    assert result.exit_code == 0, result.output
    assert f"Billing for {previous.month}/{previous.year} complete:" in result.output


def test_visit_add_relative_date(cli_runner, temp_db, sample_customer):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--timezone", EAST, "visit", "add", str(sample_customer.id), "today"]
    )

    assert result.exit_code == 0, result.output
    assert temp_db.visit_exists(sample_customer.id, local_today(EAST))


def test_rule_start_uses_rule_zone(cli_runner, temp_db, sample_customer):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "--timezone", WEST,
            "rule", "add", str(sample_customer.id), "--days", "1", "--timezone", EAST,
        ],
    )

    assert result.exit_code == 0, result.output
    (rule,) = temp_db.list_recurrence_rules()
    assert rule.timezone == EAST
    assert rule.start_date == local_today(EAST)


def test_rule_zone_defaults_to_business_zone(cli_runner, temp_db, sample_customer):
    cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--timezone", WEST, "rule", "add", str(sample_customer.id), "--days", "1"]
    )

    (rule,) = temp_db.list_recurrence_rules()
    assert rule.timezone == WEST
    assert rule.start_date == local_today(WEST)


def test_unknown_timezone_rejected(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "--timezone", "Mars/Olympus", "remind"])

    assert result.exit_code == 2
    assert "Unknown timezone" in result.output
