"""CLI helpers for resolving dates in the business timezone."""

from datetime import date

from yardroute.domain.schedule import local_today
from yardroute.utils.date_parser import parse_date, parse_month


def business_today(ctx) -> date:
    """Return today's date in the timezone selected on the command line."""
    return local_today(ctx.obj["timezone"])


def resolve_cli_date(ctx, value: str) -> date:
    """Parse a CLI date, resolving "today"/"tomorrow" in the business timezone.

    Raises:
        ValueError: If the date cannot be parsed
    """
    return parse_date(value, today=business_today(ctx))


def resolve_cli_month(ctx, value: str) -> tuple[int, int]:
    """Parse a CLI billing month, resolving "last month" in the business timezone.

    Raises:
        ValueError: If the month cannot be parsed
    """
    return parse_month(value, today=business_today(ctx))
