"""Schedule expansion: deciding which calendar dates a rule covers.

Everything here is pure. Day boundaries are evaluated in the rule's own
timezone: an aware datetime is converted into that zone before its calendar
date is taken, so a customer's weekday never shifts with the server clock.
"""

from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from yardroute.domain.entities import RecurrenceRule
from yardroute.domain.errors import ValidationError
from yardroute.domain.recurrence import BIWEEKLY, WEEKLY, get_zone


def local_today(timezone: str, now: Optional[datetime] = None) -> date:
    """Return the current calendar date in the given zone.

    Args:
        timezone: IANA zone name
        now: Optional aware datetime to use instead of the current time
    """
    zone = get_zone(timezone)
    if now is None:
        return datetime.now(zone).date()
    if now.tzinfo is None:
        raise ValidationError("now must be timezone-aware")
    return now.astimezone(zone).date()


def to_local_date(rule: RecurrenceRule, candidate) -> date:
    """Return the calendar date of candidate in the rule's timezone."""
    if isinstance(candidate, datetime):
        if candidate.tzinfo is None:
            raise ValidationError("Datetime candidates must be timezone-aware")
        return candidate.astimezone(get_zone(rule.timezone)).date()
    return candidate


def day_of_week(day: date) -> int:
    """Return the weekday number with Sunday=0 .. Saturday=6."""
    return (day.weekday() + 1) % 7


def is_due(rule: RecurrenceRule, candidate) -> bool:
    """Decide whether the rule calls for a visit on the candidate date.

    Biweekly rules alternate "on" and "off" weeks counted from start_date and
    honor every listed weekday within an "on" week. One-time and new-start
    rules are never expanded; those visits are scheduled directly.
    """
    if rule.paused:
        return False

    local = to_local_date(rule, candidate)
    if local < rule.start_date:
        return False

    if day_of_week(local) not in rule.days_of_week:
        return False

    if rule.frequency == WEEKLY:
        return True

    if rule.frequency == BIWEEKLY:
        elapsed_days = (local - rule.start_date).days
        return (elapsed_days // 7) % 2 == 0

    return False


def enumerate_due_dates(rule: RecurrenceRule, from_date: date, horizon_days: int) -> Iterator[date]:
    """Return a lazy iterator over due dates in [from_date, from_date + horizon_days).

    Each call starts a fresh pass; nothing is carried between calls.

    Raises:
        ValidationError: If horizon_days is negative
    """
    if horizon_days < 0:
        raise ValidationError(f"Horizon must not be negative, got {horizon_days}")
    candidates = (from_date + timedelta(days=offset) for offset in range(horizon_days))
    return (candidate for candidate in candidates if is_due(rule, candidate))
