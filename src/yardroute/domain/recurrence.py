"""Recurrence rule validation and rule management service."""

import logging
import re
from datetime import date, datetime
from typing import Iterable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from yardroute.database.base import Database
from yardroute.domain.entities import RecurrenceRule as RecurrenceRuleEntity
from yardroute.domain.errors import (
    NotFoundError,
    ValidationError,
    customer_not_found,
    rule_not_found,
    service_type_not_found,
)

logger = logging.getLogger(__name__)

WEEKLY = "weekly"
BIWEEKLY = "biweekly"
ONE_TIME = "one-time"
NEW_START = "new-start"

FREQUENCIES = (WEEKLY, BIWEEKLY, ONE_TIME, NEW_START)
RECURRING_FREQUENCIES = (WEEKLY, BIWEEKLY)

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def parse_start_date(value) -> date:
    """Parse a rule start date given as a date or a YYYY-MM-DD string.

    Raises:
        ValidationError: If the value is not a calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as e:
            raise ValidationError(f"Invalid start date '{value}': {e}") from e
    raise ValidationError(f"Invalid start date '{value}': expected YYYY-MM-DD")


def get_zone(timezone: str) -> ZoneInfo:
    """Resolve an IANA timezone name.

    Raises:
        ValidationError: If the name is not a recognized zone
    """
    if not timezone or not isinstance(timezone, str):
        raise ValidationError("Timezone is required")
    try:
        return ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"Unknown timezone '{timezone}'") from e


def parse_days(days_of_week: Iterable) -> frozenset[int]:
    """Normalize a collection of day numbers (Sunday=0)."""
    days = set()
    for day in days_of_week:
        try:
            number = int(day)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid day of week '{day}'") from e
        if number < 0 or number > 6:
            raise ValidationError(f"Day of week {number} out of range (0=Sunday .. 6=Saturday)")
        days.add(number)
    return frozenset(days)


def validate_rule(
    frequency: str,
    days_of_week: Iterable,
    start_date,
    timezone: str,
    window_start: str = "08:00",
    window_end: str = "17:00",
) -> tuple[frozenset[int], date]:
    """Validate rule fields.

    Returns:
        Tuple of (normalized day set, parsed start date)

    Raises:
        ValidationError: If any field is invalid
    """
    if frequency not in FREQUENCIES:
        raise ValidationError(
            f"Unknown frequency '{frequency}'. Supported: {', '.join(FREQUENCIES)}"
        )

    days = parse_days(days_of_week or ())
    if frequency in RECURRING_FREQUENCIES and not days:
        raise ValidationError(f"A {frequency} rule needs at least one day of week")

    parsed_start = parse_start_date(start_date)
    get_zone(timezone)

    for label, value in (("window start", window_start), ("window end", window_end)):
        if not isinstance(value, str) or not _TIME_RE.match(value):
            raise ValidationError(f"Invalid {label} '{value}': expected HH:MM")
    if window_end < window_start:
        raise ValidationError(f"Window end {window_end} is before window start {window_start}")

    return days, parsed_start


def describe_days(days_of_week: Iterable[int]) -> str:
    """Return a readable day list such as 'Mon/Wed/Fri'."""
    return "/".join(DAY_NAMES[day] for day in sorted(days_of_week))


class RecurrenceRuleService:
    """Service for managing recurrence rules."""

    def __init__(self, db: Database):
        """Initialize recurrence rule service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_rule(
        self,
        customer_id: int,
        frequency: str,
        days_of_week: Iterable,
        start_date,
        timezone: str,
        window_start: str = "08:00",
        window_end: str = "17:00",
        service_type_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a recurrence rule.

        Args:
            customer_id: Customer the rule belongs to
            frequency: weekly, biweekly, one-time or new-start
            days_of_week: Day numbers, Sunday=0
            start_date: Anchor date (date or YYYY-MM-DD)
            timezone: IANA zone in which the rule's days are evaluated
            window_start: Advisory arrival window start (HH:MM)
            window_end: Advisory arrival window end (HH:MM)
            service_type_id: Optional price book entry
            notes: Optional free text

        Returns:
            Rule ID

        Raises:
            ValidationError: If rule fields are invalid
            NotFoundError: If customer or service type doesn't exist
        """
        days, parsed_start = validate_rule(
            frequency, days_of_week, start_date, timezone, window_start, window_end
        )

        if self.db.get_customer(customer_id) is None:
            raise NotFoundError(customer_not_found(customer_id))

        if service_type_id is not None and self.db.get_service_type(service_type_id) is None:
            raise NotFoundError(service_type_not_found(service_type_id))

        rule_id = self.db.create_recurrence_rule(
            customer_id=customer_id,
            frequency=frequency,
            days_of_week=days,
            start_date=parsed_start,
            window_start=window_start,
            window_end=window_end,
            timezone=timezone,
            service_type_id=service_type_id,
            notes=notes,
        )
        logger.info(
            "Created %s rule %s for customer %s (%s from %s)",
            frequency, rule_id, customer_id, describe_days(days) or "no days", parsed_start,
        )
        return rule_id

    def get_rule(self, rule_id: int) -> Optional[RecurrenceRuleEntity]:
        """Get rule by ID."""
        return self.db.get_recurrence_rule(rule_id)

    def list_rules(self, customer_id: Optional[int] = None) -> list[RecurrenceRuleEntity]:
        """List rules, optionally for one customer."""
        return self.db.list_recurrence_rules(customer_id=customer_id)

    def pause_rule(self, rule_id: int) -> None:
        """Pause a rule so it stops producing visits.

        Raises:
            NotFoundError: If rule doesn't exist
        """
        self._set_paused(rule_id, True)

    def resume_rule(self, rule_id: int) -> None:
        """Resume a paused rule.

        Raises:
            NotFoundError: If rule doesn't exist
        """
        self._set_paused(rule_id, False)

    def _set_paused(self, rule_id: int, paused: bool) -> None:
        if self.db.get_recurrence_rule(rule_id) is None:
            raise NotFoundError(rule_not_found(rule_id))
        self.db.set_rule_paused(rule_id, paused)
        logger.info("Rule %s %s", rule_id, "paused" if paused else "resumed")
