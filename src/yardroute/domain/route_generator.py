"""Route generation: turning recurrence rules into dated visits."""

import logging
from datetime import date
from typing import Optional

from yardroute.config import DEFAULT_HORIZON_DAYS
from yardroute.database.base import Database
from yardroute.domain.entities import GenerationResult, RecurrenceRule
from yardroute.domain.schedule import enumerate_due_dates, local_today

logger = logging.getLogger(__name__)


class RouteGeneratorService:
    """Expands every active rule over a rolling horizon into scheduled visits."""

    def __init__(self, db: Database):
        """Initialize route generator.

        Args:
            db: Database instance
        """
        self.db = db

    def generate_upcoming(
        self, today: Optional[date] = None, horizon_days: int = DEFAULT_HORIZON_DAYS
    ) -> GenerationResult:
        """Create missing visits for all active rules.

        Safe to re-run on overlapping horizons: a visit is only created when
        none exists for the customer on that date.

        Args:
            today: First candidate date. If None, each rule uses the current
                date in its own timezone.
            horizon_days: Number of consecutive days to cover

        Returns:
            GenerationResult with created/skipped counts and error strings
        """
        result = GenerationResult()

        if horizon_days < 0:
            result.errors.append(f"Route generation skipped: horizon must not be negative ({horizon_days})")
            return result

        try:
            rules = self.db.get_active_recurrence_rules()
        except Exception as e:
            logger.exception("Could not load recurrence rules")
            result.errors.append(f"Route generation failed: {e}")
            return result

        for rule in rules:
            try:
                self._generate_for_rule(rule, today, horizon_days, result)
            except Exception as e:
                logger.exception("Route generation failed for rule %s", rule.id)
                result.errors.append(
                    f"Rule {rule.id} (customer {rule.customer_id}): {e}"
                )

        logger.info(
            "Route generation finished: %d created, %d already scheduled, %d errors",
            result.created, result.skipped, len(result.errors),
        )
        return result

    def _generate_for_rule(
        self,
        rule: RecurrenceRule,
        today: Optional[date],
        horizon_days: int,
        result: GenerationResult,
    ) -> None:
        """Create visits for one rule, counting into result as it goes."""
        if rule.paused:
            return

        if today is None:
            today = local_today(rule.timezone)
        start = max(today, rule.start_date)

        for visit_date in enumerate_due_dates(rule, start, horizon_days):
            if self.db.visit_exists(rule.customer_id, visit_date):
                result.skipped += 1
                continue

            self.db.create_visit(
                customer_id=rule.customer_id,
                visit_date=visit_date,
                scheduled_time=rule.window_start,
                status="scheduled",
                order_index=0,
                billable=True,
                rule_id=rule.id,
                service_kind="regular",
            )
            result.created += 1
            logger.info("Scheduled visit for customer %s on %s (rule %s)", rule.customer_id, visit_date, rule.id)
