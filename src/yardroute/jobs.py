"""Periodic job drivers.

An external scheduler calls these: `run_daily_jobs` once a day (evening, so
reminders go out the night before) and `run_monthly_billing_job` on the 1st.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from yardroute.config import BUSINESS_TIMEZONE, DEFAULT_HORIZON_DAYS
from yardroute.database.base import Database
from yardroute.domain.billing import BillingService
from yardroute.domain.entities import BillingResult, GenerationResult, ReminderResult
from yardroute.domain.reminders import ReminderService
from yardroute.domain.route_generator import RouteGeneratorService
from yardroute.domain.schedule import local_today
from yardroute.integrations.base import Notifier, PaymentGateway

logger = logging.getLogger(__name__)


def run_daily_jobs(
    db: Database,
    notifier: Notifier,
    now: Optional[datetime] = None,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    timezone: str = BUSINESS_TIMEZONE,
) -> tuple[GenerationResult, ReminderResult]:
    """Generate upcoming visits, then remind customers serviced tomorrow.

    "Tomorrow" is the day after the current date in the business timezone.
    Visits are generated first so that tomorrow's reminders see them.
    """
    today = local_today(timezone, now)
    logger.info("Running daily jobs for %s (%s)", today, timezone)

    generation = RouteGeneratorService(db).generate_upcoming(today=today, horizon_days=horizon_days)
    logger.info("Route generation: %s", generation)

    reminders = ReminderService(db, notifier).send_reminders_for(today + timedelta(days=1))
    logger.info("Reminders: %s", reminders)

    return generation, reminders


def run_monthly_billing_job(
    db: Database,
    payment_gateway: PaymentGateway,
    now: Optional[datetime] = None,
    timezone: str = BUSINESS_TIMEZONE,
) -> BillingResult:
    """Bill the previous calendar month in the business timezone."""
    previous = local_today(timezone, now) - relativedelta(months=1)
    logger.info("Running monthly billing for %d/%d", previous.month, previous.year)

    result = BillingService(db, payment_gateway).run_monthly_billing(previous.month, previous.year)
    logger.info("Monthly billing: %s", result)
    return result
