"""Runtime settings and business constants.

Settings come from environment variables so that the scheduled jobs can be
configured by whatever runs them (cron, systemd timers, a container).
"""

import os
from decimal import Decimal
from pathlib import Path

BUSINESS_TIMEZONE = os.environ.get("YARDROUTE_TIMEZONE", "America/Chicago")

DEFAULT_HORIZON_DAYS = int(os.environ.get("YARDROUTE_HORIZON_DAYS", "7"))

# Seconds to wait on the payment provider before treating a charge as failed
CHARGE_TIMEOUT_SECONDS = float(os.environ.get("YARDROUTE_CHARGE_TIMEOUT", "30"))

REMINDER_TEMPLATE = os.environ.get(
    "YARDROUTE_REMINDER_TEMPLATE",
    "Hi {name}! This is a reminder that we will be servicing your yard at "
    "{address} on {date}. Thank you for choosing us!",
)

REVIEW_URL = os.environ.get("YARDROUTE_REVIEW_URL", "")

HOURLY_RATE = Decimal("100.00")
TIMED_VISIT_THRESHOLD_MINUTES = 15

INVOICE_COUNTER_START = 1000
INVOICE_DUE_DAY = 15


def default_database_path() -> str:
    """Return the database path from YARDROUTE_DB_PATH or ~/.yardroute/yardroute.db."""
    database_path = os.environ.get("YARDROUTE_DB_PATH")
    if database_path is None:
        db_dir = Path.home() / ".yardroute"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "yardroute.db")
    return database_path
