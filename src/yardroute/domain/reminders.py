"""Night-before service reminders."""

import logging
from datetime import date

from yardroute.config import REMINDER_TEMPLATE, REVIEW_URL
from yardroute.database.base import Database
from yardroute.domain.entities import Customer, ReminderResult
from yardroute.domain.errors import ConflictError
from yardroute.integrations.base import Notifier

logger = logging.getLogger(__name__)


def render_message(template: str, customer: Customer, service_date: date, review_url: str = "") -> str:
    """Fill the {name}, {address}, {date} and {review_url} placeholders.

    Unknown placeholders are left untouched.
    """
    values = {
        "{name}": customer.name,
        "{address}": customer.address,
        "{date}": service_date.isoformat(),
        "{review_url}": review_url,
    }
    text = template
    for placeholder, value in values.items():
        text = text.replace(placeholder, value)
    return text


class ReminderService:
    """Sends one reminder per customer for visits on a given date."""

    def __init__(
        self,
        db: Database,
        notifier: Notifier,
        template: str = REMINDER_TEMPLATE,
        review_url: str = REVIEW_URL,
    ):
        """Initialize reminder service.

        Args:
            db: Database instance
            notifier: Message provider
            template: Message template with {name}/{address}/{date}/{review_url}
            review_url: Link substituted for {review_url}
        """
        self.db = db
        self.notifier = notifier
        self.template = template
        self.review_url = review_url

    def send_reminders_for(self, service_date: date) -> ReminderResult:
        """Send reminders for every visit on service_date.

        Customers that already have a reminder attempt logged for the date
        are skipped, so re-running for the same date sends nothing twice.
        Every attempt is logged, whether it succeeded or not.

        Returns:
            ReminderResult with sent/skipped/failed counts and error strings
        """
        result = ReminderResult()

        try:
            already_logged = {log.customer_id for log in self.db.get_reminder_logs_on_date(service_date)}
            visits = self.db.get_visits_on_date(service_date)
        except Exception as e:
            logger.exception("Could not load reminders for %s", service_date)
            result.errors.append(f"Reminder job failed: {e}")
            return result

        for visit in visits:
            if visit.customer_id in already_logged:
                result.skipped += 1
                continue

            try:
                customer = self.db.get_customer(visit.customer_id)
                if customer is None or not customer.sms_opt_in:
                    result.skipped += 1
                    continue
                self._send(customer, service_date, result)
            except Exception as e:
                logger.exception("Reminder failed for customer %s", visit.customer_id)
                result.failed += 1
                result.errors.append(f"Reminder for customer {visit.customer_id} failed: {e}")
            already_logged.add(visit.customer_id)

        logger.info(
            "Reminders for %s: %d sent, %d skipped, %d failed",
            service_date, result.sent, result.skipped, result.failed,
        )
        return result

    def _send(self, customer: Customer, service_date: date, result: ReminderResult) -> None:
        text = render_message(self.template, customer, service_date, self.review_url)
        try:
            outcome = self.notifier.send_message(customer.phone, text)
            success, external_ref, reason = outcome.success, outcome.external_ref, outcome.reason
        except Exception as e:
            success, external_ref, reason = False, None, str(e)

        if success:
            result.sent += 1
            logger.info("Reminder sent to %s for %s", customer.name, service_date)
            try:
                self._record_attempt(
                    customer_id=customer.id,
                    service_date=service_date,
                    status="sent",
                    external_reference=external_ref,
                )
            except Exception as e:
                logger.exception("Reminder sent to %s but not logged", customer.name)
                result.errors.append(f"Reminder sent to {customer.name} but not logged: {e}")
            return

        self._record_attempt(
            customer_id=customer.id,
            service_date=service_date,
            status="failed",
            error_message=reason,
        )
        result.failed += 1
        result.errors.append(f"Failed to send reminder to {customer.name}: {reason}")
        logger.warning("Reminder to %s for %s failed: %s", customer.name, service_date, reason)

    def _record_attempt(self, **fields) -> None:
        """Write the attempt log, retrying once after a storage error.

        An existing log for the customer and date already blocks a resend,
        so a conflict counts as recorded.
        """
        try:
            self.db.create_reminder_log(**fields)
        except ConflictError:
            return
        except Exception as e:
            logger.warning("Retrying reminder log for customer %s: %s", fields["customer_id"], e)
            try:
                self.db.create_reminder_log(**fields)
            except ConflictError:
                return
