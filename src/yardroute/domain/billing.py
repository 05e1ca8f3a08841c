"""Monthly billing: completed visits to invoices, with optional autopay."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from yardroute.config import (
    CHARGE_TIMEOUT_SECONDS,
    INVOICE_COUNTER_START,
    INVOICE_DUE_DAY,
)
from yardroute.database.base import Database
from yardroute.domain.entities import BillingResult, Customer, ServiceType
from yardroute.domain.errors import ConfigurationError, ExternalServiceError, ValidationError
from yardroute.domain.pricing import price_for_visit, to_minor_units, validate_service_type_prices
from yardroute.integrations.base import PaymentGateway, call_with_timeout

logger = logging.getLogger(__name__)


def billing_period(month: int, year: int) -> tuple[date, date]:
    """Return the first and last day of a billing month.

    Raises:
        ValidationError: If month or year is out of range
    """
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month {month}: expected 1-12")
    if not 1 <= year <= 9999:
        raise ValidationError(f"Invalid year {year}")
    first = date(year, month, 1)
    last = first + relativedelta(months=1) - relativedelta(days=1)
    return first, last


def invoice_prefix(month: int, year: int) -> str:
    """Return the invoice number prefix for a period, e.g. 'INV-202401'."""
    return f"INV-{year}{month:02d}"


class BillingService:
    """Aggregates each customer's completed, billable visits into an invoice."""

    def __init__(
        self,
        db: Database,
        payment_gateway: PaymentGateway,
        charge_timeout: Optional[float] = CHARGE_TIMEOUT_SECONDS,
    ):
        """Initialize billing service.

        Args:
            db: Database instance
            payment_gateway: Provider used for autopay charges
            charge_timeout: Seconds to wait for a charge before treating it as failed
        """
        self.db = db
        self.payment_gateway = payment_gateway
        self.charge_timeout = charge_timeout

    def run_monthly_billing(self, month: int, year: int) -> BillingResult:
        """Create one invoice per active customer for the month.

        Customers without a service type, with unusable prices, with no
        completed billable visits, or already invoiced for the period are
        skipped with an error string. A customer whose invoice cannot be
        saved is counted as failed and is never charged. A failed charge
        leaves the saved invoice unpaid.

        Args:
            month: Billing month (1-12)
            year: Billing year

        Returns:
            BillingResult with counts, error strings and created invoice numbers
        """
        result = BillingResult()

        try:
            period_start, period_end = billing_period(month, year)
        except ValidationError as e:
            result.errors.append(f"Monthly billing not run: {e}")
            return result

        period = f"{year}-{month:02d}"
        prefix = invoice_prefix(month, year)

        try:
            customers = self.db.get_active_customers()
            last_sequence = self.db.get_max_invoice_sequence(prefix)
        except Exception as e:
            logger.exception("Could not load billing data for %s", period)
            result.errors.append(f"Monthly billing job failed: {e}")
            return result

        counter = INVOICE_COUNTER_START if last_sequence is None else last_sequence + 1

        for customer in customers:
            try:
                counter = self._bill_customer(
                    customer, period, period_start, period_end, prefix, counter, result
                )
            except Exception as e:
                logger.exception("Billing failed for customer %s", customer.id)
                result.failed += 1
                result.errors.append(f"Failed to create invoice for {customer.name}: {e}")

        logger.info(
            "Billing for %s finished: %d invoiced, %d failed, %d charged, %d skipped",
            period, result.success, result.failed, result.charged, result.skipped,
        )
        return result

    def _skip(self, result: BillingResult, customer: Customer, reason: str) -> None:
        logger.warning("Skipped %s: %s", customer.name, reason)
        result.skipped += 1
        result.errors.append(f"Skipped {customer.name}: {reason}")

    def _resolve_service_type(self, customer: Customer) -> ServiceType:
        """Find the service type that prices this customer's visits.

        The first active rule naming a service type wins; otherwise the
        customer's own service type is used.

        Raises:
            ConfigurationError: If no service type is set or it doesn't exist
        """
        service_type_id = None
        for rule in self.db.list_recurrence_rules(customer_id=customer.id):
            if not rule.paused and rule.service_type_id is not None:
                service_type_id = rule.service_type_id
                break
        if service_type_id is None:
            service_type_id = customer.service_type_id
        if service_type_id is None:
            raise ConfigurationError("No service type configured")

        service_type = self.db.get_service_type(service_type_id)
        if service_type is None:
            raise ConfigurationError(f"Service type {service_type_id} not found")
        return service_type

    def _bill_customer(
        self,
        customer: Customer,
        period: str,
        period_start: date,
        period_end: date,
        prefix: str,
        counter: int,
        result: BillingResult,
    ) -> int:
        """Bill one customer. Returns the next free invoice counter value."""
        if self.db.invoice_exists_for_period(customer.id, period):
            self._skip(result, customer, f"Already invoiced for {period}")
            return counter

        try:
            service_type = self._resolve_service_type(customer)
            validate_service_type_prices(service_type)
        except (ConfigurationError, ValidationError) as e:
            self._skip(result, customer, str(e))
            return counter

        visits = self.db.get_visits_for_customer_in_range(customer.id, period_start, period_end)
        billable = [v for v in visits if v.status == "completed" and v.billable]
        if not billable:
            self._skip(result, customer, f"No completed billable visits in {period}")
            return counter

        try:
            unit_price = price_for_visit(service_type, customer.dog_count)
        except ValidationError as e:
            self._skip(result, customer, str(e))
            return counter
        amount: Decimal = unit_price * len(billable)

        invoice_number = f"{prefix}-{counter}"
        visit_word = "visit" if len(billable) == 1 else "visits"
        description = (
            f"{service_type.name} ({len(billable)} {visit_word} × ${unit_price}) - "
            f"{period_start.month}/{period_start.year}"
        )

        try:
            invoice_id = self.db.create_invoice(
                customer_id=customer.id,
                invoice_number=invoice_number,
                amount=amount,
                due_date=period_start.replace(day=INVOICE_DUE_DAY),
                status="unpaid",
                description=description,
                billing_period=period,
            )
        except Exception as e:
            logger.exception("Could not save invoice %s for customer %s", invoice_number, customer.id)
            result.failed += 1
            result.errors.append(f"Failed to create invoice for {customer.name}: {e}")
            # A failed write still consumes its number
            return counter + 1

        result.success += 1
        result.invoice_numbers.append(invoice_number)
        logger.info("Created invoice %s for %s: $%s", invoice_number, customer.name, amount)

        if customer.autopay_enabled and customer.payment_method_ref:
            self._charge(customer, invoice_id, invoice_number, amount, result)

        return counter + 1

    def _charge(
        self,
        customer: Customer,
        invoice_id: int,
        invoice_number: str,
        amount: Decimal,
        result: BillingResult,
    ) -> None:
        """Charge a saved payment method; the invoice stays unpaid on any failure."""
        try:
            charge = call_with_timeout(
                self.payment_gateway.charge_off_session,
                self.charge_timeout,
                customer.payment_customer_ref,
                customer.payment_method_ref,
                to_minor_units(amount),
                f"Auto-pay for {invoice_number}",
            )
        except ExternalServiceError as e:
            logger.error("Autopay for %s (%s) did not complete: %s", customer.name, invoice_number, e)
            result.errors.append(
                f"Autopay failed for {customer.name}: {e}; the charge may still complete, "
                f"check the provider before retrying {invoice_number}"
            )
            return
        except Exception as e:
            logger.error("Autopay failed for %s (%s): %s", customer.name, invoice_number, e)
            result.errors.append(f"Autopay failed for {customer.name}: {e}")
            return

        if not charge.success:
            logger.error("Autopay declined for %s (%s): %s", customer.name, invoice_number, charge.reason)
            result.errors.append(f"Autopay failed for {customer.name}: {charge.reason}")
            return

        try:
            self.db.mark_invoice_paid(invoice_id, charge.external_ref)
        except Exception as e:
            logger.exception("Charged %s but could not mark %s paid", customer.name, invoice_number)
            result.errors.append(
                f"Charged {customer.name} ({charge.external_ref}) but could not mark "
                f"{invoice_number} paid: {e}"
            )
            return

        result.charged += 1
        logger.info("Charged %s for %s (%s)", customer.name, invoice_number, charge.external_ref)
