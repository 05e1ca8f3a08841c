"""Tests for database mappers."""

import pytest
from datetime import datetime, date, UTC
from decimal import Decimal

from yardroute.database.models import (
    Customer as ORMCustomer,
    RecurrenceRule as ORMRecurrenceRule,
    ScheduledVisit as ORMScheduledVisit,
    Invoice as ORMInvoice,
)
from yardroute.database.mappers import (
    customer_to_domain,
    decode_days,
    encode_days,
    invoice_to_domain,
    rule_to_domain,
    visit_to_domain,
)
from yardroute.domain.entities import Customer, Invoice, RecurrenceRule, ScheduledVisit


class TestDayEncoding:
    """Weekday set storage encoding."""

    def test_encode_sorts_and_dedupes(self):
        assert encode_days([5, 1, 3, 1]) == "1,3,5"
        assert encode_days([]) == ""

    @pytest.mark.parametrize("value", ["", None])
    def test_decode_empty(self, value):
        assert decode_days(value) == frozenset()

    def test_decode(self):
        assert decode_days("0,6") == frozenset({0, 6})


class TestMappers:
    """ORM rows to domain entities."""

    def test_customer_to_domain(self):
        orm_customer = ORMCustomer(
            id=1,
            name="Jane Doe",
            address="12 Elm St",
            phone="+15550100",
            email=None,
            dog_count=2,
            status="active",
            service_type_id=3,
            autopay_enabled=True,
            payment_customer_ref="cus_1",
            payment_method_ref="pm_1",
            sms_opt_in=False,
            created_at=datetime.now(UTC),
        )

        customer = customer_to_domain(orm_customer)

        assert isinstance(customer, Customer)
        assert customer.dog_count == 2
        assert customer.payment_method_ref == "pm_1"
        assert customer.sms_opt_in is False

    def test_rule_to_domain(self):
        orm_rule = ORMRecurrenceRule(
            id=4,
            customer_id=1,
            service_type_id=None,
            frequency="biweekly",
            days_of_week="2,4",
            start_date=date(2024, 1, 2),
            window_start="09:00",
            window_end="12:00",
            timezone="America/Denver",
            paused=False,
            notes="Side gate",
            created_at=datetime.now(UTC),
        )

        rule = rule_to_domain(orm_rule)

        assert isinstance(rule, RecurrenceRule)
        assert rule.days_of_week == frozenset({2, 4})
        assert rule.frequency == "biweekly"
        assert rule.notes == "Side gate"

    def test_visit_to_domain(self):
        orm_visit = ORMScheduledVisit(
            id=9,
            customer_id=1,
            date=date(2024, 1, 3),
            scheduled_time="08:00",
            status="completed",
            order_index=2,
            billable=False,
            rule_id=4,
            service_kind="regular",
            started_at=None,
            completed_at=datetime.now(UTC),
            duration_minutes=12,
            calculated_cost=Decimal("25.00"),
            created_at=datetime.now(UTC),
        )

        visit = visit_to_domain(orm_visit)

        assert isinstance(visit, ScheduledVisit)
        assert visit.date == date(2024, 1, 3)
        assert visit.billable is False
        assert visit.calculated_cost == Decimal("25.00")

    def test_invoice_to_domain(self):
        orm_invoice = ORMInvoice(
            id=2,
            customer_id=1,
            invoice_number="INV-202401-1000",
            billing_period="2024-01",
            amount=Decimal("75.00"),
            status="unpaid",
            due_date=date(2024, 1, 15),
            description="Weekly (3 visits × $25.00) - 1/2024",
            paid_at=None,
            external_payment_reference=None,
            created_at=datetime.now(UTC),
        )

        invoice = invoice_to_domain(orm_invoice)

        assert isinstance(invoice, Invoice)
        assert invoice.invoice_number == "INV-202401-1000"
        assert invoice.amount == Decimal("75.00")
        assert invoice.paid_at is None
