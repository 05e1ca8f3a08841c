"""Shared pytest fixtures for yardroute tests."""

import sqlite3
import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest
from sqlalchemy import event
from sqlalchemy.exc import OperationalError

from yardroute.database.factories import create_sqlite_database
from yardroute.domain.customer import CustomerService
from yardroute.domain.price_book import PriceBookService
from yardroute.domain.recurrence import RecurrenceRuleService
from yardroute.domain.visit import VisitService
from yardroute.integrations.base import (
    ChargeResult,
    NotificationResult,
    Notifier,
    PaymentGateway,
)


class RecordingPaymentGateway(PaymentGateway):
    """Payment gateway that records charge requests and returns a fixed outcome."""

    def __init__(self, outcome=None, error=None):
        self.outcome = outcome or ChargeResult(success=True, external_ref="pi_test")
        self.error = error
        self.charges = []

    def charge_off_session(self, customer_ref, payment_method_ref, amount_minor_units, description=""):
        self.charges.append((customer_ref, payment_method_ref, amount_minor_units, description))
        if self.error is not None:
            raise self.error
        return self.outcome


class RecordingNotifier(Notifier):
    """Notifier that records messages; numbers in fail_for are rejected."""

    def __init__(self, fail_for=(), error=None):
        self.fail_for = set(fail_for)
        self.error = error
        self.messages = []

    def send_message(self, to, text):
        self.messages.append((to, text))
        if self.error is not None:
            raise self.error
        if to in self.fail_for:
            return NotificationResult(success=False, reason="Undeliverable number")
        return NotificationResult(success=True, external_ref=f"msg-{len(self.messages)}")


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def fail_next_insert(temp_db):
    """Arm a one-shot "database is locked" error for the next INSERT into a table."""
    engine = temp_db.session_factory.kw["bind"]
    armed = set()

    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        for table in list(armed):
            if statement.lstrip().upper().startswith(f"INSERT INTO {table.upper()} "):
                armed.discard(table)
                raise OperationalError(statement, parameters, sqlite3.OperationalError("database is locked"))

    event.listen(engine, "before_cursor_execute", before_cursor_execute)
    yield armed.add
    event.remove(engine, "before_cursor_execute", before_cursor_execute)


@pytest.fixture
def customer_service(temp_db):
    """Create a CustomerService with a temporary database."""
    return CustomerService(temp_db)


@pytest.fixture
def price_book_service(temp_db):
    """Create a PriceBookService with a temporary database."""
    return PriceBookService(temp_db)


@pytest.fixture
def rule_service(temp_db):
    """Create a RecurrenceRuleService with a temporary database."""
    return RecurrenceRuleService(temp_db)


@pytest.fixture
def visit_service(temp_db):
    """Create a VisitService with a temporary database."""
    return VisitService(temp_db)


@pytest.fixture
def payment_gateway():
    """Create a payment gateway whose charges succeed."""
    return RecordingPaymentGateway()


@pytest.fixture
def notifier():
    """Create a notifier whose sends succeed."""
    return RecordingNotifier()


@pytest.fixture
def sample_service_type(price_book_service):
    """Create a $20 base / $5 extra dog service type."""
    service_type_id = price_book_service.create_service_type(
        name="Weekly", base_price=Decimal("20.00"), price_per_extra_unit=Decimal("5.00")
    )
    return price_book_service.get_service_type(service_type_id)


@pytest.fixture
def sample_customer(customer_service, sample_service_type):
    """Create an active two-dog customer on the sample service type."""
    customer_id = customer_service.create_customer(
        name="Jane Doe",
        address="12 Elm St",
        phone="+15550100",
        dog_count=2,
        service_type_id=sample_service_type.id,
    )
    return customer_service.get_customer(customer_id)


@pytest.fixture
def weekly_rule(rule_service, sample_customer):
    """Mon/Wed/Fri weekly rule starting Monday 2024-01-01."""
    rule_id = rule_service.create_rule(
        customer_id=sample_customer.id,
        frequency="weekly",
        days_of_week=[1, 3, 5],
        start_date=date(2024, 1, 1),
        timezone="America/Chicago",
    )
    return rule_service.get_rule(rule_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
