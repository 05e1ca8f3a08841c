"""Domain model entities for yardroute.

These are pure data classes representing business concepts, independent of
database schema. Storage implementations convert their rows into these.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Customer:
    """Customer domain entity."""

    id: int
    name: str
    address: str
    phone: str
    email: Optional[str]
    dog_count: int
    status: str
    service_type_id: Optional[int]
    autopay_enabled: bool
    payment_customer_ref: Optional[str]
    payment_method_ref: Optional[str]
    sms_opt_in: bool
    created_at: datetime


@dataclass(frozen=True)
class ServiceType:
    """Price book entry for a service offering."""

    id: int
    name: str
    base_price: Optional[Decimal]
    price_per_extra_unit: Optional[Decimal]
    times_per_week: int
    frequency: str
    active: bool
    created_at: datetime


@dataclass(frozen=True)
class RecurrenceRule:
    """A customer's standing service schedule."""

    id: int
    customer_id: int
    service_type_id: Optional[int]
    frequency: str
    days_of_week: frozenset[int]
    start_date: date
    window_start: str
    window_end: str
    timezone: str
    paused: bool
    notes: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class ScheduledVisit:
    """A dated service visit (route stop) for one customer."""

    id: int
    customer_id: int
    date: date
    scheduled_time: Optional[str]
    status: str
    order_index: int
    billable: bool
    rule_id: Optional[int]
    service_kind: str
    started_at: Optional[datetime]
    completed_at: Optional[datetime]
    duration_minutes: Optional[int]
    calculated_cost: Optional[Decimal]
    created_at: datetime


@dataclass(frozen=True)
class Invoice:
    """Invoice domain entity."""

    id: int
    customer_id: int
    invoice_number: str
    billing_period: Optional[str]
    amount: Decimal
    status: str
    due_date: date
    description: Optional[str]
    paid_at: Optional[datetime]
    external_payment_reference: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class ReminderLog:
    """Record of one reminder delivery attempt."""

    id: int
    customer_id: int
    service_date: date
    status: str
    external_reference: Optional[str]
    error_message: Optional[str]
    sent_at: datetime


@dataclass
class GenerationResult:
    """Outcome of a route generation run."""

    created: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass
class BillingResult:
    """Outcome of a monthly billing run.

    ``success`` counts persisted invoices, ``failed`` counts invoices that
    could not be persisted, ``charged`` counts successful autopay charges and
    ``skipped`` counts customers left out for configuration or data reasons.
    """

    success: int = 0
    failed: int = 0
    charged: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)
    invoice_numbers: list[str] = field(default_factory=list)


@dataclass
class ReminderResult:
    """Outcome of a reminder dispatch run."""

    sent: int = 0
    skipped: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)
