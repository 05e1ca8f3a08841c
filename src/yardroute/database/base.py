"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Iterable
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from yardroute.domain.entities import (
    Customer,
    ServiceType,
    RecurrenceRule,
    ScheduledVisit,
    Invoice,
    ReminderLog,
)


class Database(ABC):
    """Abstract database interface for yardroute.

    Implementations must reject a second visit for the same customer and
    date, a second reminder log for the same customer and date, and a
    duplicate invoice number by raising ``ConflictError``.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Customer operations
    @abstractmethod
    def create_customer(
        self,
        name: str,
        address: str,
        phone: str,
        email: Optional[str] = None,
        dog_count: int = 1,
        service_type_id: Optional[int] = None,
        autopay_enabled: bool = False,
        payment_customer_ref: Optional[str] = None,
        payment_method_ref: Optional[str] = None,
        sms_opt_in: bool = True,
    ) -> int:
        """Create a customer. Returns customer ID."""
        pass

    @abstractmethod
    def get_customer(self, customer_id: int) -> Optional[Customer]:
        """Get customer by ID."""
        pass

    @abstractmethod
    def list_customers(self) -> list[Customer]:
        """List all customers."""
        pass

    @abstractmethod
    def get_active_customers(self) -> list[Customer]:
        """List customers whose status is 'active'."""
        pass

    @abstractmethod
    def update_customer_status(self, customer_id: int, status: str) -> None:
        """Set a customer's status."""
        pass

    # Service type (price book) operations
    @abstractmethod
    def create_service_type(
        self,
        name: str,
        base_price: Optional[Decimal],
        price_per_extra_unit: Optional[Decimal],
        times_per_week: int = 1,
        frequency: str = "weekly",
    ) -> int:
        """Create a service type. Returns service type ID."""
        pass

    @abstractmethod
    def get_service_type(self, service_type_id: int) -> Optional[ServiceType]:
        """Get service type by ID."""
        pass

    @abstractmethod
    def list_service_types(self) -> list[ServiceType]:
        """List all service types."""
        pass

    # Recurrence rule operations
    @abstractmethod
    def create_recurrence_rule(
        self,
        customer_id: int,
        frequency: str,
        days_of_week: Iterable[int],
        start_date: date,
        window_start: str,
        window_end: str,
        timezone: str,
        service_type_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a recurrence rule. Returns rule ID."""
        pass

    @abstractmethod
    def get_recurrence_rule(self, rule_id: int) -> Optional[RecurrenceRule]:
        """Get recurrence rule by ID."""
        pass

    @abstractmethod
    def list_recurrence_rules(self, customer_id: Optional[int] = None) -> list[RecurrenceRule]:
        """List recurrence rules, optionally filtered by customer."""
        pass

    @abstractmethod
    def get_active_recurrence_rules(self) -> list[RecurrenceRule]:
        """List rules that are not paused."""
        pass

    @abstractmethod
    def set_rule_paused(self, rule_id: int, paused: bool) -> None:
        """Pause or resume a rule."""
        pass

    # Visit operations
    @abstractmethod
    def create_visit(
        self,
        customer_id: int,
        visit_date: date,
        scheduled_time: Optional[str] = None,
        status: str = "scheduled",
        order_index: int = 0,
        billable: bool = True,
        rule_id: Optional[int] = None,
        service_kind: str = "regular",
    ) -> int:
        """Create a visit. Returns visit ID.

        Raises:
            ConflictError: If the customer already has a visit on that date
        """
        pass

    @abstractmethod
    def get_visit(self, visit_id: int) -> Optional[ScheduledVisit]:
        """Get visit by ID."""
        pass

    @abstractmethod
    def visit_exists(self, customer_id: int, visit_date: date) -> bool:
        """Check if the customer already has a visit on the date."""
        pass

    @abstractmethod
    def get_visits_for_customer_in_range(
        self, customer_id: int, start_date: date, end_date: date
    ) -> list[ScheduledVisit]:
        """List a customer's visits with start_date <= date <= end_date."""
        pass

    @abstractmethod
    def get_visits_on_date(self, visit_date: date) -> list[ScheduledVisit]:
        """List all visits on a date, in route order."""
        pass

    @abstractmethod
    def update_visit(
        self,
        visit_id: int,
        status: Optional[str] = None,
        billable: Optional[bool] = None,
        started_at: Optional[datetime] = None,
        completed_at: Optional[datetime] = None,
        duration_minutes: Optional[int] = None,
        calculated_cost: Optional[Decimal] = None,
    ) -> None:
        """Update visit fields. Fields left as None are not changed."""
        pass

    # Invoice operations
    @abstractmethod
    def create_invoice(
        self,
        customer_id: int,
        invoice_number: str,
        amount: Decimal,
        due_date: date,
        status: str = "unpaid",
        description: Optional[str] = None,
        billing_period: Optional[str] = None,
    ) -> int:
        """Create an invoice. Returns invoice ID.

        Raises:
            ConflictError: If the invoice number is already used
        """
        pass

    @abstractmethod
    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID."""
        pass

    @abstractmethod
    def list_invoices(self, customer_id: Optional[int] = None) -> list[Invoice]:
        """List invoices, optionally filtered by customer."""
        pass

    @abstractmethod
    def invoice_exists_for_period(self, customer_id: int, billing_period: str) -> bool:
        """Check if the customer already has an invoice for the period (YYYY-MM)."""
        pass

    @abstractmethod
    def get_max_invoice_sequence(self, prefix: str) -> Optional[int]:
        """Return the highest numeric suffix among invoice numbers '<prefix>-<n>'."""
        pass

    @abstractmethod
    def mark_invoice_paid(self, invoice_id: int, external_ref: Optional[str]) -> None:
        """Mark an invoice paid, recording the payment reference."""
        pass

    # Reminder log operations
    @abstractmethod
    def get_reminder_logs_on_date(self, service_date: date) -> list[ReminderLog]:
        """List reminder attempts for a service date."""
        pass

    @abstractmethod
    def create_reminder_log(
        self,
        customer_id: int,
        service_date: date,
        status: str,
        external_reference: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> int:
        """Record a reminder attempt. Returns log ID.

        Raises:
            ConflictError: If an attempt is already logged for customer and date
        """
        pass
