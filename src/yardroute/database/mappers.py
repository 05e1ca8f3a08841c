"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the text encoding of a
rule's weekday set, so the domain never sees storage representations.
"""

from yardroute.domain import entities as domain
from yardroute.database.models import (
    Customer as ORMCustomer,
    ServiceType as ORMServiceType,
    RecurrenceRule as ORMRecurrenceRule,
    ScheduledVisit as ORMScheduledVisit,
    Invoice as ORMInvoice,
    ReminderLog as ORMReminderLog,
)


def encode_days(days_of_week) -> str:
    """Encode a weekday set as a sorted comma separated string."""
    return ",".join(str(day) for day in sorted(set(days_of_week)))


def decode_days(value: str | None) -> frozenset[int]:
    """Decode the stored weekday string back into a set."""
    if not value:
        return frozenset()
    return frozenset(int(part) for part in value.split(",") if part.strip())


def customer_to_domain(orm_customer: ORMCustomer) -> domain.Customer:
    """Convert SQLAlchemy Customer model to domain Customer entity."""
    return domain.Customer(
        id=orm_customer.id,
        name=orm_customer.name,
        address=orm_customer.address,
        phone=orm_customer.phone,
        email=orm_customer.email,
        dog_count=orm_customer.dog_count,
        status=orm_customer.status,
        service_type_id=orm_customer.service_type_id,
        autopay_enabled=orm_customer.autopay_enabled,
        payment_customer_ref=orm_customer.payment_customer_ref,
        payment_method_ref=orm_customer.payment_method_ref,
        sms_opt_in=orm_customer.sms_opt_in,
        created_at=orm_customer.created_at,
    )


def service_type_to_domain(orm_service_type: ORMServiceType) -> domain.ServiceType:
    """Convert SQLAlchemy ServiceType model to domain ServiceType entity."""
    return domain.ServiceType(
        id=orm_service_type.id,
        name=orm_service_type.name,
        base_price=orm_service_type.base_price,
        price_per_extra_unit=orm_service_type.price_per_extra_unit,
        times_per_week=orm_service_type.times_per_week,
        frequency=orm_service_type.frequency,
        active=orm_service_type.active,
        created_at=orm_service_type.created_at,
    )


def rule_to_domain(orm_rule: ORMRecurrenceRule) -> domain.RecurrenceRule:
    """Convert SQLAlchemy RecurrenceRule model to domain RecurrenceRule entity."""
    return domain.RecurrenceRule(
        id=orm_rule.id,
        customer_id=orm_rule.customer_id,
        service_type_id=orm_rule.service_type_id,
        frequency=orm_rule.frequency,
        days_of_week=decode_days(orm_rule.days_of_week),
        start_date=orm_rule.start_date,
        window_start=orm_rule.window_start,
        window_end=orm_rule.window_end,
        timezone=orm_rule.timezone,
        paused=orm_rule.paused,
        notes=orm_rule.notes,
        created_at=orm_rule.created_at,
    )


def visit_to_domain(orm_visit: ORMScheduledVisit) -> domain.ScheduledVisit:
    """Convert SQLAlchemy ScheduledVisit model to domain ScheduledVisit entity."""
    return domain.ScheduledVisit(
        id=orm_visit.id,
        customer_id=orm_visit.customer_id,
        date=orm_visit.date,
        scheduled_time=orm_visit.scheduled_time,
        status=orm_visit.status,
        order_index=orm_visit.order_index,
        billable=orm_visit.billable,
        rule_id=orm_visit.rule_id,
        service_kind=orm_visit.service_kind,
        started_at=orm_visit.started_at,
        completed_at=orm_visit.completed_at,
        duration_minutes=orm_visit.duration_minutes,
        calculated_cost=orm_visit.calculated_cost,
        created_at=orm_visit.created_at,
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        customer_id=orm_invoice.customer_id,
        invoice_number=orm_invoice.invoice_number,
        billing_period=orm_invoice.billing_period,
        amount=orm_invoice.amount,
        status=orm_invoice.status,
        due_date=orm_invoice.due_date,
        description=orm_invoice.description,
        paid_at=orm_invoice.paid_at,
        external_payment_reference=orm_invoice.external_payment_reference,
        created_at=orm_invoice.created_at,
    )


def reminder_log_to_domain(orm_log: ORMReminderLog) -> domain.ReminderLog:
    """Convert SQLAlchemy ReminderLog model to domain ReminderLog entity."""
    return domain.ReminderLog(
        id=orm_log.id,
        customer_id=orm_log.customer_id,
        service_date=orm_log.service_date,
        status=orm_log.status,
        external_reference=orm_log.external_reference,
        error_message=orm_log.error_message,
        sent_at=orm_log.sent_at,
    )
