"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class ConfigurationError(DomainError):
    """Customer or rule setup prevents an operation (e.g. no service type)."""


class ExternalServiceError(RuntimeError):
    """A payment or notification provider failed or is unavailable."""


def customer_not_found(customer_id: int) -> str:
    """Return message for missing customer."""
    return f"Customer {customer_id} not found"


def service_type_not_found(service_type_id: int) -> str:
    """Return message for missing service type."""
    return f"Service type {service_type_id} not found"


def rule_not_found(rule_id: int) -> str:
    """Return message for missing recurrence rule."""
    return f"Recurrence rule {rule_id} not found"


def visit_not_found(visit_id: int) -> str:
    """Return message for missing visit."""
    return f"Visit {visit_id} not found"


def invoice_not_found(invoice_id: int) -> str:
    """Return message for missing invoice."""
    return f"Invoice {invoice_id} not found"


def duplicate_visit(customer_id: int, visit_date) -> str:
    """Return message for a second visit on the same day."""
    return f"Visit for customer {customer_id} on {visit_date} already exists"


def duplicate_invoice_number(invoice_number: str) -> str:
    """Return message for invoice number collisions."""
    return f"Invoice number '{invoice_number}' already exists"


def duplicate_reminder(customer_id: int, service_date) -> str:
    """Return message for a second reminder log on the same day."""
    return f"Reminder for customer {customer_id} on {service_date} already logged"
