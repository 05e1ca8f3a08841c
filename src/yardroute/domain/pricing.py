"""Pricing engine.

All amounts are Decimal and rounded half-up to cents. Visits are priced per
service type as a base price for the first unit (dog) plus a fixed price for
each additional unit. Long ad-hoc jobs are billed by time instead.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from yardroute.config import HOURLY_RATE, TIMED_VISIT_THRESHOLD_MINUTES
from yardroute.domain.entities import ServiceType
from yardroute.domain.errors import ValidationError

CENT = Decimal("0.01")


def round_currency(value) -> Decimal:
    """Round a value to two decimal places using half-up rounding."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_minor_units(amount: Decimal) -> int:
    """Convert a currency amount to integer cents."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _as_decimal(value, label: str, service_type: ServiceType) -> Decimal:
    if value is None:
        raise ValidationError(f"{label} is missing for service type '{service_type.name}'")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValidationError(
            f"{label} '{value}' is not a number for service type '{service_type.name}'"
        ) from e
    if not number.is_finite():
        raise ValidationError(f"{label} '{value}' is not a number for service type '{service_type.name}'")
    return number


def validate_service_type_prices(service_type: ServiceType) -> tuple[Decimal, Decimal]:
    """Check that a service type can be priced.

    Returns:
        Tuple of (base_price, price_per_extra_unit)

    Raises:
        ValidationError: If base price is missing or not positive, or the
            extra unit price is missing or negative
    """
    base_price = _as_decimal(service_type.base_price, "Base price", service_type)
    if base_price <= 0:
        raise ValidationError(
            f"Invalid base price {base_price} in service type '{service_type.name}'"
        )
    extra = _as_decimal(service_type.price_per_extra_unit, "Extra unit price", service_type)
    if extra < 0:
        raise ValidationError(
            f"Invalid extra unit price {extra} in service type '{service_type.name}'"
        )
    return base_price, extra


def price_for_visit(service_type: ServiceType, unit_count: int) -> Decimal:
    """Price one visit: base price plus the extra-unit price for each unit past the first.

    Raises:
        ValidationError: If unit_count is below 1 or the prices are invalid
    """
    if unit_count is None or int(unit_count) < 1:
        raise ValidationError(f"Unit count must be at least 1, got {unit_count}")
    base_price, extra = validate_service_type_prices(service_type)
    return round_currency(base_price + max(0, int(unit_count) - 1) * extra)


def price_for_timed_visit(
    duration_minutes: int,
    fallback_service_type: Optional[ServiceType],
    unit_count: int,
    hourly_rate: Decimal = HOURLY_RATE,
) -> Decimal:
    """Price an ad-hoc visit by how long it took.

    Jobs of TIMED_VISIT_THRESHOLD_MINUTES or less are charged as a standard
    visit of the fallback service type; longer jobs are prorated at the
    hourly rate.

    Raises:
        ValidationError: If duration is negative, or a short job has no
            usable fallback service type
    """
    if duration_minutes is None or duration_minutes < 0:
        raise ValidationError(f"Duration must be zero or more minutes, got {duration_minutes}")
    if duration_minutes <= TIMED_VISIT_THRESHOLD_MINUTES:
        if fallback_service_type is None:
            raise ValidationError("A service type is required to price a short visit")
        return price_for_visit(fallback_service_type, unit_count)
    return round_currency(Decimal(duration_minutes) / Decimal(60) * Decimal(hourly_rate))
