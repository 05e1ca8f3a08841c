"""Price book (service type catalog) service."""

from decimal import Decimal
from typing import Optional

from yardroute.database.base import Database
from yardroute.domain.entities import ServiceType as ServiceTypeEntity
from yardroute.domain.errors import ValidationError


class PriceBookService:
    """Service for managing priced service types."""

    def __init__(self, db: Database):
        """Initialize price book service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_service_type(
        self,
        name: str,
        base_price: Decimal,
        price_per_extra_unit: Decimal,
        times_per_week: int = 1,
        frequency: str = "weekly",
    ) -> int:
        """Create a service type.

        Raises:
            ValidationError: If name is empty or a price is out of range
        """
        if not name or not name.strip():
            raise ValidationError("Name is required")
        if base_price <= 0:
            raise ValidationError(f"Base price must be positive, got {base_price}")
        if price_per_extra_unit < 0:
            raise ValidationError(f"Extra unit price must not be negative, got {price_per_extra_unit}")
        if times_per_week < 1:
            raise ValidationError(f"Times per week must be at least 1, got {times_per_week}")

        return self.db.create_service_type(
            name=name.strip(),
            base_price=base_price,
            price_per_extra_unit=price_per_extra_unit,
            times_per_week=times_per_week,
            frequency=frequency,
        )

    def get_service_type(self, service_type_id: int) -> Optional[ServiceTypeEntity]:
        """Get service type by ID."""
        return self.db.get_service_type(service_type_id)

    def list_service_types(self) -> list[ServiceTypeEntity]:
        """List all service types."""
        return self.db.list_service_types()
