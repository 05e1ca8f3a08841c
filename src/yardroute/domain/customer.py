"""Customer domain service."""

from typing import Optional

from yardroute.database.base import Database
from yardroute.domain.entities import Customer as CustomerEntity
from yardroute.domain.errors import (
    NotFoundError,
    ValidationError,
    customer_not_found,
    service_type_not_found,
)

CUSTOMER_STATUSES = ("active", "inactive")


class CustomerService:
    """Service for managing customers."""

    def __init__(self, db: Database):
        """Initialize customer service.

        Args:
            db: Database instance
        """
        self.db = db

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
        """Create a customer.

        Returns:
            Customer ID

        Raises:
            ValidationError: If name, address or phone is empty, or dog count is below 1
            NotFoundError: If service type doesn't exist
        """
        for label, value in (("Name", name), ("Address", address), ("Phone", phone)):
            if not value or not value.strip():
                raise ValidationError(f"{label} is required")
        if dog_count < 1:
            raise ValidationError(f"Dog count must be at least 1, got {dog_count}")
        if service_type_id is not None and self.db.get_service_type(service_type_id) is None:
            raise NotFoundError(service_type_not_found(service_type_id))

        return self.db.create_customer(
            name=name.strip(),
            address=address.strip(),
            phone=phone.strip(),
            email=email,
            dog_count=dog_count,
            service_type_id=service_type_id,
            autopay_enabled=autopay_enabled,
            payment_customer_ref=payment_customer_ref,
            payment_method_ref=payment_method_ref,
            sms_opt_in=sms_opt_in,
        )

    def get_customer(self, customer_id: int) -> Optional[CustomerEntity]:
        """Get customer by ID."""
        return self.db.get_customer(customer_id)

    def list_customers(self) -> list[CustomerEntity]:
        """List all customers."""
        return self.db.list_customers()

    def set_status(self, customer_id: int, status: str) -> None:
        """Activate or deactivate a customer.

        Raises:
            ValidationError: If status is unknown
            NotFoundError: If customer doesn't exist
        """
        if status not in CUSTOMER_STATUSES:
            raise ValidationError(f"Unknown status '{status}'")
        if self.db.get_customer(customer_id) is None:
            raise NotFoundError(customer_not_found(customer_id))
        self.db.update_customer_status(customer_id, status)
