"""Visit domain service: one-off scheduling and field status updates."""

import logging
from datetime import date, datetime, UTC
from typing import Optional

from yardroute.database.base import Database
from yardroute.domain.entities import ScheduledVisit as ScheduledVisitEntity
from yardroute.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    customer_not_found,
    duplicate_visit,
    visit_not_found,
)
from yardroute.domain.pricing import price_for_timed_visit

logger = logging.getLogger(__name__)

SERVICE_KINDS = ("regular", "one-time", "new-start")
VISIT_STATUSES = ("scheduled", "in_progress", "completed")


class VisitService:
    """Service for managing scheduled visits."""

    def __init__(self, db: Database):
        """Initialize visit service.

        Args:
            db: Database instance
        """
        self.db = db

    def schedule_visit(
        self,
        customer_id: int,
        visit_date: date,
        service_kind: str = "one-time",
        scheduled_time: Optional[str] = None,
        billable: bool = True,
    ) -> int:
        """Schedule a single visit directly, without a recurrence rule.

        One-time clean-ups and new-start visits are created this way.

        Returns:
            Visit ID

        Raises:
            ValidationError: If service kind is unknown
            NotFoundError: If customer doesn't exist
            ConflictError: If the customer already has a visit that day
        """
        if service_kind not in SERVICE_KINDS:
            raise ValidationError(
                f"Unknown service kind '{service_kind}'. Supported: {', '.join(SERVICE_KINDS)}"
            )
        if self.db.get_customer(customer_id) is None:
            raise NotFoundError(customer_not_found(customer_id))
        if self.db.visit_exists(customer_id, visit_date):
            raise ConflictError(duplicate_visit(customer_id, visit_date))

        visit_id = self.db.create_visit(
            customer_id=customer_id,
            visit_date=visit_date,
            scheduled_time=scheduled_time,
            billable=billable,
            service_kind=service_kind,
        )
        logger.info("Scheduled %s visit %s for customer %s on %s", service_kind, visit_id, customer_id, visit_date)
        return visit_id

    def get_visit(self, visit_id: int) -> Optional[ScheduledVisitEntity]:
        """Get visit by ID."""
        return self.db.get_visit(visit_id)

    def list_visits_on(self, visit_date: date) -> list[ScheduledVisitEntity]:
        """List visits on a date in route order."""
        return self.db.get_visits_on_date(visit_date)

    def _require_visit(self, visit_id: int) -> ScheduledVisitEntity:
        visit = self.db.get_visit(visit_id)
        if visit is None:
            raise NotFoundError(visit_not_found(visit_id))
        return visit

    def start_visit(self, visit_id: int, started_at: Optional[datetime] = None) -> None:
        """Mark a visit in progress and start its timer.

        Raises:
            NotFoundError: If visit doesn't exist
            ValidationError: If the visit is already completed
        """
        visit = self._require_visit(visit_id)
        if visit.status == "completed":
            raise ValidationError(f"Visit {visit_id} is already completed")
        self.db.update_visit(
            visit_id, status="in_progress", started_at=started_at or datetime.now(UTC)
        )

    def complete_visit(
        self,
        visit_id: int,
        duration_minutes: Optional[int] = None,
        completed_at: Optional[datetime] = None,
    ) -> ScheduledVisitEntity:
        """Mark a visit completed.

        When the duration is known, either passed in or measured from the
        visit's start time, it is stored with the job's time-based cost.

        Returns:
            The updated visit

        Raises:
            NotFoundError: If visit doesn't exist
            ValidationError: If the duration is negative
        """
        visit = self._require_visit(visit_id)
        completed_at = completed_at or datetime.now(UTC)

        if duration_minutes is None and visit.started_at is not None:
            started_at = visit.started_at
            if started_at.tzinfo is None:
                started_at = started_at.replace(tzinfo=UTC)
            if completed_at.tzinfo is None:
                completed_at = completed_at.replace(tzinfo=UTC)
            duration_minutes = round((completed_at - started_at).total_seconds() / 60)

        calculated_cost = None
        if duration_minutes is not None:
            if duration_minutes < 0:
                raise ValidationError(f"Duration must be zero or more minutes, got {duration_minutes}")
            customer = self.db.get_customer(visit.customer_id)
            if customer is None:
                raise NotFoundError(customer_not_found(visit.customer_id))
            service_type = None
            if customer.service_type_id is not None:
                service_type = self.db.get_service_type(customer.service_type_id)
            try:
                calculated_cost = price_for_timed_visit(duration_minutes, service_type, customer.dog_count)
            except ValidationError as e:
                logger.warning("No cost recorded for visit %s: %s", visit_id, e)

        self.db.update_visit(
            visit_id,
            status="completed",
            completed_at=completed_at,
            duration_minutes=duration_minutes,
            calculated_cost=calculated_cost,
        )
        logger.info("Completed visit %s (%s min, cost %s)", visit_id, duration_minutes, calculated_cost)
        return self._require_visit(visit_id)

    def set_billable(self, visit_id: int, billable: bool) -> None:
        """Include or exclude a visit from billing.

        Raises:
            NotFoundError: If visit doesn't exist
        """
        self._require_visit(visit_id)
        self.db.update_visit(visit_id, billable=billable)
