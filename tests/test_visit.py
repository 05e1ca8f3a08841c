"""Tests for direct visit scheduling and field updates."""

import pytest
from datetime import date, datetime, timedelta, UTC
from decimal import Decimal

from yardroute.domain.errors import ConflictError, NotFoundError, ValidationError


class TestScheduleVisit:
    """One-off visits."""

    def test_schedule_one_time_visit(self, visit_service, sample_customer):
        visit_id = visit_service.schedule_visit(sample_customer.id, date(2024, 2, 3), scheduled_time="10:00")
        visit = visit_service.get_visit(visit_id)

        assert visit.date == date(2024, 2, 3)
        assert visit.service_kind == "one-time"
        assert visit.status == "scheduled"
        assert visit.rule_id is None
        assert visit.scheduled_time == "10:00"

    def test_new_start_visit(self, visit_service, sample_customer):
        visit_id = visit_service.schedule_visit(sample_customer.id, date(2024, 2, 3), service_kind="new-start")
        assert visit_service.get_visit(visit_id).service_kind == "new-start"

    def test_second_visit_same_day_conflicts(self, visit_service, sample_customer):
        visit_service.schedule_visit(sample_customer.id, date(2024, 2, 3))
        with pytest.raises(ConflictError):
            visit_service.schedule_visit(sample_customer.id, date(2024, 2, 3), service_kind="new-start")

    def test_unknown_kind(self, visit_service, sample_customer):
        with pytest.raises(ValidationError):
            visit_service.schedule_visit(sample_customer.id, date(2024, 2, 3), service_kind="monthly")

    def test_unknown_customer(self, visit_service):
        with pytest.raises(NotFoundError):
            visit_service.schedule_visit(999, date(2024, 2, 3))

    def test_list_visits_on(self, visit_service, sample_customer, customer_service):
        other_id = customer_service.create_customer(name="Other", address="7 G St", phone="+15550500")
        visit_service.schedule_visit(sample_customer.id, date(2024, 2, 3))
        visit_service.schedule_visit(other_id, date(2024, 2, 3))
        visit_service.schedule_visit(other_id, date(2024, 2, 4))

        visits = visit_service.list_visits_on(date(2024, 2, 3))

        assert [v.customer_id for v in visits] == [sample_customer.id, other_id]


class TestVisitProgress:
    """Starting and completing visits."""

    def test_start_then_complete_with_measured_duration(self, visit_service, sample_customer):
        visit_id = visit_service.schedule_visit(sample_customer.id, date(2024, 2, 3))
        started = datetime(2024, 2, 3, 14, 0, tzinfo=UTC)

        visit_service.start_visit(visit_id, started_at=started)
        assert visit_service.get_visit(visit_id).status == "in_progress"

        visit = visit_service.complete_visit(visit_id, completed_at=started + timedelta(minutes=30))

        assert visit.status == "completed"
        assert visit.duration_minutes == 30
        assert visit.calculated_cost == Decimal("50.00")

    def test_short_job_costs_a_visit(self, visit_service, sample_customer):
        """Two dogs on the $20 + $5 service type."""
        visit_id = visit_service.schedule_visit(sample_customer.id, date(2024, 2, 3))

        visit = visit_service.complete_visit(visit_id, duration_minutes=12)

        assert visit.calculated_cost == Decimal("25.00")

    def test_complete_without_timing(self, visit_service, sample_customer):
        visit_id = visit_service.schedule_visit(sample_customer.id, date(2024, 2, 3))

        visit = visit_service.complete_visit(visit_id)

        assert visit.status == "completed"
        assert visit.completed_at is not None
        assert visit.duration_minutes is None
        assert visit.calculated_cost is None

    def test_short_job_without_service_type_has_no_cost(self, visit_service, customer_service):
        customer_id = customer_service.create_customer(name="Walk-in", address="8 H St", phone="+15550501")
        visit_id = visit_service.schedule_visit(customer_id, date(2024, 2, 3))

        visit = visit_service.complete_visit(visit_id, duration_minutes=5)

        assert visit.status == "completed"
        assert visit.calculated_cost is None

    def test_negative_duration(self, visit_service, sample_customer):
        visit_id = visit_service.schedule_visit(sample_customer.id, date(2024, 2, 3))
        with pytest.raises(ValidationError):
            visit_service.complete_visit(visit_id, duration_minutes=-5)

    def test_cannot_restart_completed_visit(self, visit_service, sample_customer):
        visit_id = visit_service.schedule_visit(sample_customer.id, date(2024, 2, 3))
        visit_service.complete_visit(visit_id)
        with pytest.raises(ValidationError):
            visit_service.start_visit(visit_id)

    def test_missing_visit(self, visit_service):
        with pytest.raises(NotFoundError):
            visit_service.complete_visit(999)
        with pytest.raises(NotFoundError):
            visit_service.start_visit(999)

    def test_set_billable(self, visit_service, sample_customer):
        visit_id = visit_service.schedule_visit(sample_customer.id, date(2024, 2, 3))

        visit_service.set_billable(visit_id, False)

        assert visit_service.get_visit(visit_id).billable is False
