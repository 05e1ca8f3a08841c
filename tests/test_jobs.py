"""Tests for the periodic job drivers."""

from datetime import date, datetime, UTC

from yardroute.jobs import run_daily_jobs, run_monthly_billing_job


class TestDailyJobs:
    """Generate visits, then remind tomorrow's customers."""

    def test_generates_then_reminds_tomorrow(self, temp_db, weekly_rule, notifier):
        # Noon on Tuesday 2024-01-02 in Chicago
        now = datetime(2024, 1, 2, 18, 0, tzinfo=UTC)

        generation, reminders = run_daily_jobs(temp_db, notifier, now=now, horizon_days=7)

        assert generation.created == 3
        assert temp_db.visit_exists(weekly_rule.customer_id, date(2024, 1, 3))
        assert reminders.sent == 1
        assert notifier.messages[0][0] == "+15550100"
        assert "2024-01-03" in notifier.messages[0][1]

    def test_today_follows_business_timezone(self, temp_db, weekly_rule, notifier):
        """01:00 UTC Wednesday is still Tuesday evening in Chicago."""
        now = datetime(2024, 1, 3, 1, 0, tzinfo=UTC)

        generation, reminders = run_daily_jobs(temp_db, notifier, now=now, horizon_days=2)

        assert generation.created == 1
        assert reminders.sent == 1

    def test_rerun_is_quiet(self, temp_db, weekly_rule, notifier):
        now = datetime(2024, 1, 2, 18, 0, tzinfo=UTC)
        run_daily_jobs(temp_db, notifier, now=now)

        generation, reminders = run_daily_jobs(temp_db, notifier, now=now)

        assert generation.created == 0
        assert reminders.sent == 0
        assert len(notifier.messages) == 1


class TestMonthlyBilling:
    """Bill the previous month."""

    def test_bills_previous_month(self, temp_db, sample_customer, payment_gateway):
        temp_db.create_visit(sample_customer.id, date(2024, 1, 10), status="completed")
        temp_db.create_visit(sample_customer.id, date(2024, 2, 1), status="completed")

        result = run_monthly_billing_job(temp_db, payment_gateway, now=datetime(2024, 2, 1, 12, 0, tzinfo=UTC))

        assert result.invoice_numbers == ["INV-202401-1000"]
        (invoice,) = temp_db.list_invoices()
        assert invoice.billing_period == "2024-01"

    def test_month_boundary_in_business_timezone(self, temp_db, sample_customer, payment_gateway):
        """03:00 UTC on March 1st is still February 29th in Chicago."""
        temp_db.create_visit(sample_customer.id, date(2024, 1, 10), status="completed")

        result = run_monthly_billing_job(temp_db, payment_gateway, now=datetime(2024, 3, 1, 3, 0, tzinfo=UTC))

        assert result.invoice_numbers == ["INV-202401-1000"]
