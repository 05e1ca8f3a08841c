"""Scheduled job commands: route generation, reminders and billing.

These are meant to be run by cron or a similar scheduler. No payment or SMS
provider is wired into the CLI, so autopay charges and reminders are
recorded as failed with a "not configured" reason.
"""

import click
from yardroute.cli.date_filters import resolve_cli_date, resolve_cli_month
from yardroute.cli.error_handling import echo_errors, handle_domain_error
from yardroute.config import DEFAULT_HORIZON_DAYS
from yardroute.domain.billing import BillingService
from yardroute.domain.reminders import ReminderService
from yardroute.domain.route_generator import RouteGeneratorService
from yardroute.integrations.base import UnconfiguredNotifier, UnconfiguredPaymentGateway
from yardroute.jobs import run_daily_jobs, run_monthly_billing_job


def _echo_generation(result) -> None:
    click.echo("\nRoute generation complete:")
    click.echo(f"  Created: {result.created} visits")
    click.echo(f"  Skipped: {result.skipped} already scheduled")
    echo_errors(result.errors)


def _echo_reminders(result, service_date=None) -> None:
    click.echo(f"\nReminders for {service_date} complete:" if service_date else "\nReminders complete:")
    click.echo(f"  Sent: {result.sent}")
    click.echo(f"  Skipped: {result.skipped}")
    click.echo(f"  Failed: {result.failed}")
    echo_errors(result.errors)


def _echo_billing(result, period=None) -> None:
    click.echo(f"\nBilling for {period} complete:" if period else "\nBilling complete:")
    click.echo(f"  Invoiced: {result.success}")
    click.echo(f"  Failed: {result.failed}")
    click.echo(f"  Charged: {result.charged}")
    click.echo(f"  Skipped: {result.skipped}")
    for number in result.invoice_numbers:
        click.echo(f"    {number}")
    echo_errors(result.errors)


@click.command("generate")
@click.option("--from", "from_date", help="First date to schedule (default: today in each rule's timezone)")
@click.option("--days", "horizon_days", type=click.IntRange(min=0), default=DEFAULT_HORIZON_DAYS, show_default=True)
@click.pass_context
def generate(ctx, from_date: str | None, horizon_days: int):
    """Create upcoming visits from recurring schedules.

    Safe to run repeatedly; existing visits are never duplicated.
    """
    today = None
    if from_date:
        try:
            today = resolve_cli_date(ctx, from_date)
        except ValueError as e:
            handle_domain_error(ctx, e)
            return

    result = RouteGeneratorService(ctx.obj["db"]).generate_upcoming(today=today, horizon_days=horizon_days)
    _echo_generation(result)


@click.command("remind")
@click.argument("service_date", default="tomorrow")
@click.pass_context
def remind(ctx, service_date: str):
    """Send reminders for visits on SERVICE_DATE (default: tomorrow)."""
    try:
        day = resolve_cli_date(ctx, service_date)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    result = ReminderService(ctx.obj["db"], UnconfiguredNotifier()).send_reminders_for(day)
    _echo_reminders(result, day)


@click.command("bill")
@click.argument("month", default="last month")
@click.pass_context
def bill(ctx, month: str):
    """Invoice completed visits for MONTH (YYYY-MM, default: last month)."""
    try:
        billing_month, billing_year = resolve_cli_month(ctx, month)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    result = BillingService(ctx.obj["db"], UnconfiguredPaymentGateway()).run_monthly_billing(
        billing_month, billing_year
    )
    _echo_billing(result, f"{billing_month}/{billing_year}")


@click.command("daily")
@click.option("--days", "horizon_days", type=click.IntRange(min=0), default=DEFAULT_HORIZON_DAYS, show_default=True)
@click.pass_context
def daily(ctx, horizon_days: int):
    """Run the daily job: generate visits, then remind tomorrow's customers."""
    generation, reminders = run_daily_jobs(
        ctx.obj["db"], UnconfiguredNotifier(), horizon_days=horizon_days, timezone=ctx.obj["timezone"]
    )
    _echo_generation(generation)
    _echo_reminders(reminders)


@click.command("monthly")
@click.pass_context
def monthly(ctx):
    """Run the monthly job: bill last month's completed visits."""
    result = run_monthly_billing_job(ctx.obj["db"], UnconfiguredPaymentGateway(), timezone=ctx.obj["timezone"])
    _echo_billing(result)


def register_commands(cli):
    """Register job commands with main CLI."""
    cli.add_command(generate)
    cli.add_command(remind)
    cli.add_command(bill)
    cli.add_command(daily)
    cli.add_command(monthly)
