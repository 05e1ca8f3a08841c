"""Recurrence rule commands."""

import click
from yardroute.cli.error_handling import handle_domain_error
from yardroute.domain.errors import DomainError
from yardroute.domain.recurrence import DAY_NAMES, FREQUENCIES, RecurrenceRuleService, describe_days
from yardroute.domain.schedule import local_today
from yardroute.utils.date_parser import parse_date


def parse_day_list(value: str) -> list[int]:
    """Parse "1,3,5" or "mon,wed,fri" into day numbers (Sunday=0)."""
    names = [name.lower() for name in DAY_NAMES]
    days = []
    for part in value.split(","):
        part = part.strip().lower()
        if not part:
            continue
        if part.isdigit():
            days.append(int(part))
        elif part[:3] in names:
            days.append(names.index(part[:3]))
        else:
            raise ValueError(f"Unknown day '{part}'")
    return days


@click.group()
def rule_group():
    """Manage recurring service schedules."""
    pass


@rule_group.command("add")
@click.argument("customer_id", type=int)
@click.option("--frequency", type=click.Choice(FREQUENCIES), default="weekly", show_default=True)
@click.option("--days", default="", help="Days of week, e.g. 'mon,wed,fri' or '1,3,5' (Sunday=0)")
@click.option("--start", "start_date", default="today", show_default=True, help="First service date")
@click.option("--window-start", default="08:00", show_default=True)
@click.option("--window-end", default="17:00", show_default=True)
@click.option("--timezone", help="IANA timezone of the rule (default: the business timezone)")
@click.option("--service-type", "service_type_id", type=int, help="Price book service type ID")
@click.option("--notes", help="Notes for the technician")
@click.pass_context
def add_rule(
    ctx,
    customer_id: int,
    frequency: str,
    days: str,
    start_date: str,
    window_start: str,
    window_end: str,
    timezone: str | None,
    service_type_id: int | None,
    notes: str | None,
):
    """Add a recurring schedule for a customer.

    Examples:
        yardroute rule add 1 --days mon,wed,fri --start 2024-01-01
        yardroute rule add 2 --frequency biweekly --days mon --service-type 3
    """
    service = RecurrenceRuleService(ctx.obj["db"])
    timezone = timezone or ctx.obj["timezone"]
    try:
        rule_id = service.create_rule(
            customer_id=customer_id,
            frequency=frequency,
            days_of_week=parse_day_list(days),
            start_date=parse_date(start_date, today=local_today(timezone)),
            timezone=timezone,
            window_start=window_start,
            window_end=window_end,
            service_type_id=service_type_id,
            notes=notes,
        )
        click.echo(f"Created {frequency} rule for customer {customer_id} (ID: {rule_id})")
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)


@rule_group.command("list")
@click.option("--customer", "customer_id", type=int, help="Only this customer's rules")
@click.pass_context
def list_rules(ctx, customer_id: int | None):
    """List recurring schedules."""
    service = RecurrenceRuleService(ctx.obj["db"])

    rules = service.list_rules(customer_id=customer_id)
    if not rules:
        click.echo("No rules found.")
        return

    click.echo("\nRules:")
    click.echo("-" * 80)
    for r in rules:
        state = "paused" if r.paused else "active"
        click.echo(
            f"ID: {r.id:3d} | customer {r.customer_id:3d} | {r.frequency:9s} | "
            f"{describe_days(r.days_of_week) or '-':15s} | from {r.start_date} | "
            f"{r.window_start}-{r.window_end} {r.timezone} | {state}"
        )


@rule_group.command("pause")
@click.argument("rule_id", type=int)
@click.pass_context
def pause_rule(ctx, rule_id: int):
    """Pause a schedule (no new visits are generated)."""
    service = RecurrenceRuleService(ctx.obj["db"])
    try:
        service.pause_rule(rule_id)
        click.echo(f"Paused rule {rule_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@rule_group.command("resume")
@click.argument("rule_id", type=int)
@click.pass_context
def resume_rule(ctx, rule_id: int):
    """Resume a paused schedule."""
    service = RecurrenceRuleService(ctx.obj["db"])
    try:
        service.resume_rule(rule_id)
        click.echo(f"Resumed rule {rule_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register rule commands with main CLI."""
    cli.add_command(rule_group, name="rule")
