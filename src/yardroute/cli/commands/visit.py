"""Visit commands."""

import click
from yardroute.cli.date_filters import resolve_cli_date
from yardroute.cli.error_handling import handle_domain_error
from yardroute.domain.errors import DomainError
from yardroute.domain.visit import SERVICE_KINDS, VisitService


@click.group()
def visit_group():
    """Manage individual visits."""
    pass


@visit_group.command("add")
@click.argument("customer_id", type=int)
@click.argument("visit_date")
@click.option("--kind", type=click.Choice(SERVICE_KINDS), default="one-time", show_default=True)
@click.option("--time", "scheduled_time", help="Scheduled time (HH:MM)")
@click.option("--non-billable", is_flag=True, help="Exclude this visit from billing")
@click.pass_context
def add_visit(ctx, customer_id: int, visit_date: str, kind: str, scheduled_time: str | None, non_billable: bool):
    """Schedule a single visit.

    Examples:
        yardroute visit add 1 2024-03-02 --kind new-start --time 09:30
    """
    service = VisitService(ctx.obj["db"])
    try:
        visit_id = service.schedule_visit(
            customer_id=customer_id,
            visit_date=resolve_cli_date(ctx, visit_date),
            service_kind=kind,
            scheduled_time=scheduled_time,
            billable=not non_billable,
        )
        click.echo(f"Scheduled visit (ID: {visit_id})")
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)


@visit_group.command("start")
@click.argument("visit_id", type=int)
@click.pass_context
def start_visit(ctx, visit_id: int):
    """Mark a visit in progress and start its timer."""
    service = VisitService(ctx.obj["db"])
    try:
        service.start_visit(visit_id)
        click.echo(f"Visit {visit_id} in progress")
    except DomainError as e:
        handle_domain_error(ctx, e)


@visit_group.command("complete")
@click.argument("visit_id", type=int)
@click.option("--minutes", type=int, help="Job duration (defaults to time since start)")
@click.pass_context
def complete_visit(ctx, visit_id: int, minutes: int | None):
    """Mark a visit completed."""
    service = VisitService(ctx.obj["db"])
    try:
        visit = service.complete_visit(visit_id, duration_minutes=minutes)
        click.echo(f"Visit {visit_id} completed")
        if visit.calculated_cost is not None:
            click.echo(f"  Duration: {visit.duration_minutes} min, cost: ${visit.calculated_cost}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@visit_group.command("list")
@click.argument("visit_date", default="today")
@click.pass_context
def list_visits(ctx, visit_date: str):
    """List visits on a date (default: today)."""
    service = VisitService(ctx.obj["db"])
    try:
        day = resolve_cli_date(ctx, visit_date)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    visits = service.list_visits_on(day)
    if not visits:
        click.echo(f"No visits on {day}.")
        return

    click.echo(f"\nVisits on {day}:")
    click.echo("-" * 70)
    for v in visits:
        billable = "" if v.billable else " (non-billable)"
        click.echo(
            f"ID: {v.id:3d} | customer {v.customer_id:3d} | {v.scheduled_time or '--:--'} | "
            f"{v.service_kind:9s} | {v.status}{billable}"
        )


def register_commands(cli):
    """Register visit commands with main CLI."""
    cli.add_command(visit_group, name="visit")
