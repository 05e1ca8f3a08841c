"""Main CLI entry point."""

import logging

import click
from yardroute.config import BUSINESS_TIMEZONE
from yardroute.database.factories import create_sqlite_database
from yardroute.domain.errors import ValidationError
from yardroute.domain.recurrence import get_zone

# Import and register all commands at module level
from yardroute.cli.commands import (
    customer,
    service_type,
    rule,
    visit,
    jobs,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides YARDROUTE_DB_PATH environment variable)",
    envvar="YARDROUTE_DB_PATH",
)
@click.option(
    "--timezone",
    default=BUSINESS_TIMEZONE,
    show_default=True,
    envvar="YARDROUTE_TIMEZONE",
    help="Business timezone used for \"today\", \"tomorrow\" and \"last month\"",
)
@click.option("-v", "--verbose", is_flag=True, help="Log progress (debug level)")
@click.pass_context
def cli(ctx, db_path: str | None, timezone: str, verbose: bool):
    """Yardroute - scheduling and billing for a yard service business.

    Turns customers' standing schedules into dated visits, sends
    night-before reminders and bills completed visits every month.
    """
    ctx.ensure_object(dict)

    try:
        get_zone(timezone)
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint="--timezone") from e
    ctx.obj["timezone"] = timezone

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
customer.register_commands(cli)
service_type.register_commands(cli)
rule.register_commands(cli)
visit.register_commands(cli)
jobs.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
