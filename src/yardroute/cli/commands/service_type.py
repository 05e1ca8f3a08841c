"""Price book commands."""

import click
from yardroute.cli.error_handling import handle_domain_error
from yardroute.domain.errors import DomainError
from yardroute.domain.price_book import PriceBookService
from yardroute.utils.amount_parser import parse_amount


@click.group()
def service_type_group():
    """Manage the price book."""
    pass


@service_type_group.command("add")
@click.argument("name")
@click.option("--base-price", required=True, help="Price per visit for one dog")
@click.option("--extra-dog-price", default="0", show_default=True, help="Price per additional dog")
@click.option("--times-per-week", type=int, default=1, show_default=True)
@click.option(
    "--frequency",
    type=click.Choice(["weekly", "biweekly", "one-time", "new-start"]),
    default="weekly",
    show_default=True,
)
@click.pass_context
def add_service_type(
    ctx, name: str, base_price: str, extra_dog_price: str, times_per_week: int, frequency: str
):
    """Add a service type.

    Examples:
        yardroute service-type add "Weekly" --base-price 20 --extra-dog-price 5
    """
    service = PriceBookService(ctx.obj["db"])
    try:
        service_type_id = service.create_service_type(
            name=name,
            base_price=parse_amount(base_price),
            price_per_extra_unit=parse_amount(extra_dog_price),
            times_per_week=times_per_week,
            frequency=frequency,
        )
        click.echo(f"Created service type '{name}' (ID: {service_type_id})")
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)


@service_type_group.command("list")
@click.pass_context
def list_service_types(ctx):
    """List service types."""
    service = PriceBookService(ctx.obj["db"])

    service_types = service.list_service_types()
    if not service_types:
        click.echo("No service types found.")
        return

    click.echo("\nService types:")
    click.echo("-" * 70)
    for st in service_types:
        click.echo(
            f"ID: {st.id:3d} | {st.name:20s} | base: ${st.base_price} | "
            f"extra dog: ${st.price_per_extra_unit} | {st.times_per_week}x/week"
        )


def register_commands(cli):
    """Register price book commands with main CLI."""
    cli.add_command(service_type_group, name="service-type")
