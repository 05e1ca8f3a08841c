"""Customer management commands."""

import click
from yardroute.cli.error_handling import handle_domain_error
from yardroute.domain.customer import CustomerService
from yardroute.domain.errors import DomainError


@click.group()
def customer_group():
    """Manage customers."""
    pass


@customer_group.command("add")
@click.argument("name")
@click.option("--address", required=True, help="Service address")
@click.option("--phone", required=True, help="Phone number for SMS reminders")
@click.option("--email", help="Email address")
@click.option("--dogs", type=int, default=1, show_default=True, help="Number of dogs")
@click.option("--service-type", "service_type_id", type=int, help="Price book service type ID")
@click.option("--autopay/--no-autopay", default=False, help="Charge invoices automatically")
@click.option("--payment-customer", help="Payment provider customer reference")
@click.option("--payment-method", help="Saved payment method reference")
@click.option("--sms/--no-sms", default=True, help="Send SMS reminders")
@click.pass_context
def add_customer(
    ctx,
    name: str,
    address: str,
    phone: str,
    email: str | None,
    dogs: int,
    service_type_id: int | None,
    autopay: bool,
    payment_customer: str | None,
    payment_method: str | None,
    sms: bool,
):
    """Add a customer.

    Examples:
        yardroute customer add "Jane Doe" --address "12 Elm St" --phone "+15550100" --dogs 2
        yardroute customer add "Bob" --address "3 Oak Ave" --phone "+15550101" --service-type 1 \\
            --autopay --payment-customer cus_123 --payment-method pm_456
    """
    service = CustomerService(ctx.obj["db"])
    try:
        customer_id = service.create_customer(
            name=name,
            address=address,
            phone=phone,
            email=email,
            dog_count=dogs,
            service_type_id=service_type_id,
            autopay_enabled=autopay,
            payment_customer_ref=payment_customer,
            payment_method_ref=payment_method,
            sms_opt_in=sms,
        )
        click.echo(f"Created customer '{name}' (ID: {customer_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@customer_group.command("list")
@click.pass_context
def list_customers(ctx):
    """List all customers."""
    service = CustomerService(ctx.obj["db"])

    customers = service.list_customers()
    if not customers:
        click.echo("No customers found.")
        return

    click.echo("\nCustomers:")
    click.echo("-" * 80)
    for c in customers:
        autopay = "autopay" if c.autopay_enabled else "invoice"
        click.echo(
            f"ID: {c.id:3d} | {c.name:20s} | {c.status:8s} | dogs: {c.dog_count} | {autopay:7s} | {c.address}"
        )


@customer_group.command("deactivate")
@click.argument("customer_id", type=int)
@click.pass_context
def deactivate_customer(ctx, customer_id: int):
    """Stop billing a customer."""
    service = CustomerService(ctx.obj["db"])
    try:
        service.set_status(customer_id, "inactive")
        click.echo(f"Customer {customer_id} deactivated")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register customer commands with main CLI."""
    cli.add_command(customer_group, name="customer")
