"""CLI commands for the Product catalog."""

from __future__ import annotations

import click

from ims.application.access import Capability
from ims.application.add_product import AddProductHandler
from ims.application.delete_product import DeleteProductHandler
from ims.application.list_products import GetProductHandler, ListProductsHandler
from ims.application.update_product import UpdateProductHandler
from ims.domain.exceptions import DomainException
from ims.infrastructure.cli.context import CliContext, pass_cli_context


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--description", default=None, help="Optional description.")
@pass_cli_context
def product_add(ctx: CliContext, name: str, price: str, description: str | None) -> None:
    """Add a new product to the catalog."""
    ctx.require(Capability.MANAGE_CATALOG)
    handler = AddProductHandler(uow=ctx.container.unit_of_work())

    try:
        dto = handler.handle(name=name, price=price, description=description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} '{dto.name}' added at {dto.price}")


@click.command("list")
@pass_cli_context
def product_list(ctx: CliContext) -> None:
    """List all products in the catalog."""
    ctx.require(Capability.VIEW_CATALOG)
    products = ListProductsHandler(uow=ctx.container.unit_of_work()).handle()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<32} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 72)
    for p in products:
        click.echo(f"{p.id:<32} {p.name:<20} {p.price:>10} {p.stock:>7}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@pass_cli_context
def product_show(ctx: CliContext, product_id: str) -> None:
    """Show a single product."""
    ctx.require(Capability.VIEW_CATALOG)
    handler = GetProductHandler(uow=ctx.container.unit_of_work())

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id}")
    click.echo(f"Name:        {dto.name}")
    click.echo(f"Description: {dto.description}")
    click.echo(f"Price:       {dto.price}")
    click.echo(f"Stock:       {dto.stock}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@click.option("--description", default=None, help="Optional description.")
@pass_cli_context
def product_update(
    ctx: CliContext, product_id: str, name: str, price: str, description: str | None
) -> None:
    """Update a product's name, description and price."""
    ctx.require(Capability.MANAGE_CATALOG)
    handler = UpdateProductHandler(
        uow=ctx.container.unit_of_work(),
        max_conflict_retries=ctx.container.settings.max_conflict_retries,
    )

    try:
        dto = handler.handle(
            product_id=product_id, name=name, price=price, description=description
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} updated: '{dto.name}' at {dto.price}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@pass_cli_context
def product_delete(ctx: CliContext, product_id: str) -> None:
    """Remove a product from the catalog."""
    ctx.require(Capability.MANAGE_CATALOG)
    handler = DeleteProductHandler(uow=ctx.container.unit_of_work())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted")
