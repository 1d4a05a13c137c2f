"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from ims.application.access import Capability
from ims.application.dto import OrderDTO, OrderLineSpec
from ims.application.get_order import GetOrderHandler
from ims.application.place_order import PlaceOrderHandler
from ims.domain.exceptions import DomainException
from ims.infrastructure.cli.context import CliContext, pass_cli_context


def _parse_items(raw: str) -> list[OrderLineSpec]:
    """Parse 'ID:3,ID:5' into OrderLineSpec list."""
    specs: list[OrderLineSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderLineSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}")
    click.echo(f"Customer: {dto.customer_document}")
    click.echo(f"Seller:   {dto.seller_name}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<32} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*60}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<32} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Order Total':<38} {dto.total:>21}")


@click.command("place")
@click.option("--customer", required=True, help="Customer document / identifier.")
@click.option("--seller", required=True, help="Seller name.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@pass_cli_context
def order_place(ctx: CliContext, customer: str, seller: str, items: str) -> None:
    """Place a sales order and deduct stock."""
    ctx.require(Capability.PLACE_ORDERS)
    specs = _parse_items(items)

    handler = PlaceOrderHandler(
        uow=ctx.container.unit_of_work(),
        publisher=ctx.container.publisher,
        max_conflict_retries=ctx.container.settings.max_conflict_retries,
    )

    try:
        dto = handler.handle(customer_document=customer, seller_name=seller, item_specs=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Order placed.")
    _display_order(dto)
    click.echo()
    for product_id, stock in dto.remaining_stock.items():
        click.echo(f"  Remaining stock for {product_id}: {stock}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@pass_cli_context
def order_show(ctx: CliContext, order_id: str) -> None:
    """Show details of an existing order."""
    ctx.require(Capability.VIEW_ORDERS)
    handler = GetOrderHandler(uow=ctx.container.unit_of_work())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)
