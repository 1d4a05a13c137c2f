"""CLI commands for stock receiving."""

from __future__ import annotations

import click

from ims.application.access import Capability
from ims.application.list_stock_entries import ListStockEntriesHandler
from ims.application.receive_stock import ReceiveStockHandler
from ims.domain.exceptions import DomainException
from ims.infrastructure.cli.context import CliContext, pass_cli_context


@click.command("receive")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units received.")
@click.option("--invoice", required=True, help="Invoice / reference number.")
@pass_cli_context
def stock_receive(ctx: CliContext, product_id: str, quantity: int, invoice: str) -> None:
    """Record received goods and increase stock."""
    ctx.require(Capability.RECEIVE_STOCK)
    handler = ReceiveStockHandler(
        uow=ctx.container.unit_of_work(),
        max_conflict_retries=ctx.container.settings.max_conflict_retries,
    )

    try:
        dto = handler.handle(product_id=product_id, quantity=quantity, invoice_number=invoice)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Received {dto.quantity} of {dto.product_id} (invoice {dto.invoice_number}); "
        f"stock is now {dto.stock_after}"
    )


@click.command("entries")
@click.option("--product", "product_id", required=True, help="Product ID.")
@pass_cli_context
def stock_entries(ctx: CliContext, product_id: str) -> None:
    """List stock receipts for a product."""
    ctx.require(Capability.RECEIVE_STOCK)
    handler = ListStockEntriesHandler(uow=ctx.container.unit_of_work())

    try:
        entries = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not entries:
        click.echo("No stock entries found.")
        return

    click.echo(f"{'Created':<22} {'Invoice':<20} {'Qty':>6}")
    click.echo("-" * 50)
    for e in entries:
        click.echo(f"{e.created_at:<22} {e.invoice_number:<20} {e.quantity:>6}")
