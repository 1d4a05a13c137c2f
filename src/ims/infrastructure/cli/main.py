import click

from ims.application.access import Role
from ims.infrastructure.bootstrap import build_container
from ims.infrastructure.cli.context import CliContext
from ims.infrastructure.cli.order_commands import order_place, order_show
from ims.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from ims.infrastructure.cli.stock_commands import stock_entries, stock_receive
from ims.infrastructure.config import Settings
from ims.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role]),
    default=Role.ADMIN.value,
    envvar="IMS_ROLE",
    show_default=True,
    help="Role of the authenticated caller.",
)
@click.pass_context
def cli(ctx: click.Context, role: str) -> None:
    """IMS — Inventory & Order Management Service"""
    settings = Settings()
    configure_logging(settings.log_level, json=settings.log_json)

    container = build_container(settings)
    ctx.call_on_close(container.close)
    ctx.obj = CliContext(container=container, role=Role(role))


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def stock() -> None:
    """Receive stock and inspect receipts."""


@cli.group()
def order() -> None:
    """Place and look up orders."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
stock.add_command(stock_entries)
stock.add_command(stock_receive)
order.add_command(order_place)
order.add_command(order_show)
