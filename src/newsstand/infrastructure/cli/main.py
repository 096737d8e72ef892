import logging

import click

from newsstand.infrastructure.cli.product_commands import (
    product_activate,
    product_add,
    product_deactivate,
    product_list,
    product_low_stock,
    product_remove,
    product_search,
    product_show,
    product_stock,
    product_update,
)
from newsstand.infrastructure.cli.sale_commands import (
    dashboard,
    sale_create,
    sale_list,
    sale_note,
    sale_remove,
    sale_remove_item,
    sale_set_quantity,
    sale_show,
)
from newsstand.infrastructure.settings import get_settings


@click.group()
def cli() -> None:
    """Newsstand point of sale and stock control."""
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def sale() -> None:
    """Manage sales."""


# Register subcommands
product.add_command(product_activate)
product.add_command(product_add)
product.add_command(product_deactivate)
product.add_command(product_list)
product.add_command(product_low_stock)
product.add_command(product_remove)
product.add_command(product_search)
product.add_command(product_show)
product.add_command(product_stock)
product.add_command(product_update)
sale.add_command(sale_create)
sale.add_command(sale_list)
sale.add_command(sale_note)
sale.add_command(sale_remove)
sale.add_command(sale_remove_item)
sale.add_command(sale_set_quantity)
sale.add_command(sale_show)
cli.add_command(dashboard)
