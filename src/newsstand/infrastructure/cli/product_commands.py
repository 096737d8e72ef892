"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from newsstand.application.dto import ProductDTO
from newsstand.domain.exceptions import DomainException
from newsstand.infrastructure.bootstrap import product_service


def _print_products(products: list[ProductDTO]) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<30} {'Price':>10} {'Stock':>7} {'Barcode':<15} {'Active':<6}")
    click.echo("-" * 79)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name[:30]:<30} {p.price:>10.2f} {p.stock_quantity:>7} "
            f"{p.barcode or '-':<15} {'yes' if p.active else 'no':<6}"
        )


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--price", required=True, help="Sell price (e.g. 5.50).")
@click.option("--quantity", default=0, type=int, show_default=True, help="Initial stock.")
@click.option("--barcode", default=None, help="Optional unique barcode.")
def product_add(
    name: str, description: str, price: str, quantity: int, barcode: str | None
) -> None:
    """Add a new product to the catalogue."""
    try:
        dto = product_service().create(name, description, price, quantity, barcode)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}' added at R$ {dto.price:.2f}")


@click.command("list")
@click.option("--active", "active_only", is_flag=True, default=False, help="Only active products.")
def product_list(active_only: bool) -> None:
    """List products in the catalogue."""
    service = product_service()
    _print_products(service.list_active() if active_only else service.list_all())


@click.command("search")
@click.argument("term")
def product_search(term: str) -> None:
    """Search products by name or description."""
    _print_products(product_service().search_by_name(term))


@click.command("low-stock")
@click.option("--threshold", default=None, type=int, help="Override the configured threshold.")
def product_low_stock(threshold: int | None) -> None:
    """List active products that need restocking."""
    _print_products(product_service().list_low_stock(threshold))


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_show(product_id: int) -> None:
    """Show one product."""
    dto = product_service().get_by_id(product_id)
    if dto is None:
        raise click.ClickException(f"Product with ID {product_id} not found")

    click.echo(f"Product #{dto.id}  ({'active' if dto.active else 'inactive'})")
    click.echo(f"Name:        {dto.name}")
    click.echo(f"Description: {dto.description}")
    click.echo(f"Price:       R$ {dto.price:.2f}")
    click.echo(f"Stock:       {dto.stock_quantity}")
    click.echo(f"Barcode:     {dto.barcode or '-'}")
    click.echo(f"Registered:  {dto.created_at:%Y-%m-%d %H:%M}")


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--price", required=True, help="Sell price (e.g. 5.50).")
@click.option("--barcode", default=None, help="Barcode (omit to clear).")
def product_update(
    product_id: int, name: str, description: str, price: str, barcode: str | None
) -> None:
    """Replace a product's name, description, price and barcode."""
    try:
        dto = product_service().update(product_id, name, description, price, barcode)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} updated.")


@click.command("stock")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units received.")
def product_stock(product_id: int, quantity: int) -> None:
    """Add received units to a product's stock."""
    try:
        product_service().add_stock(product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Added {quantity} unit(s) to product #{product_id}.")


@click.command("activate")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_activate(product_id: int) -> None:
    """Put a product back on sale."""
    try:
        product_service().activate(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} activated.")


@click.command("deactivate")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_deactivate(product_id: int) -> None:
    """Take a product off sale without deleting it."""
    try:
        product_service().deactivate(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deactivated.")


@click.command("remove")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_remove(product_id: int) -> None:
    """Delete a product that has never been sold."""
    try:
        product_service().remove(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} removed.")
