"""CLI commands for the Sale aggregate and the dashboard."""

from __future__ import annotations

import click

from newsstand.application.dto import SaleDTO, SaleItemSpec
from newsstand.domain.exceptions import DomainException
from newsstand.infrastructure.bootstrap import dashboard_service, sale_service


def _parse_items(raw: str) -> list[SaleItemSpec]:
    """Parse '1:3,4:1' (product id : quantity) into SaleItemSpec list."""
    specs: list[SaleItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        id_str, qty_str = pair.split(":", 1)
        try:
            specs.append(SaleItemSpec(product_id=int(id_str), quantity=int(qty_str)))
        except ValueError:
            raise click.BadParameter(f"Invalid item '{pair}'; both parts must be integers.")
    return specs


def _display_sale(dto: SaleDTO) -> None:
    click.echo(f"Sale #{dto.id}  ({dto.sold_at:%Y-%m-%d %H:%M})")
    if dto.note:
        click.echo(f"Note: {dto.note}")
    click.echo()
    click.echo(f"  {'Item':<6} {'Product':<30} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*64}")
    for item in dto.items:
        click.echo(
            f"  {item.id:<6} {item.product_name[:30]:<30} {item.quantity:>5} "
            f"{item.unit_price:>10.2f} {item.line_total:>10.2f}"
        )
    click.echo(f"  {'-'*64}")
    click.echo(f"  {'Sale Total':<44} {dto.total:>20.2f}")


@click.command("create")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--note", default=None, help="Optional note.")
def sale_create(items: str, note: str | None) -> None:
    """Record a sale."""
    specs = _parse_items(items)

    try:
        dto = sale_service().create(specs, note=note or None)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_sale(dto)


@click.command("show")
@click.option("--id", "sale_id", required=True, type=int, help="Sale ID.")
def sale_show(sale_id: int) -> None:
    """Show one sale with its items."""
    dto = sale_service().get_by_id(sale_id)
    if dto is None:
        raise click.ClickException(f"Sale #{sale_id} not found")
    _display_sale(dto)


@click.command("list")
def sale_list() -> None:
    """List all sales, newest first."""
    sales = sale_service().list_all()
    if not sales:
        click.echo("No sales recorded.")
        return

    click.echo(f"{'ID':<6} {'Date':<17} {'Items':>5} {'Total':>12}  Note")
    click.echo("-" * 60)
    for s in sales:
        click.echo(
            f"{s.id:<6} {s.sold_at:%Y-%m-%d %H:%M} {len(s.items):>5} "
            f"{s.total:>12.2f}  {s.note or ''}"
        )


@click.command("remove")
@click.option("--id", "sale_id", required=True, type=int, help="Sale ID.")
def sale_remove(sale_id: int) -> None:
    """Delete a sale and its items."""
    try:
        sale_service().remove(sale_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale #{sale_id} removed.")


@click.command("note")
@click.option("--id", "sale_id", required=True, type=int, help="Sale ID.")
@click.option("--note", default="", help="New note; leave out to clear it.")
def sale_note(sale_id: int, note: str) -> None:
    """Replace the note of a sale."""
    try:
        dto = sale_service().update_note(sale_id, note)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_sale(dto)


@click.command("set-quantity")
@click.option("--id", "sale_id", required=True, type=int, help="Sale ID.")
@click.option("--item", "item_id", required=True, type=int, help="Item ID.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
def sale_set_quantity(sale_id: int, item_id: int, quantity: int) -> None:
    """Change the quantity of one item of a sale."""
    try:
        dto = sale_service().change_item_quantity(sale_id, item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_sale(dto)


@click.command("remove-item")
@click.option("--id", "sale_id", required=True, type=int, help="Sale ID.")
@click.option("--item", "item_id", required=True, type=int, help="Item ID.")
def sale_remove_item(sale_id: int, item_id: int) -> None:
    """Drop one item from a sale."""
    try:
        dto = sale_service().remove_item(sale_id, item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_sale(dto)


@click.command("dashboard")
def dashboard() -> None:
    """Show stock counts and this month's sales."""
    data = dashboard_service().get_dashboard_data()

    click.echo(f"Products in stock:      {data.products_in_stock}")
    click.echo(f"Products low on stock:  {data.low_stock_products}")
    click.echo(f"Sales this month:       {data.sales_this_month}")
    click.echo(f"Revenue this month:     R$ {data.sales_total_this_month:.2f}")
    click.echo()

    if not data.top_products:
        click.echo("No products sold this month.")
        return

    click.echo(f"  {'Best sellers':<30} {'Qty':>6} {'Value':>12}")
    click.echo(f"  {'-'*50}")
    for p in data.top_products:
        click.echo(f"  {p.product_name[:30]:<30} {p.quantity_sold:>6} {p.total_value:>12.2f}")
