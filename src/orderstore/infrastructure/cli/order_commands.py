"""CLI commands for the Order repository.

Each command performs exactly one repository operation.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

import click

from orderstore.domain.exceptions import DomainException
from orderstore.domain.model.order import LineItem, Order
from orderstore.domain.repository.order_repository import START_CURSOR, FindAllPage
from orderstore.infrastructure.bootstrap import order_repository
from orderstore.infrastructure.config import get_settings


def _parse_uuid(raw: str, what: str) -> UUID:
    try:
        return UUID(raw.strip())
    except ValueError:
        raise click.BadParameter(f"Invalid {what} '{raw}'. Expected a UUID.")


def _parse_items(raw: str) -> list[LineItem]:
    """Parse 'ITEM_UUID:2:500,ITEM_UUID:1:250' into LineItem list."""
    items: list[LineItem] = []
    if not raw.strip():
        return items
    for triple in raw.split(","):
        triple = triple.strip()
        parts = triple.rsplit(":", 2)
        if len(parts) != 3:
            raise click.BadParameter(
                f"Invalid item format '{triple}'. Expected 'ItemID:Quantity:Price'."
            )
        item_id, qty_str, price_str = parts
        try:
            qty, price = int(qty_str), int(price_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity or price in '{triple}'."
            )
        items.append(
            LineItem(item_id=_parse_uuid(item_id, "item ID"), quantity=qty, price=price)
        )
    return items


def _parse_timestamp(ctx, param, value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Invalid ISO-8601 timestamp '{value}'.")


def _build_order(
    order_id: int,
    customer: str,
    items: str,
    created_at: datetime | None,
    shipped_at: datetime | None,
    completed_at: datetime | None,
) -> Order:
    return Order(
        order_id=order_id,
        customer_id=_parse_uuid(customer, "customer ID"),
        line_items=_parse_items(items),
        created_at=created_at,
        shipped_at=shipped_at,
        completed_at=completed_at,
    )


def _display_order(order: Order) -> None:
    """Shared formatting for displaying an order."""

    def fmt(ts: datetime | None) -> str:
        return ts.isoformat() if ts is not None else "-"

    click.echo(f"Order #{order.order_id}")
    click.echo(f"Customer:  {order.customer_id}")
    click.echo(f"Created:   {fmt(order.created_at)}")
    click.echo(f"Shipped:   {fmt(order.shipped_at)}")
    click.echo(f"Completed: {fmt(order.completed_at)}")
    click.echo()
    click.echo(f"  {'Item':<36} {'Qty':>5} {'Price':>10}")
    click.echo(f"  {'-'*53}")
    for item in order.line_items:
        click.echo(f"  {str(item.item_id):<36} {item.quantity:>5} {item.price:>10}")
    click.echo(f"  {'-'*53}")


def _order_options(func):
    """Options shared by create and update (both write a whole order)."""
    decorators = [
        click.option("--id", "order_id", required=True, type=int, help="Order ID."),
        click.option("--customer", required=True, help="Customer UUID."),
        click.option("--items", default="", help="Items as 'ItemID:Qty:Price,...'."),
        click.option("--created-at", callback=_parse_timestamp, help="ISO-8601 timestamp."),
        click.option("--shipped-at", callback=_parse_timestamp, help="ISO-8601 timestamp."),
        click.option("--completed-at", callback=_parse_timestamp, help="ISO-8601 timestamp."),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


@click.command("create")
@_order_options
def order_create(
    order_id: int,
    customer: str,
    items: str,
    created_at: datetime | None,
    shipped_at: datetime | None,
    completed_at: datetime | None,
) -> None:
    """Store a new order."""
    try:
        order = _build_order(order_id, customer, items, created_at, shipped_at, completed_at)
        order_repository().insert(order)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} created.")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show an existing order."""
    try:
        order = order_repository().find_by_id(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(order)


@click.command("update")
@_order_options
def order_update(
    order_id: int,
    customer: str,
    items: str,
    created_at: datetime | None,
    shipped_at: datetime | None,
    completed_at: datetime | None,
) -> None:
    """Replace an existing order."""
    try:
        order = _build_order(order_id, customer, items, created_at, shipped_at, completed_at)
        order_repository().update(order)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} updated.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
def order_delete(order_id: int) -> None:
    """Delete an order."""
    try:
        order_repository().delete_by_id(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} deleted.")


@click.command("list")
@click.option("--size", type=int, default=None, help="Page size.")
@click.option("--cursor", default=START_CURSOR, show_default=True, help="Cursor from a previous page.")
def order_list(size: int | None, cursor: str) -> None:
    """List one page of orders."""
    if size is None:
        size = get_settings().default_page_size

    try:
        result = order_repository().find_all(FindAllPage(size=size, cursor=cursor))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for order in result.orders:
        click.echo(
            f"#{order.order_id:<20} {str(order.customer_id):<36} {len(order.line_items):>3} items"
        )
    if result.exhausted:
        click.echo("Next cursor: end")
    else:
        click.echo(f"Next cursor: {result.next_cursor}")
