"""Order commands: list, show, add, edit and complete orders."""

from typing import List, Optional, Tuple

import click

from ..cli.base import BaseCommand, command_error_handler, run_command
from ..config import Config
from ..processors.records import OrderDraft, OrderLine, OrderRecord
from ..utils.formatting import format_currency, format_date, format_datetime
from ..utils.parsing import parse_item_spec

def echo_order(order: OrderRecord) -> None:
    """Print one order with its items."""
    click.echo(f"Order {order.id}  [{order.status}]")
    click.echo(f"  Created:        {format_datetime(order.created_at)}")
    click.echo(f"  Due:            {format_date(order.due_date)}")
    click.echo(f"  Client:         {order.client_name}")
    click.echo(f"  Contact:        {order.contact}")
    click.echo(f"  Representative: {order.representative_name or '-'}")
    if order.needs_delivery:
        click.echo(f"  Delivery to:    {order.delivery_address}")
    if order.comment:
        click.echo(f"  Comment:        {order.comment}")
    for item in order.items:
        click.echo(f"    {item.quantity:>3} x {item.product_name:<30} {format_currency(item.price):>10}")
    click.echo(f"  Total:          {format_currency(order.total_price)}")

def parse_items(items: Tuple[str, ...]) -> List[OrderLine]:
    return [OrderLine(*parse_item_spec(spec)) for spec in items]

class ListOrdersCommand(BaseCommand):
    """List open orders, newest first."""

    @command_error_handler
    def execute(self) -> None:
        orders = self.orders.list_open_orders()
        if not orders:
            click.echo("No open orders")
            return

        click.echo(f"{len(orders)} open orders:")
        for order in orders:
            click.echo(
                f"{order.id:>5}  {format_datetime(order.created_at)}  {order.client_name:<20} "
                f"{order.items_summary:<40} {format_currency(order.total_price):>10}  "
                f"{order.representative_name or '-':<15} due {format_date(order.due_date)}"
            )

class ShowOrderCommand(BaseCommand):
    def __init__(self, config: Config, order_id: int, session_manager=None):
        super().__init__(config, session_manager=session_manager)
        self.order_id = order_id

    @command_error_handler
    def execute(self) -> None:
        echo_order(self.orders.get_order(self.order_id))

class AddOrderCommand(BaseCommand):
    """Record a new order."""

    def __init__(self, config: Config, draft_fields: dict, items: Tuple[str, ...], session_manager=None):
        super().__init__(config, session_manager=session_manager)
        self.draft_fields = draft_fields
        self.items = items

    @command_error_handler
    def execute(self) -> None:
        draft = OrderDraft(lines=parse_items(self.items), **self.draft_fields)
        order = self.orders.create_order(draft)
        click.secho(f"Order {order.id} saved, total {format_currency(order.total_price)}", fg='green')
        echo_order(order)

class EditOrderCommand(BaseCommand):
    """Change an order; options left out keep their current value."""

    def __init__(self, config: Config, order_id: int, changes: dict, items: Tuple[str, ...],
                 clear_representative: bool = False, session_manager=None):
        super().__init__(config, session_manager=session_manager)
        self.order_id = order_id
        self.changes = changes
        self.items = items
        self.clear_representative = clear_representative

    @command_error_handler
    def execute(self) -> None:
        current = self.orders.get_order(self.order_id)
        draft = OrderDraft.from_record(current)
        for field_name, value in self.changes.items():
            if value is not None:
                setattr(draft, field_name, value)
        if self.clear_representative:
            draft.representative_id = None
        if self.items:
            draft.lines = parse_items(self.items)

        order = self.orders.edit_order(self.order_id, draft)
        click.secho(f"Order {order.id} updated, total {format_currency(order.total_price)}", fg='green')
        echo_order(order)

class SetOrderCompletedCommand(BaseCommand):
    def __init__(self, config: Config, order_id: int, completed: bool, session_manager=None):
        super().__init__(config, session_manager=session_manager)
        self.order_id = order_id
        self.completed = completed

    @command_error_handler
    def execute(self) -> None:
        self.orders.set_completed(self.order_id, self.completed)
        state = 'completed' if self.completed else 'pending'
        click.secho(f"Order {self.order_id} marked {state}", fg='green')

@click.group()
def orders():
    """Order management"""
    pass

@orders.command('list')
@click.pass_context
def list_orders(ctx):
    """List open orders."""
    run_command(ctx, ListOrdersCommand)

@orders.command('show')
@click.argument('order_id', type=int)
@click.pass_context
def show_order(ctx, order_id: int):
    """Show one order with its items."""
    run_command(ctx, ShowOrderCommand, order_id)

@orders.command('add')
@click.option('--client', required=True, help='Client name')
@click.option('--contact', default='', help='Phone number or e-mail')
@click.option('--due', required=True, help='Due date (YYYY-MM-DD)')
@click.option('--rep', 'representative_id', type=int, help='Representative id')
@click.option('--delivery/--collect', default=False, help='Whether the order is delivered')
@click.option('--address', default='', help='Delivery address')
@click.option('--comment', default='', help='Free-text comment')
@click.option('--item', 'items', multiple=True, required=True, metavar='PRODUCT_ID:QTY',
              help='Product and quantity; repeat for more items')
@click.pass_context
def add_order(ctx, client, contact, due, representative_id, delivery, address, comment, items):
    """Record a new order."""
    draft_fields = {
        'client_name': client,
        'contact': contact,
        'due_date': due,
        'representative_id': representative_id,
        'needs_delivery': delivery,
        'delivery_address': address,
        'comment': comment,
    }
    run_command(ctx, AddOrderCommand, draft_fields, items)

@orders.command('edit')
@click.argument('order_id', type=int)
@click.option('--client', help='Client name')
@click.option('--contact', help='Phone number or e-mail')
@click.option('--due', help='Due date (YYYY-MM-DD)')
@click.option('--rep', 'representative_id', type=int, help='Representative id')
@click.option('--no-rep', 'clear_rep', is_flag=True, help='Remove the representative from the order')
@click.option('--delivery/--collect', default=None, help='Whether the order is delivered')
@click.option('--address', help='Delivery address')
@click.option('--comment', help='Free-text comment')
@click.option('--item', 'items', multiple=True, metavar='PRODUCT_ID:QTY',
              help='Replacement items; when given, all current items are replaced')
@click.pass_context
def edit_order(ctx, order_id, client, contact, due, representative_id, clear_rep, delivery, address, comment, items):
    """Edit an order, replacing its items when --item is given."""
    if clear_rep and representative_id is not None:
        raise click.UsageError("--rep and --no-rep cannot be used together")
    changes = {
        'client_name': client,
        'contact': contact,
        'due_date': due,
        'representative_id': representative_id,
        'needs_delivery': delivery,
        'delivery_address': address,
        'comment': comment,
    }
    run_command(ctx, EditOrderCommand, order_id, changes, items, clear_representative=clear_rep)

@orders.command('complete')
@click.argument('order_id', type=int)
@click.pass_context
def complete_order(ctx, order_id: int):
    """Mark an order as completed."""
    run_command(ctx, SetOrderCompletedCommand, order_id, True)

@orders.command('reopen')
@click.argument('order_id', type=int)
@click.pass_context
def reopen_order(ctx, order_id: int):
    """Mark a completed order as pending again."""
    run_command(ctx, SetOrderCompletedCommand, order_id, False)
