"""Product catalog commands."""

from typing import Optional

import click

from ..cli.base import BaseCommand, command_error_handler, run_command
from ..config import Config
from ..errors import NotFoundError
from ..utils.formatting import format_currency

class ListProductsCommand(BaseCommand):
    """List products ordered by name."""

    def __init__(self, config: Config, include_inactive: bool = False, session_manager=None):
        super().__init__(config, session_manager=session_manager)
        self.include_inactive = include_inactive

    @command_error_handler
    def execute(self) -> None:
        products = self.catalog.list_products(include_inactive=self.include_inactive)
        if not products:
            click.echo("No products found")
            return

        for product in products:
            flag = '' if product.active else '  [inactive]'
            click.echo(f"{product.id:>4}  {product.name:<30} {format_currency(product.price):>10}{flag}")

class AddProductCommand(BaseCommand):
    """Add a product to the catalog."""

    def __init__(self, config: Config, name: str, price: str, session_manager=None):
        super().__init__(config, session_manager=session_manager)
        self.name = name
        self.price = price

    @command_error_handler
    def execute(self) -> None:
        product = self.catalog.add_product(self.name, self.price)
        click.secho(f"Product added: {product.id} {product.name} {format_currency(product.price)}", fg='green')

class EditProductCommand(BaseCommand):
    """Change a product's name and/or price."""

    def __init__(self, config: Config, product_id: int, name: Optional[str], price: Optional[str],
                 session_manager=None):
        super().__init__(config, session_manager=session_manager)
        self.product_id = product_id
        self.name = name
        self.price = price

    @command_error_handler
    def execute(self) -> None:
        current = {p.id: p for p in self.catalog.list_products(include_inactive=True)}.get(self.product_id)
        if current is None:
            raise NotFoundError(f"Product {self.product_id} not found")

        product = self.catalog.edit_product(
            self.product_id,
            self.name if self.name is not None else current.name,
            self.price if self.price is not None else current.price,
        )
        click.secho(f"Product updated: {product.id} {product.name} {format_currency(product.price)}", fg='green')

class SetProductActiveCommand(BaseCommand):
    """Deactivate or reactivate a product."""

    def __init__(self, config: Config, product_id: int, active: bool, session_manager=None):
        super().__init__(config, session_manager=session_manager)
        self.product_id = product_id
        self.active = active

    @command_error_handler
    def execute(self) -> None:
        if self.active:
            self.catalog.activate_product(self.product_id)
            click.secho(f"Product {self.product_id} reactivated", fg='green')
        else:
            self.catalog.deactivate_product(self.product_id)
            click.secho(f"Product {self.product_id} deactivated; it is no longer offered for new orders", fg='green')

@click.group()
def products():
    """Product catalog management"""
    pass

@products.command('list')
@click.option('--all', 'include_inactive', is_flag=True, help='Include deactivated products')
@click.pass_context
def list_products(ctx, include_inactive: bool):
    """List products."""
    run_command(ctx, ListProductsCommand, include_inactive)

@products.command('add')
@click.argument('name')
@click.argument('price')
@click.pass_context
def add_product(ctx, name: str, price: str):
    """Add a product with its unit PRICE."""
    run_command(ctx, AddProductCommand, name, price)

@products.command('edit')
@click.argument('product_id', type=int)
@click.option('--name', help='New product name')
@click.option('--price', help='New unit price')
@click.pass_context
def edit_product(ctx, product_id: int, name: Optional[str], price: Optional[str]):
    """Rename or reprice a product."""
    run_command(ctx, EditProductCommand, product_id, name, price)

@products.command('deactivate')
@click.argument('product_id', type=int)
@click.confirmation_option(prompt='The product will no longer be available for new orders. Continue?')
@click.pass_context
def deactivate_product(ctx, product_id: int):
    """Hide a product from new orders."""
    run_command(ctx, SetProductActiveCommand, product_id, False)

@products.command('activate')
@click.argument('product_id', type=int)
@click.pass_context
def activate_product(ctx, product_id: int):
    """Offer a deactivated product again."""
    run_command(ctx, SetProductActiveCommand, product_id, True)
