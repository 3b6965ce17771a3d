"""
Core CLI implementation for the order book.
"""

from pathlib import Path
from typing import Optional

import click

from ..config import APP_NAME, Config
from .base import run_command
from .logging import setup_logging, get_logger
from ..commands.export import export_orders
from ..commands.orders import orders
from ..commands.products import products
from ..commands.representatives import reps
from ..commands.utils import ConfigureCommand, ShowConfigCommand, TestConnectionCommand

@click.group()
@click.option('--debug', is_flag=True, help='Enable detailed debug output')
@click.option('--config-file', type=click.Path(dir_okay=False, path_type=Path),
              help='Use this database config file instead of the per-user one')
@click.pass_context
def cli(ctx, debug: bool, config_file: Optional[Path]):
    """Blissful Bites order book"""
    # Store debug flag in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    ctx.obj.setdefault('config_file', config_file)

    # The terminal UI sets up its own file logging
    if ctx.invoked_subcommand != 'tui':
        setup_logging(debug=debug)

    logger = get_logger('cli')
    if debug:
        logger.debug("Debug mode enabled")

    # Initialize config and store in context
    if 'config' not in ctx.obj:
        try:
            ctx.obj['config'] = Config.from_env(config_file=ctx.obj['config_file'])
        except ValueError as e:
            click.echo(f"Error initializing configuration: {str(e)}", err=True)
            ctx.exit(1)

    if debug:
        logger.debug(f"Using database: {ctx.obj['config'].database_url or '(not configured)'}")

    @ctx.call_on_close
    def _close_connection():
        session_manager = ctx.obj.get('session_manager')
        if session_manager is not None and ctx.obj.get('owns_session_manager'):
            session_manager.dispose()

@cli.command()
@click.option('--url', prompt='Turso Database URL', help='Database URL, e.g. libsql://name.turso.io')
@click.option('--token', prompt='Turso Auth Token', hide_input=True, help='Database auth token')
@click.pass_context
def configure(ctx, url: str, token: str):
    """Save the database connection details"""
    run_command(ctx, ConfigureCommand, url, token, ctx.obj.get('config_file'))

@cli.command('show-config')
@click.pass_context
def show_config(ctx):
    """Show the saved database connection details"""
    run_command(ctx, ShowConfigCommand, ctx.obj.get('config_file'))

@cli.command('test-connection')
@click.pass_context
def test_connection(ctx):
    """Test database connectivity"""
    run_command(ctx, TestConnectionCommand)

@cli.command()
@click.pass_context
def tui(ctx):
    """Open the interactive order book"""
    from ..tui.app import run_app

    config = ctx.obj['config']
    log_dir = config.log_dir or Path(click.get_app_dir(APP_NAME)) / 'logs'
    setup_logging(debug=ctx.obj['debug'], log_file=log_dir / 'blissful.log', level=config.log_level)

    run_app(config, config_file=ctx.obj.get('config_file'), session_manager=ctx.obj.get('session_manager'))

# Register command groups
cli.add_command(orders)
cli.add_command(products)
cli.add_command(reps)
cli.add_command(export_orders)
