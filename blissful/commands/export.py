"""Export command."""

from pathlib import Path
from typing import Optional

import click

from ..cli.base import BaseCommand, command_error_handler, run_command
from ..config import Config
from ..processors.export import default_export_filename

class ExportOrdersCommand(BaseCommand):
    """Write the order history to a spreadsheet."""

    def __init__(self, config: Config, output: Optional[Path], session_manager=None):
        super().__init__(config, session_manager=session_manager)
        self.output = output or Path(default_export_filename())

    @command_error_handler
    def execute(self) -> None:
        path = self.exporter.export(self.output)
        click.secho(f"Orders have been exported successfully to: {path}", fg='green')

@click.command('export')
@click.argument('output', required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def export_orders(ctx, output: Optional[Path]):
    """Export all orders to an .xlsx file (default: orders_<today>.xlsx)."""
    run_command(ctx, ExportOrdersCommand, output)
