"""Representative commands."""

import click

from ..cli.base import BaseCommand, command_error_handler, run_command
from ..config import Config

class ListRepresentativesCommand(BaseCommand):
    """List representatives ordered by name."""

    def __init__(self, config: Config, include_inactive: bool = False, session_manager=None):
        super().__init__(config, session_manager=session_manager)
        self.include_inactive = include_inactive

    @command_error_handler
    def execute(self) -> None:
        representatives = self.catalog.list_representatives(include_inactive=self.include_inactive)
        if not representatives:
            click.echo("No representatives found")
            return

        for rep in representatives:
            flag = '' if rep.active else '  [inactive]'
            click.echo(f"{rep.id:>4}  {rep.name}{flag}")

class AddRepresentativeCommand(BaseCommand):
    def __init__(self, config: Config, name: str, session_manager=None):
        super().__init__(config, session_manager=session_manager)
        self.name = name

    @command_error_handler
    def execute(self) -> None:
        rep = self.catalog.add_representative(self.name)
        click.secho(f"Representative added: {rep.id} {rep.name}", fg='green')

class RenameRepresentativeCommand(BaseCommand):
    def __init__(self, config: Config, representative_id: int, name: str, session_manager=None):
        super().__init__(config, session_manager=session_manager)
        self.representative_id = representative_id
        self.name = name

    @command_error_handler
    def execute(self) -> None:
        rep = self.catalog.rename_representative(self.representative_id, self.name)
        click.secho(f"Representative updated: {rep.id} {rep.name}", fg='green')

class SetRepresentativeActiveCommand(BaseCommand):
    def __init__(self, config: Config, representative_id: int, active: bool, session_manager=None):
        super().__init__(config, session_manager=session_manager)
        self.representative_id = representative_id
        self.active = active

    @command_error_handler
    def execute(self) -> None:
        if self.active:
            self.catalog.activate_representative(self.representative_id)
            click.secho(f"Representative {self.representative_id} reactivated", fg='green')
        else:
            self.catalog.deactivate_representative(self.representative_id)
            click.secho(f"Representative {self.representative_id} deactivated", fg='green')

@click.group()
def reps():
    """Representative management"""
    pass

@reps.command('list')
@click.option('--all', 'include_inactive', is_flag=True, help='Include deactivated representatives')
@click.pass_context
def list_representatives(ctx, include_inactive: bool):
    """List representatives."""
    run_command(ctx, ListRepresentativesCommand, include_inactive)

@reps.command('add')
@click.argument('name')
@click.pass_context
def add_representative(ctx, name: str):
    """Add a representative."""
    run_command(ctx, AddRepresentativeCommand, name)

@reps.command('rename')
@click.argument('representative_id', type=int)
@click.argument('name')
@click.pass_context
def rename_representative(ctx, representative_id: int, name: str):
    """Rename a representative."""
    run_command(ctx, RenameRepresentativeCommand, representative_id, name)

@reps.command('deactivate')
@click.argument('representative_id', type=int)
@click.confirmation_option(prompt='The representative will no longer be offered for new orders. Continue?')
@click.pass_context
def deactivate_representative(ctx, representative_id: int):
    """Hide a representative from new orders."""
    run_command(ctx, SetRepresentativeActiveCommand, representative_id, False)

@reps.command('activate')
@click.argument('representative_id', type=int)
@click.pass_context
def activate_representative(ctx, representative_id: int):
    """Offer a deactivated representative again."""
    run_command(ctx, SetRepresentativeActiveCommand, representative_id, True)
