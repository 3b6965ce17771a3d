"""
Utility commands for the order book CLI.
Provides connection setup and diagnostics.
"""

from pathlib import Path
from typing import Optional

import click

from ...cli.base import BaseCommand, command_error_handler
from ...config import Config, DatabaseConfig, get_config_file_path

def mask_token(token: str) -> str:
    """Show only the last four characters of a secret."""
    if not token:
        return '(not set)'
    if len(token) <= 4:
        return '*' * len(token)
    return '*' * 8 + token[-4:]

class TestConnectionCommand(BaseCommand):
    """Command to test database connectivity."""

    @command_error_handler
    def execute(self) -> None:
        """Execute the connection test."""
        self.logger.info("Testing database connection...")
        self.session_manager.ping(timeout=self.config.connect_timeout)
        click.secho("Successfully connected to the database!", fg='green')

class ConfigureCommand(BaseCommand):
    """Save the database URL and auth token."""

    def __init__(self, config: Config, database_url: str, auth_token: str,
                 config_file: Optional[Path] = None, session_manager=None):
        super().__init__(config, session_manager=session_manager)
        self.database_url = database_url
        self.auth_token = auth_token
        self.config_file = config_file

    @command_error_handler
    def execute(self) -> None:
        saved = DatabaseConfig(database_url=self.database_url.strip(), auth_token=self.auth_token.strip())
        path = saved.save(self.config_file)
        saved.apply_to_env()

        self.config.database_url = saved.database_url
        self.config.auth_token = saved.auth_token

        click.secho(f"Database configuration saved to {path}", fg='green')
        if not saved.is_valid():
            click.secho("Warning: configuration is incomplete; both URL and token are required", fg='yellow')

class ShowConfigCommand(BaseCommand):
    """Print the saved configuration with the token masked."""

    def __init__(self, config: Config, config_file: Optional[Path] = None, session_manager=None):
        super().__init__(config, session_manager=session_manager)
        self.config_file = config_file

    @command_error_handler
    def execute(self) -> None:
        path = Path(self.config_file) if self.config_file else get_config_file_path()
        saved = DatabaseConfig.load(path)

        click.echo(f"Config file:  {path}")
        click.echo(f"Database URL: {saved.database_url or '(not set)'}")
        click.echo(f"Auth token:   {mask_token(saved.auth_token)}")
        if saved.is_valid():
            click.secho("Configuration is complete", fg='green')
        else:
            click.secho("Configuration is incomplete", fg='yellow')

__all__ = ['TestConnectionCommand', 'ConfigureCommand', 'ShowConfigCommand', 'mask_token']
