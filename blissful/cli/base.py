"""
Base command infrastructure for the order book CLI.
Provides common functionality and utilities for all commands.
"""

import functools
import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

import click

from ..config import Config
from ..db.connector import init_db
from ..db.session import SessionManager
from ..errors import BlissfulError
from ..processors import CatalogProcessor, OrderExporter, OrderProcessor

class BaseCommand(ABC):
    """Base class for all CLI commands."""

    def __init__(self, config: Config, session_manager: Optional[SessionManager] = None):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)
        self._session_manager = session_manager

        # Get debug status from click context
        ctx = click.get_current_context(silent=True)
        self.debug = bool(ctx and ctx.obj and ctx.obj.get('debug'))
        if self.debug:
            self.logger.debug(f"Debug mode enabled for {self.__class__.__name__}")

    @property
    def session_manager(self) -> SessionManager:
        """Connect on first use; the connection check runs once."""
        if self._session_manager is None:
            if self.debug:
                self.logger.debug("Opening database connection")
            self._session_manager = init_db(self.config)
        return self._session_manager

    @property
    def orders(self) -> OrderProcessor:
        return OrderProcessor(self.session_manager, debug=self.debug)

    @property
    def catalog(self) -> CatalogProcessor:
        return CatalogProcessor(self.session_manager, debug=self.debug)

    @property
    def exporter(self) -> OrderExporter:
        return OrderExporter(self.session_manager, debug=self.debug)

    @abstractmethod
    def execute(self) -> None:
        """Execute the command. Must be implemented by subclasses."""
        pass

def command_error_handler(f):
    """Decorator to report command errors consistently and abort."""
    @functools.wraps(f)
    def wrapper(self, *args, **kwargs):
        start = time.time()
        if self.debug:
            self.logger.debug(f"Starting command execution: {f.__name__}")

        try:
            result = f(self, *args, **kwargs)
        except BlissfulError as e:
            self.logger.debug(f"Command failed: {e}", exc_info=self.debug)
            click.secho(f"Error: {e}", fg='red', err=True)
            raise click.Abort()
        except click.ClickException:
            raise
        except Exception as e:
            self.logger.error(f"Command failed with unexpected error: {e}", exc_info=True)
            click.secho(f"Error: {e}", fg='red', err=True)
            raise click.Abort()

        if self.debug:
            self.logger.debug(f"Command completed in {time.time() - start:.3f}s")
        return result
    return wrapper

def run_command(ctx: click.Context, command_class, *args, **kwargs):
    """Build a command from the click context objects and execute it."""
    obj = ctx.ensure_object(dict)
    command = command_class(obj['config'], *args, session_manager=obj.get('session_manager'), **kwargs)
    try:
        return command.execute()
    finally:
        # Share the opened connection with later commands in the same process
        if command._session_manager is not None and obj.get('session_manager') is None:
            obj['session_manager'] = command._session_manager
            obj['owns_session_manager'] = True
