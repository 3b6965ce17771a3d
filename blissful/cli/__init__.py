"""
CLI module for the order book.
Provides command-line interface functionality and utilities.
The click group itself lives in .main (entry point blissful.cli.main:cli).
"""

from .base import BaseCommand, command_error_handler, run_command
from .logging import setup_logging, get_logger

__all__ = ['BaseCommand', 'command_error_handler', 'run_command', 'setup_logging', 'get_logger']
