"""Terminal user interface for the order book."""

from .app import BlissfulApp, run_app

__all__ = ['BlissfulApp', 'run_app']
