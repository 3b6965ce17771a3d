"""
Command implementations for the order book CLI.
Each submodule provides specific command functionality.
"""

from .export import export_orders
from .orders import orders
from .products import products
from .representatives import reps
from .utils import ConfigureCommand, ShowConfigCommand, TestConnectionCommand

__all__ = [
    'export_orders',
    'orders',
    'products',
    'reps',
    'ConfigureCommand',
    'ShowConfigCommand',
    'TestConnectionCommand'
]
