"""Utility functions and helpers."""

from .formatting import format_currency, format_date, format_datetime
from .parsing import parse_due_date, parse_item_spec, parse_price, parse_quantity, require_name

__all__ = [
    'format_currency',
    'format_date',
    'format_datetime',
    'parse_due_date',
    'parse_item_spec',
    'parse_price',
    'parse_quantity',
    'require_name'
]
