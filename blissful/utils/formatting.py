"""Display formatting shared by the terminal UI, the CLI and the exporter."""

from datetime import date, datetime
from typing import Optional

CURRENCY_SYMBOL = 'R'
DATETIME_FORMAT = '%Y-%m-%d %H:%M'
DATE_FORMAT = '%Y-%m-%d'

def format_currency(amount: Optional[float]) -> str:
    """Format an amount in rand, e.g. R15.00."""
    return f"{CURRENCY_SYMBOL}{(amount or 0.0):.2f}"

def format_datetime(value: Optional[datetime]) -> str:
    return value.strftime(DATETIME_FORMAT) if value else ''

def format_date(value: Optional[date]) -> str:
    return value.strftime(DATE_FORMAT) if value else ''
