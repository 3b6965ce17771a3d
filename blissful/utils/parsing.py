"""Parsing of user-entered values.

Every parser raises ValidationError with a short message suitable for an
error dialog.
"""

import math
from datetime import date, datetime
from typing import Union

from ..errors import ValidationError
from .formatting import DATE_FORMAT

def parse_price(value: Union[str, float, int]) -> float:
    """Parse a unit price; must be a finite, non-negative number."""
    if isinstance(value, str):
        text = value.strip().lstrip('Rr').strip().replace(',', '.')
        try:
            price = float(text)
        except ValueError:
            raise ValidationError("Invalid price")
    else:
        try:
            price = float(value)
        except (TypeError, ValueError):
            raise ValidationError("Invalid price")

    if math.isnan(price) or math.isinf(price) or price < 0:
        raise ValidationError("Invalid price")
    return round(price, 2)

def parse_quantity(value: Union[str, int]) -> int:
    """Parse a line quantity; must be a positive whole number."""
    if isinstance(value, bool):
        raise ValidationError("Invalid quantity")
    if isinstance(value, int):
        quantity = value
    else:
        try:
            quantity = int(str(value).strip())
        except ValueError:
            raise ValidationError("Invalid quantity")

    if quantity <= 0:
        raise ValidationError("Invalid quantity")
    return quantity

def parse_due_date(value: Union[str, date, datetime, None]) -> datetime:
    """Parse a due date given as YYYY-MM-DD, a date or a datetime."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if value is None or not str(value).strip():
        raise ValidationError("Invalid due date: a due date is required")
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT)
    except ValueError:
        raise ValidationError(f"Invalid due date: {value!r} (expected YYYY-MM-DD)")

def parse_item_spec(spec: str):
    """Parse a PRODUCT_ID:QUANTITY pair as typed on the command line.

    Returns:
        Tuple of (product_id, quantity)
    """
    product_part, sep, quantity_part = spec.partition(':')
    if not sep:
        raise ValidationError(f"Invalid item {spec!r} (expected PRODUCT_ID:QUANTITY)")
    try:
        product_id = int(product_part.strip())
    except ValueError:
        raise ValidationError(f"Invalid product id in item {spec!r}")
    return product_id, parse_quantity(quantity_part)

def require_name(value: str, what: str = 'name') -> str:
    """Strip a name and reject it when blank."""
    name = (value or '').strip()
    if not name:
        raise ValidationError(f"A {what} is required")
    return name
