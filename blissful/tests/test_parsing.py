"""Tests for parsing and formatting of user-entered values."""
from datetime import date, datetime

import pytest

from ..errors import ValidationError
from ..utils.formatting import format_currency, format_date, format_datetime
from ..utils.parsing import parse_due_date, parse_item_spec, parse_price, parse_quantity, require_name

def test_parse_price():
    """Test unit price parsing."""
    assert parse_price('15.50') == 15.5
    assert parse_price('  7.5 ') == 7.5
    assert parse_price('R12.00') == 12.0  # Currency symbol
    assert parse_price('12,25') == 12.25  # Comma decimal separator
    assert parse_price(0) == 0.0
    assert parse_price(9.999) == 10.0  # Rounded to cents

    for bad in ('', 'abc', '-1', 'nan', 'inf', -0.5, None, [15]):
        with pytest.raises(ValidationError, match='Invalid price'):
            parse_price(bad)

def test_parse_quantity():
    """Test quantity parsing."""
    assert parse_quantity('3') == 3
    assert parse_quantity(' 12 ') == 12
    assert parse_quantity(1) == 1

    for bad in ('0', '-2', '1.5', 'two', '', 0, True):
        with pytest.raises(ValidationError, match='Invalid quantity'):
            parse_quantity(bad)

def test_parse_due_date():
    """Test due date parsing from text and date objects."""
    assert parse_due_date('2024-05-01') == datetime(2024, 5, 1)
    assert parse_due_date(date(2024, 5, 1)) == datetime(2024, 5, 1)
    assert parse_due_date(datetime(2024, 5, 1, 9, 30)) == datetime(2024, 5, 1, 9, 30)

    for bad in (None, '', '   ', '01/05/2024', '2024-13-01'):
        with pytest.raises(ValidationError, match='Invalid due date'):
            parse_due_date(bad)

def test_parse_item_spec():
    """Test PRODUCT_ID:QUANTITY parsing."""
    assert parse_item_spec('3:2') == (3, 2)
    assert parse_item_spec(' 4 : 10 ') == (4, 10)

    with pytest.raises(ValidationError):
        parse_item_spec('3')
    with pytest.raises(ValidationError, match='Invalid product id'):
        parse_item_spec('cake:2')
    with pytest.raises(ValidationError, match='Invalid quantity'):
        parse_item_spec('3:0')

def test_require_name():
    assert require_name('  Carrot Cake ') == 'Carrot Cake'
    with pytest.raises(ValidationError, match='product name'):
        require_name('   ', 'product name')
    with pytest.raises(ValidationError):
        require_name(None)

def test_formatting():
    """Test display formatting of amounts and dates."""
    assert format_currency(15) == 'R15.00'
    assert format_currency(30.5) == 'R30.50'
    assert format_currency(None) == 'R0.00'

    assert format_datetime(datetime(2023, 1, 1, 12, 0)) == '2023-01-01 12:00'
    assert format_date(datetime(2023, 1, 5, 18, 45)) == '2023-01-05'
    assert format_date(None) == ''
    assert format_datetime(None) == ''
