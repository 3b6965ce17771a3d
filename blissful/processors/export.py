"""Spreadsheet export of the order history."""

from datetime import date
from pathlib import Path
from typing import List, Optional, Union

import openpyxl
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from ..db.models import Order, OrderItem, Product, Representative
from ..errors import ExportError, QueryError
from ..utils.formatting import format_currency, format_date, format_datetime
from .base import BaseProcessor

SHEET_NAME = 'Orders'

HEADERS = [
    'Order ID',
    'Representative',
    'Status',
    'Date',
    'Client Name',
    'Contact',
    'Due Date',
    'Product Name',
    'Product Quantity',
    'Product Unit Price',
    'Product Total',
    'Total Order Price',
    'Comment',
]

COLUMN_WIDTH = 15
HEADER_FILL = 'E0E0E0'

def default_export_filename(today: Optional[date] = None) -> str:
    """File name offered by default, e.g. orders_2024-05-01.xlsx."""
    return f"orders_{(today or date.today()).isoformat()}.xlsx"

def ensure_xlsx_suffix(path: Union[str, Path]) -> Path:
    path = Path(path)
    if path.suffix.lower() != '.xlsx':
        path = path.with_name(path.name + '.xlsx')
    return path

class OrderExporter(BaseProcessor):
    """Write every order line, completed or not, to an .xlsx workbook.

    Orders with several items take several rows; the order-level columns are
    repeated on each of them.
    """

    def _query(self):
        return (
            select(
                Order.id,
                Representative.name.label('representative_name'),
                Order.completed,
                Order.created_at,
                Order.client_name,
                Order.contact,
                Order.due_date,
                Product.name.label('product_name'),
                OrderItem.quantity,
                OrderItem.price.label('line_price'),
                Order.total_price,
                Order.comment,
            )
            .outerjoin(OrderItem, OrderItem.order_id == Order.id)
            .outerjoin(Product, OrderItem.product_id == Product.id)
            .outerjoin(Representative, Order.representative_id == Representative.id)
            .order_by(Order.created_at.desc(), Order.id, Product.name)
        )

    def fetch_rows(self) -> List[list]:
        """Run the export query and format each result row as cell values."""
        try:
            with self.read_session() as session:
                results = session.execute(self._query()).all()
        except SQLAlchemyError as e:
            raise QueryError(f"error querying orders: {e}") from e

        rows = []
        for row in results:
            rows.append([
                row.id,
                row.representative_name or '',
                'Completed' if row.completed else 'Pending',
                format_datetime(row.created_at),
                row.client_name or '',
                row.contact or '',
                format_date(row.due_date),
                row.product_name or '',
                row.quantity if row.quantity is not None else '',
                # Unit price as charged, not the current catalog price
                format_currency(row.line_price / row.quantity) if row.quantity else '',
                format_currency(row.line_price) if row.line_price is not None else '',
                format_currency(row.total_price),
                row.comment or '',
            ])
        return rows

    def export(self, path: Union[str, Path]) -> Path:
        """Write the workbook.

        Args:
            path: Target file; .xlsx is appended when missing

        Returns:
            Path: The file written

        Raises:
            QueryError: The export query failed
            ExportError: The file could not be written
        """
        target = ensure_xlsx_suffix(path)
        rows = self.fetch_rows()

        workbook = openpyxl.Workbook()
        sheet = workbook.active
        sheet.title = SHEET_NAME

        sheet.append(HEADERS)
        for row in rows:
            sheet.append(row)

        self._style(sheet)

        try:
            workbook.save(target)
        except OSError as e:
            raise ExportError(f"error saving Excel file: {e}") from e
        finally:
            workbook.close()

        self.logger.info(f"Exported {len(rows)} order lines to {target}")
        return target

    def _style(self, sheet) -> None:
        """Bold shaded header, fixed column widths and an auto-filter."""
        last_column = get_column_letter(len(HEADERS))
        try:
            header_font = Font(bold=True)
            header_fill = PatternFill(fill_type='solid', start_color=HEADER_FILL, end_color=HEADER_FILL)
            for cell in sheet[1]:
                cell.font = header_font
                cell.fill = header_fill
            for index in range(1, len(HEADERS) + 1):
                sheet.column_dimensions[get_column_letter(index)].width = COLUMN_WIDTH
        except (ValueError, TypeError) as e:
            # Styling is cosmetic; the data is still written
            self.logger.warning(f"Could not style header row: {e}")

        sheet.auto_filter.ref = f"A1:{last_column}{sheet.max_row}"
