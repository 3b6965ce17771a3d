"""Modal screens used by the order book TUI."""

from typing import Dict, List, Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Checkbox, DataTable, Input, Label, Select

from ..config import DatabaseConfig
from ..errors import BlissfulError, ValidationError
from ..processors.catalog import CatalogProcessor
from ..processors.records import OrderDraft, OrderLine, ProductRecord, RepresentativeRecord
from ..utils.formatting import format_currency, format_date
from ..utils.parsing import parse_due_date, parse_quantity

DIALOG_CSS = """
    align: center middle;

    #dialog {
        width: 80;
        height: auto;
        max-height: 90%;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }

    .title {
        text-style: bold;
        margin-bottom: 1;
    }

    .buttons {
        height: auto;
        margin-top: 1;
    }

    .buttons Button {
        margin-right: 1;
    }

    .row {
        height: auto;
    }
"""


class ErrorDialog(ModalScreen[None]):
    """Show an error; the user retries the action themselves."""

    DEFAULT_CSS = "ErrorDialog {" + DIALOG_CSS + "} ErrorDialog #dialog { border: thick $error; }"

    def __init__(self, message: str, title: str = "Error"):
        super().__init__()
        self.message = message
        self.title_text = title

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Label(self.title_text, classes="title")
            yield Label(self.message, id="message")
            with Horizontal(classes="buttons"):
                yield Button("OK", id="ok", variant="error")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(None)


class ConfirmDialog(ModalScreen[bool]):
    DEFAULT_CSS = "ConfirmDialog {" + DIALOG_CSS + "}"

    def __init__(self, title: str, question: str):
        super().__init__()
        self.title_text = title
        self.question = question

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Label(self.title_text, classes="title")
            yield Label(self.question)
            with Horizontal(classes="buttons"):
                yield Button("Yes", id="yes", variant="warning")
                yield Button("Cancel", id="cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "yes")


class DatabaseConfigScreen(ModalScreen[Optional[DatabaseConfig]]):
    """Edit the Turso URL and token. Dismisses with the new config or None."""

    DEFAULT_CSS = "DatabaseConfigScreen {" + DIALOG_CSS + "}"

    def __init__(self, existing: DatabaseConfig):
        super().__init__()
        self.existing = existing

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Label("Configure Turso Database Connection", classes="title")
            yield Label("Database URL:")
            yield Input(value=self.existing.database_url, placeholder="Turso Database URL", id="url")
            yield Label("Auth Token:")
            yield Input(value=self.existing.auth_token, placeholder="Turso Auth Token", password=True, id="token")
            with Horizontal(classes="buttons"):
                yield Button("Save", id="save", variant="primary")
                yield Button("Cancel", id="cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id != "save":
            self.dismiss(None)
            return
        self.dismiss(DatabaseConfig(
            database_url=self.query_one("#url", Input).value.strip(),
            auth_token=self.query_one("#token", Input).value.strip(),
        ))


class ExportDialog(ModalScreen[Optional[str]]):
    DEFAULT_CSS = "ExportDialog {" + DIALOG_CSS + "}"

    def __init__(self, default_path: str):
        super().__init__()
        self.default_path = default_path

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Label("Download Orders", classes="title")
            yield Label("Save spreadsheet as:")
            yield Input(value=self.default_path, id="path")
            with Horizontal(classes="buttons"):
                yield Button("Export", id="export", variant="primary")
                yield Button("Cancel", id="cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        path = self.query_one("#path", Input).value.strip()
        self.dismiss(path if event.button.id == "export" and path else None)


class OrderFormScreen(ModalScreen[Optional[OrderDraft]]):
    """Form for a new order or for editing one.

    Dismisses with the filled-in draft; saving is left to the caller.
    """

    DEFAULT_CSS = "OrderFormScreen {" + DIALOG_CSS + """}
    OrderFormScreen #lines {
        height: 8;
    }
    OrderFormScreen #quantity {
        width: 12;
    }
    OrderFormScreen #product {
        width: 40;
    }
    """

    def __init__(self, products: List[ProductRecord], representatives: List[RepresentativeRecord],
                 draft: Optional[OrderDraft] = None, title: str = "Add New Order"):
        super().__init__()
        self.products = products
        self.product_by_id: Dict[int, ProductRecord] = {p.id: p for p in products}
        self.representatives = representatives
        self.draft = draft
        self.title_text = title
        self.lines: List[OrderLine] = list(draft.lines) if draft else []

    def compose(self) -> ComposeResult:
        draft = self.draft
        rep_ids = {r.id for r in self.representatives}
        rep_kwargs = {}
        if draft and draft.representative_id in rep_ids:
            rep_kwargs['value'] = draft.representative_id

        with VerticalScroll(id="dialog"):
            yield Label(self.title_text, classes="title")
            yield Select([(r.name, r.id) for r in self.representatives], prompt="Select rep", id="rep", **rep_kwargs)
            yield Input(value=draft.client_name if draft else "", placeholder="Client Name", id="client")
            yield Input(value=draft.contact if draft else "", placeholder="Contact", id="contact")
            yield Input(
                value=format_date(parse_due_date(draft.due_date)) if draft and draft.due_date else "",
                placeholder="Due Date (YYYY-MM-DD)",
                id="due"
            )
            with Horizontal(classes="row"):
                yield Select(
                    [(f"{p.name} ({format_currency(p.price)})", p.id) for p in self.products if p.active],
                    prompt="Select product",
                    id="product"
                )
                yield Input(placeholder="Qty", id="quantity")
                yield Button("Add item", id="add-item")
            yield DataTable(id="lines")
            with Horizontal(classes="row"):
                yield Button("Remove selected item", id="remove-item")
                yield Label("", id="total")
            yield Checkbox("Needs Delivery", value=draft.needs_delivery if draft else False, id="delivery")
            yield Input(value=draft.delivery_address if draft else "", placeholder="Delivery Address", id="address")
            yield Input(value=draft.comment if draft else "", placeholder="Comment", id="comment")
            with Horizontal(classes="buttons"):
                yield Button("Save", id="save", variant="primary")
                yield Button("Cancel", id="cancel")

    def on_mount(self) -> None:
        table = self.query_one("#lines", DataTable)
        table.add_columns("Product", "Qty", "Price")
        table.cursor_type = "row"
        self._refresh_lines()

    def _line_price(self, line: OrderLine) -> float:
        product = self.product_by_id.get(line.product_id)
        return round(product.price * line.quantity, 2) if product else 0.0

    def _refresh_lines(self) -> None:
        table = self.query_one("#lines", DataTable)
        table.clear()
        for line in self.lines:
            product = self.product_by_id.get(line.product_id)
            table.add_row(
                product.name if product else f"#{line.product_id}",
                str(line.quantity),
                format_currency(self._line_price(line)),
            )
        total = sum(self._line_price(line) for line in self.lines)
        self.query_one("#total", Label).update(f"Total: {format_currency(total)}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button_id = event.button.id

        if button_id == "add-item":
            self.add_item()
        elif button_id == "remove-item":
            self.remove_item()
        elif button_id == "save":
            self.save()
        elif button_id == "cancel":
            self.dismiss(None)

    def add_item(self) -> None:
        product_id = self.query_one("#product", Select).value
        if not isinstance(product_id, int):
            self.app.push_screen(ErrorDialog("Select a product first"))
            return
        try:
            quantity = parse_quantity(self.query_one("#quantity", Input).value)
        except ValidationError as e:
            self.app.push_screen(ErrorDialog(str(e)))
            return

        self.lines.append(OrderLine(product_id, quantity))
        self.query_one("#quantity", Input).value = ""
        self._refresh_lines()

    def remove_item(self) -> None:
        table = self.query_one("#lines", DataTable)
        if not self.lines:
            return
        index = min(table.cursor_row, len(self.lines) - 1)
        del self.lines[index]
        self._refresh_lines()

    def build_draft(self) -> OrderDraft:
        """Collect the form values; raises ValidationError for unusable input."""
        due_text = self.query_one("#due", Input).value
        parse_due_date(due_text)
        if not self.lines:
            raise ValidationError("An order needs at least one item")

        rep_value = self.query_one("#rep", Select).value
        return OrderDraft(
            client_name=self.query_one("#client", Input).value,
            contact=self.query_one("#contact", Input).value,
            due_date=due_text,
            lines=list(self.lines),
            representative_id=rep_value if isinstance(rep_value, int) else None,
            needs_delivery=self.query_one("#delivery", Checkbox).value,
            delivery_address=self.query_one("#address", Input).value,
            comment=self.query_one("#comment", Input).value,
        )

    def save(self) -> None:
        try:
            draft = self.build_draft()
        except ValidationError as e:
            self.app.push_screen(ErrorDialog(str(e)))
            return
        self.dismiss(draft)


class CatalogScreen(ModalScreen[bool]):
    """Shared layout for the product and representative managers.

    Dismisses with True when anything was changed.
    """

    DEFAULT_CSS = """
    CatalogScreen {""" + DIALOG_CSS + """}
    CatalogScreen #rows {
        height: 12;
    }
    """

    heading = ""
    columns: tuple = ()

    def __init__(self, catalog: CatalogProcessor):
        super().__init__()
        self.catalog = catalog
        self.rows: list = []
        self.changed = False

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Label(self.heading, classes="title")
            yield DataTable(id="rows")
            with Horizontal(classes="row"):
                yield from self.compose_inputs()
            with Horizontal(classes="buttons"):
                yield Button("Add", id="add", variant="primary")
                yield Button("Save changes", id="save")
                yield Button("Deactivate / Activate", id="toggle", variant="warning")
                yield Button("Close", id="close")

    # Hooks every concrete screen overrides

    def compose_inputs(self) -> ComposeResult:
        """Yield the input widgets shown under the table."""
        raise NotImplementedError(f"{type(self).__name__} must override compose_inputs")

    def load_rows(self) -> list:
        """Return every record, inactive ones included."""
        raise NotImplementedError(f"{type(self).__name__} must override load_rows")

    def row_cells(self, row) -> tuple:
        """Return the table cells for one record."""
        raise NotImplementedError(f"{type(self).__name__} must override row_cells")

    def add(self) -> None:
        """Create a record from the inputs."""
        raise NotImplementedError(f"{type(self).__name__} must override add")

    def save(self, row) -> None:
        """Apply the inputs to the selected record."""
        raise NotImplementedError(f"{type(self).__name__} must override save")

    def set_active(self, row, active: bool) -> None:
        raise NotImplementedError(f"{type(self).__name__} must override set_active")

    def on_mount(self) -> None:
        table = self.query_one("#rows", DataTable)
        table.add_columns(*self.columns)
        table.cursor_type = "row"
        self.reload()

    def reload(self) -> None:
        try:
            self.rows = self.load_rows()
        except BlissfulError as e:
            self.app.push_screen(ErrorDialog(str(e)))
            self.rows = []

        table = self.query_one("#rows", DataTable)
        table.clear()
        for row in self.rows:
            table.add_row(*self.row_cells(row))

    def selected(self):
        table = self.query_one("#rows", DataTable)
        if not self.rows or table.cursor_row < 0 or table.cursor_row >= len(self.rows):
            return None
        return self.rows[table.cursor_row]

    def run_action(self, action) -> None:
        """Run a catalog change, report failures and refresh the table."""
        try:
            action()
        except BlissfulError as e:
            self.app.push_screen(ErrorDialog(str(e)))
            return
        self.changed = True
        self.reload()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button_id = event.button.id
        if button_id == "close":
            self.dismiss(self.changed)
        elif button_id == "add":
            self.run_action(self.add)
        elif button_id == "save":
            if self.selected() is not None:
                self.run_action(lambda: self.save(self.selected()))
        elif button_id == "toggle":
            self.toggle(self.selected())

    def toggle(self, row) -> None:
        if row is None:
            return
        if not row.active:
            self.run_action(lambda: self.set_active(row, True))
            return

        def _confirmed(confirm: bool) -> None:
            if confirm:
                self.run_action(lambda: self.set_active(row, False))

        self.app.push_screen(
            ConfirmDialog(
                f"Deactivate {row.name}",
                "Are you sure? It will no longer be available for new orders."
            ),
            _confirmed
        )


class ProductsScreen(CatalogScreen):
    heading = "Manage Products"
    columns = ("ID", "Name", "Price", "Status")

    def compose_inputs(self) -> ComposeResult:
        yield Input(placeholder="Product Name", id="name")
        yield Input(placeholder="Price", id="price")

    def load_rows(self) -> list:
        return self.catalog.list_products(include_inactive=True)

    def row_cells(self, product: ProductRecord) -> tuple:
        return (str(product.id), product.name, format_currency(product.price),
                "Active" if product.active else "Inactive")

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        product = self.selected()
        if product is not None:
            self.query_one("#name", Input).value = product.name
            self.query_one("#price", Input).value = f"{product.price:.2f}"

    def add(self) -> None:
        self.catalog.add_product(self.query_one("#name", Input).value, self.query_one("#price", Input).value)

    def save(self, product: ProductRecord) -> None:
        self.catalog.edit_product(product.id, self.query_one("#name", Input).value,
                                  self.query_one("#price", Input).value)

    def set_active(self, product: ProductRecord, active: bool) -> None:
        if active:
            self.catalog.activate_product(product.id)
        else:
            self.catalog.deactivate_product(product.id)


class RepresentativesScreen(CatalogScreen):
    heading = "Manage Representatives"
    columns = ("ID", "Name", "Status")

    def compose_inputs(self) -> ComposeResult:
        yield Input(placeholder="Representative Name", id="name")

    def load_rows(self) -> list:
        return self.catalog.list_representatives(include_inactive=True)

    def row_cells(self, rep: RepresentativeRecord) -> tuple:
        return (str(rep.id), rep.name, "Active" if rep.active else "Inactive")

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        rep = self.selected()
        if rep is not None:
            self.query_one("#name", Input).value = rep.name

    def add(self) -> None:
        self.catalog.add_representative(self.query_one("#name", Input).value)

    def save(self, rep: RepresentativeRecord) -> None:
        self.catalog.rename_representative(rep.id, self.query_one("#name", Input).value)

    def set_active(self, rep: RepresentativeRecord, active: bool) -> None:
        if active:
            self.catalog.activate_representative(rep.id)
        else:
            self.catalog.deactivate_representative(rep.id)
