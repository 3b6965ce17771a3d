# Terminal UI for taking and tracking bakery orders

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, DataTable, Footer, Header, Label

from ..config import Config, DatabaseConfig
from ..db.connector import init_db
from ..db.session import SessionManager
from ..errors import BlissfulError
from ..processors import CatalogProcessor, OrderExporter, OrderProcessor
from ..processors.export import default_export_filename
from ..processors.records import OrderDraft, OrderRecord, ProductRecord, RepresentativeRecord
from ..utils.formatting import format_currency, format_date, format_datetime
from .dialogs import (
    DatabaseConfigScreen,
    ErrorDialog,
    ExportDialog,
    OrderFormScreen,
    ProductsScreen,
    RepresentativesScreen,
)

logger = logging.getLogger(__name__)


class OrdersTable(DataTable):
    """Open orders, newest first"""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.orders: List[OrderRecord] = []

    def on_mount(self) -> None:
        self.add_columns("Date", "Client", "Items", "Total", "Representative", "Due", "Status")
        self.cursor_type = "row"

    def show_orders(self, orders: List[OrderRecord]) -> None:
        self.orders = orders
        self.clear()
        for order in orders:
            items = order.items_summary
            self.add_row(
                format_datetime(order.created_at),
                order.client_name,
                items[:50] + "..." if len(items) > 50 else items,
                Text(format_currency(order.total_price), justify="right"),
                order.representative_name,
                self._due_text(order),
                order.status,
                key=str(order.id),
            )

    @staticmethod
    def _due_text(order: OrderRecord) -> Text:
        """Due date, in red once it has passed."""
        overdue = order.due_date is not None and order.due_date.date() < datetime.now().date()
        return Text(format_date(order.due_date), style="bold red" if overdue else "")

    def selected_order(self) -> Optional[OrderRecord]:
        if not self.orders or self.cursor_row < 0 or self.cursor_row >= len(self.orders):
            return None
        return self.orders[self.cursor_row]


class BlissfulApp(App):
    """Main TUI application for the order book"""

    CSS = """
    OrdersTable {
        height: 1fr;
    }

    #actions {
        height: auto;
        padding: 0 1;
    }

    #actions Button {
        margin-right: 1;
    }

    #status-line {
        padding: 0 1;
        color: $text-muted;
    }
    """

    TITLE = "Blissful Bites Manager"
    SUB_TITLE = "Orders"

    BINDINGS = [
        ("n", "new_order", "New order"),
        ("e", "edit_order", "Edit order"),
        ("c", "complete_order", "Mark completed"),
        ("x", "export", "Download orders"),
        ("p", "products", "Products"),
        ("r", "representatives", "Representatives"),
        ("s", "settings", "Database"),
        ("f5", "refresh", "Refresh"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, config: Config, config_file: Optional[Path] = None,
                 session_manager: Optional[SessionManager] = None, **kwargs):
        super().__init__(**kwargs)
        self.config = config
        self.config_file = config_file
        self.session_manager = session_manager
        self._owns_session_manager = session_manager is None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="actions"):
            yield Button("+ New Order", id="new-order", variant="primary")
            yield Button("Edit Order", id="edit-order")
            yield Button("Mark Selected as Completed", id="complete-order", variant="success")
            yield Button("Download Orders", id="export")
            yield Button("Products", id="products")
            yield Button("Representatives", id="representatives")
            yield Button("Database", id="settings")
        yield OrdersTable(id="orders")
        yield Label("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        self.orders_table = self.query_one("#orders", OrdersTable)
        if self.session_manager is not None:
            self.refresh_orders()
        elif self.config.database.is_valid():
            self.connect()
        else:
            logger.info("Database configuration incomplete, asking for it")
            self.action_settings(first_run=True)

    def on_unmount(self) -> None:
        if self.session_manager is not None and self._owns_session_manager:
            self.session_manager.dispose()

    # Helpers

    def show_error(self, error) -> None:
        logger.error(str(error))
        self.push_screen(ErrorDialog(str(error)))

    def set_status(self, message: str) -> None:
        self.query_one("#status-line", Label).update(message)

    @property
    def orders(self) -> OrderProcessor:
        return OrderProcessor(self.session_manager)

    @property
    def catalog(self) -> CatalogProcessor:
        return CatalogProcessor(self.session_manager)

    def require_connection(self) -> bool:
        if self.session_manager is None:
            self.show_error("Not connected to a database. Configure the connection first (s).")
            return False
        return True

    def connect(self) -> None:
        """Open the database; the only call with a timeout."""
        try:
            self.session_manager = init_db(self.config)
        except BlissfulError as e:
            self.show_error(e)
            return
        self._owns_session_manager = True
        self.refresh_orders()

    def refresh_orders(self) -> None:
        try:
            orders = self.orders.list_open_orders()
        except BlissfulError as e:
            self.show_error(f"Error loading orders: {e}")
            return
        self.orders_table.show_orders(orders)
        self.set_status(f"{len(orders)} open orders")

    def _form_choices(self, order: Optional[OrderRecord] = None):
        """Active products and reps, plus inactive ones the order already uses."""
        products: List[ProductRecord] = self.catalog.list_products()
        representatives: List[RepresentativeRecord] = self.catalog.list_representatives()
        if order is not None:
            known = {p.id for p in products}
            for item in order.items:
                if item.product_id not in known:
                    known.add(item.product_id)
                    products.append(ProductRecord(item.product_id, item.product_name,
                                                  item.price / item.quantity, active=False))
            if order.representative_id and order.representative_id not in {r.id for r in representatives}:
                representatives.append(RepresentativeRecord(order.representative_id,
                                                            order.representative_name, active=False))
        return products, representatives

    # Actions

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses"""
        button_id = event.button.id

        if button_id == "new-order":
            self.action_new_order()
        elif button_id == "edit-order":
            self.action_edit_order()
        elif button_id == "complete-order":
            self.action_complete_order()
        elif button_id == "export":
            self.action_export()
        elif button_id == "products":
            self.action_products()
        elif button_id == "representatives":
            self.action_representatives()
        elif button_id == "settings":
            self.action_settings()

    def action_refresh(self) -> None:
        if self.require_connection():
            self.refresh_orders()

    def action_new_order(self) -> None:
        if not self.require_connection():
            return
        try:
            products, representatives = self._form_choices()
        except BlissfulError as e:
            self.show_error(e)
            return

        def _save(draft) -> None:
            if draft is None:
                return
            try:
                order = self.orders.create_order(draft)
            except BlissfulError as e:
                self.show_error(e)
                return
            self.notify(f"Order {order.id} saved ({format_currency(order.total_price)})")
            self.refresh_orders()

        self.push_screen(OrderFormScreen(products, representatives), _save)

    def action_edit_order(self) -> None:
        if not self.require_connection():
            return
        selected = self.orders_table.selected_order()
        if selected is None:
            return
        try:
            order = self.orders.get_order(selected.id)
            products, representatives = self._form_choices(order)
        except BlissfulError as e:
            self.show_error(e)
            return

        def _save(draft) -> None:
            if draft is None:
                return
            try:
                self.orders.edit_order(order.id, draft)
            except BlissfulError as e:
                self.show_error(e)
                return
            self.notify(f"Order {order.id} updated")
            self.refresh_orders()

        self.push_screen(
            OrderFormScreen(products, representatives, OrderDraft.from_record(order), title=f"Edit Order {order.id}"),
            _save
        )

    def action_complete_order(self) -> None:
        if not self.require_connection():
            return
        selected = self.orders_table.selected_order()
        if selected is None:
            return
        try:
            self.orders.set_completed(selected.id, True)
        except BlissfulError as e:
            self.show_error(e)
            return
        self.notify(f"Order {selected.id} completed")
        self.refresh_orders()

    def action_export(self) -> None:
        if not self.require_connection():
            return

        def _export(path) -> None:
            if not path:
                return
            try:
                written = OrderExporter(self.session_manager).export(path)
            except BlissfulError as e:
                self.show_error(e)
                return
            self.notify(f"Orders have been exported successfully to:\n{written}")

        self.push_screen(ExportDialog(default_export_filename()), _export)

    def _open_catalog(self, screen_class) -> None:
        if not self.require_connection():
            return

        def _closed(changed) -> None:
            if changed:
                self.refresh_orders()

        self.push_screen(screen_class(self.catalog), _closed)

    def action_products(self) -> None:
        self._open_catalog(ProductsScreen)

    def action_representatives(self) -> None:
        self._open_catalog(RepresentativesScreen)

    def action_settings(self, first_run: bool = False) -> None:
        try:
            existing = DatabaseConfig.load(self.config_file)
        except BlissfulError as e:
            logger.warning(f"Could not read saved config: {e}")
            existing = DatabaseConfig()

        def _saved(new_config) -> None:
            if new_config is None:
                if first_run:
                    # Nothing to work with without a database
                    self.exit()
                return
            try:
                new_config.save(self.config_file)
            except BlissfulError as e:
                self.show_error(e)
                return
            new_config.apply_to_env()
            self.config.database_url = new_config.database_url
            self.config.auth_token = new_config.auth_token
            self.notify("Database configuration saved")

            if self.session_manager is not None and self._owns_session_manager:
                self.session_manager.dispose()
            self.session_manager = None
            self.connect()

        self.push_screen(DatabaseConfigScreen(existing), _saved)


def run_app(config: Config, config_file: Optional[Path] = None,
            session_manager: Optional[SessionManager] = None) -> None:
    """Convenience function to run the order book"""
    app = BlissfulApp(config, config_file=config_file, session_manager=session_manager)
    app.run()
