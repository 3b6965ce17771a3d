"""Order processor: insert, edit and complete orders."""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Set, Tuple

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from ..db.models import Order, OrderItem, Product, Representative
from ..errors import NotFoundError, ValidationError
from ..utils.parsing import parse_due_date, parse_quantity
from .base import BaseProcessor
from .loaders import get_order, load_orders
from .records import OrderDraft, OrderLine, OrderRecord

class OrderProcessor(BaseProcessor):
    """Create and change orders.

    Every write runs in a single transaction: the order row and all of its
    items are saved together or not at all, and total_price is recomputed
    from the line prices each time.
    """

    def list_open_orders(self) -> List[OrderRecord]:
        with self.read_session() as session:
            return load_orders(session)

    def get_order(self, order_id: int) -> OrderRecord:
        with self.read_session() as session:
            return get_order(session, order_id)

    def create_order(self, draft: OrderDraft) -> OrderRecord:
        """Insert a new order with its line items.

        Args:
            draft: Client details and (product, quantity) lines

        Returns:
            OrderRecord: The saved order as it now reads from the database

        Raises:
            ValidationError: Bad due date, no lines, bad quantity, unknown product
            TransactionError: An insert or the commit failed
        """
        due_date = parse_due_date(draft.due_date)
        lines = self._normalize_lines(draft.lines)

        with self.transaction('saving order') as session:
            representative_id = self._check_representative(session, draft.representative_id, require_active=True)
            priced = self._price_lines(session, lines, allowed_inactive=set())

            order = Order(
                created_at=datetime.now(),
                due_date=due_date,
                client_name=draft.client_name.strip(),
                contact=draft.contact.strip(),
                representative_id=representative_id,
                needs_delivery=draft.needs_delivery,
                delivery_address=draft.delivery_address.strip() if draft.needs_delivery else '',
                comment=draft.comment.strip(),
                completed=False,
                total_price=self._total(priced),
            )
            session.add(order)
            session.flush()
            order_id = order.id

            self._insert_items(session, order_id, priced)

        self.logger.info(f"Created order {order_id} for {draft.client_name!r} ({len(lines)} items)")
        return self.get_order(order_id)

    def edit_order(self, order_id: int, draft: OrderDraft) -> OrderRecord:
        """Replace an order's details and its whole item set.

        Existing items are deleted and the new set inserted; there is no
        diffing and no concurrency check, so the last writer wins.

        Raises:
            NotFoundError: The order does not exist
            ValidationError: Bad due date, no lines, bad quantity, unknown product
            TransactionError: A statement or the commit failed
        """
        due_date = parse_due_date(draft.due_date)
        lines = self._normalize_lines(draft.lines)

        with self.transaction(f'updating order {order_id}') as session:
            order = session.get(Order, order_id)
            if order is None:
                raise NotFoundError(f"Order {order_id} not found")

            current_products = set(session.scalars(
                select(OrderItem.product_id).where(OrderItem.order_id == order_id)
            ))
            representative_id = self._check_representative(
                session,
                draft.representative_id,
                require_active=draft.representative_id != order.representative_id
            )
            priced = self._price_lines(session, lines, allowed_inactive=current_products)

            order.due_date = due_date
            order.client_name = draft.client_name.strip()
            order.contact = draft.contact.strip()
            order.representative_id = representative_id
            order.needs_delivery = draft.needs_delivery
            order.delivery_address = draft.delivery_address.strip() if draft.needs_delivery else ''
            order.comment = draft.comment.strip()
            order.total_price = self._total(priced)
            session.flush()

            session.execute(delete(OrderItem).where(OrderItem.order_id == order_id))
            self._insert_items(session, order_id, priced)

        self.logger.info(f"Updated order {order_id} ({len(lines)} items)")
        return self.get_order(order_id)

    def set_completed(self, order_id: int, completed: bool = True) -> None:
        """Set or clear the completed flag of one order."""
        with self.transaction(f'updating order {order_id}') as session:
            result = session.execute(
                update(Order).where(Order.id == order_id).values(completed=completed)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Order {order_id} not found")

        self.logger.info(f"Order {order_id} marked {'completed' if completed else 'pending'}")

    def _normalize_lines(self, lines: Iterable) -> List[OrderLine]:
        """Validate quantities; accepts OrderLine objects or (product_id, quantity) pairs."""
        normalized = []
        for line in lines:
            if isinstance(line, OrderLine):
                product_id, quantity = line.product_id, line.quantity
            else:
                try:
                    product_id, quantity = line
                except (TypeError, ValueError):
                    raise ValidationError(f"Invalid item {line!r}")
            if product_id is None:
                raise ValidationError("Every item needs a product")
            try:
                product_id = int(product_id)
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid product id {product_id!r}")
            normalized.append(OrderLine(product_id, parse_quantity(quantity)))

        if not normalized:
            raise ValidationError("An order needs at least one item")
        return normalized

    def _check_representative(self, session: Session, representative_id: Optional[int],
                              require_active: bool) -> Optional[int]:
        if representative_id is None:
            return None
        representative = session.get(Representative, representative_id)
        if representative is None or (require_active and not representative.active):
            raise ValidationError(f"Unknown representative {representative_id}")
        return representative.id

    def _price_lines(self, session: Session, lines: List[OrderLine],
                     allowed_inactive: Set[int]) -> List[Tuple[OrderLine, float]]:
        """Pair each line with its price (unit price times quantity)."""
        product_ids = {line.product_id for line in lines}
        products: Dict[int, Product] = {
            product.id: product
            for product in session.scalars(select(Product).where(Product.id.in_(product_ids)))
        }

        priced = []
        for line in lines:
            product = products.get(line.product_id)
            if product is None or (not product.active and product.id not in allowed_inactive):
                raise ValidationError(f"Unknown product {line.product_id}")
            priced.append((line, round(product.price * line.quantity, 2)))
        return priced

    def _insert_items(self, session: Session, order_id: int, priced: List[Tuple[OrderLine, float]]) -> None:
        for line, price in priced:
            session.add(OrderItem(
                order_id=order_id,
                product_id=line.product_id,
                quantity=line.quantity,
                price=price,
            ))
        session.flush()

    @staticmethod
    def _total(priced: List[Tuple[OrderLine, float]]) -> float:
        return round(sum(price for _, price in priced), 2)
