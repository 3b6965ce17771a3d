"""Plain records returned by the loaders and accepted by the processors.

Records are detached from any session so the front end can keep them after
the session that produced them is closed.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Union

@dataclass
class ProductRecord:
    id: int
    name: str
    price: float
    active: bool = True

@dataclass
class RepresentativeRecord:
    id: int
    name: str
    active: bool = True

@dataclass
class OrderItemRecord:
    id: int
    product_id: int
    product_name: str
    quantity: int
    price: float

@dataclass
class OrderRecord:
    id: int
    created_at: datetime
    due_date: Optional[datetime]
    client_name: str
    contact: str
    representative_id: Optional[int]
    representative_name: str
    needs_delivery: bool
    delivery_address: str
    comment: str
    completed: bool
    total_price: float
    items: List[OrderItemRecord] = field(default_factory=list)

    @property
    def status(self) -> str:
        return 'Completed' if self.completed else 'Pending'

    @property
    def items_summary(self) -> str:
        """Short description such as '2 x Carrot Cake, 1 x Brownies'."""
        return ', '.join(f"{item.quantity} x {item.product_name}" for item in self.items)

@dataclass
class OrderLine:
    """Requested product and quantity; the price is computed on save."""
    product_id: int
    quantity: int

@dataclass
class OrderDraft:
    """Everything the user enters for a new order or an edit."""
    client_name: str
    contact: str
    due_date: Union[str, date, datetime, None]
    lines: List[OrderLine] = field(default_factory=list)
    representative_id: Optional[int] = None
    needs_delivery: bool = False
    delivery_address: str = ''
    comment: str = ''

    @classmethod
    def from_record(cls, order: OrderRecord) -> 'OrderDraft':
        """Prefill a draft from a loaded order, e.g. for the edit form."""
        return cls(
            client_name=order.client_name,
            contact=order.contact,
            due_date=order.due_date,
            lines=[OrderLine(item.product_id, item.quantity) for item in order.items],
            representative_id=order.representative_id,
            needs_delivery=order.needs_delivery,
            delivery_address=order.delivery_address,
            comment=order.comment,
        )
