"""Operations on products, representatives and orders."""

from .records import (
    OrderDraft,
    OrderItemRecord,
    OrderLine,
    OrderRecord,
    ProductRecord,
    RepresentativeRecord,
)
from .loaders import (
    get_order,
    load_all_products,
    load_all_representatives,
    load_orders,
    load_products,
    load_representatives,
)
from .order import OrderProcessor
from .catalog import CatalogProcessor
from .export import OrderExporter

__all__ = [
    'OrderDraft',
    'OrderItemRecord',
    'OrderLine',
    'OrderRecord',
    'ProductRecord',
    'RepresentativeRecord',
    'get_order',
    'load_all_products',
    'load_all_representatives',
    'load_orders',
    'load_products',
    'load_representatives',
    'OrderProcessor',
    'CatalogProcessor',
    'OrderExporter'
]
