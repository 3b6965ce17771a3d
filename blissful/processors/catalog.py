"""Catalog processor: products and representatives."""

from typing import List, Union

from ..db.models import Product, Representative
from ..errors import NotFoundError
from ..utils.parsing import parse_price, require_name
from .base import BaseProcessor
from .loaders import load_all_products, load_all_representatives, load_products, load_representatives
from .records import ProductRecord, RepresentativeRecord

class CatalogProcessor(BaseProcessor):
    """Maintain the product list and the representatives.

    Nothing is ever deleted: deactivating hides a row from new orders while
    existing orders keep pointing at it.
    """

    def list_products(self, include_inactive: bool = False) -> List[ProductRecord]:
        with self.read_session() as session:
            return load_all_products(session) if include_inactive else load_products(session)

    def list_representatives(self, include_inactive: bool = False) -> List[RepresentativeRecord]:
        with self.read_session() as session:
            if include_inactive:
                return load_all_representatives(session)
            return load_representatives(session)

    # Products

    def add_product(self, name: str, price: Union[str, float]) -> ProductRecord:
        """Add an active product.

        Raises:
            ValidationError: Blank name or unusable price
        """
        name = require_name(name, 'product name')
        unit_price = parse_price(price)

        with self.transaction('adding product') as session:
            product = Product(name=name, price=unit_price, active=True)
            session.add(product)
            session.flush()
            record = ProductRecord(product.id, product.name, product.price, product.active)

        self.logger.info(f"Added product {record.id}: {record.name}")
        return record

    def edit_product(self, product_id: int, name: str, price: Union[str, float]) -> ProductRecord:
        """Rename and reprice a product. Existing order items keep their stored prices."""
        name = require_name(name, 'product name')
        unit_price = parse_price(price)

        with self.transaction(f'updating product {product_id}') as session:
            product = self._get(session, Product, product_id, 'Product')
            product.name = name
            product.price = unit_price
            record = ProductRecord(product.id, product.name, product.price, product.active)

        self.logger.info(f"Updated product {product_id}")
        return record

    def deactivate_product(self, product_id: int) -> None:
        self._set_active(Product, product_id, False, 'Product')

    def activate_product(self, product_id: int) -> None:
        self._set_active(Product, product_id, True, 'Product')

    # Representatives

    def add_representative(self, name: str) -> RepresentativeRecord:
        name = require_name(name, 'representative name')

        with self.transaction('adding representative') as session:
            representative = Representative(name=name, active=True)
            session.add(representative)
            session.flush()
            record = RepresentativeRecord(representative.id, representative.name, representative.active)

        self.logger.info(f"Added representative {record.id}: {record.name}")
        return record

    def rename_representative(self, representative_id: int, name: str) -> RepresentativeRecord:
        name = require_name(name, 'representative name')

        with self.transaction(f'updating representative {representative_id}') as session:
            representative = self._get(session, Representative, representative_id, 'Representative')
            representative.name = name
            record = RepresentativeRecord(representative.id, representative.name, representative.active)

        return record

    def deactivate_representative(self, representative_id: int) -> None:
        self._set_active(Representative, representative_id, False, 'Representative')

    def activate_representative(self, representative_id: int) -> None:
        self._set_active(Representative, representative_id, True, 'Representative')

    def _get(self, session, model, row_id: int, label: str):
        row = session.get(model, row_id)
        if row is None:
            raise NotFoundError(f"{label} {row_id} not found")
        return row

    def _set_active(self, model, row_id: int, active: bool, label: str) -> None:
        with self.transaction(f'updating {label.lower()} {row_id}') as session:
            row = self._get(session, model, row_id, label)
            row.active = active

        self.logger.info(f"{label} {row_id} {'activated' if active else 'deactivated'}")
