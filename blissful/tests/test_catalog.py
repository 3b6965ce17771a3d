"""Tests for product and representative maintenance."""
import pytest

from ..errors import NotFoundError, ValidationError

def test_add_and_list_products(catalog):
    """Test added products are active and listed by name."""
    scones = catalog.add_product('Scones', '5')
    catalog.add_product('  Brownies ', 'R12,50')

    assert scones.active
    assert scones.price == 5.0
    assert [(p.name, p.price) for p in catalog.list_products()] == [('Brownies', 12.5), ('Scones', 5.0)]

def test_add_product_validation(catalog):
    with pytest.raises(ValidationError):
        catalog.add_product('', '5')
    with pytest.raises(ValidationError, match='Invalid price'):
        catalog.add_product('Scones', 'five')
    with pytest.raises(ValidationError, match='Invalid price'):
        catalog.add_product('Scones', '-1')

    assert catalog.list_products(include_inactive=True) == []

def test_edit_product(catalog, order_processor, populated):
    """Repricing a product leaves existing order items alone."""
    from .test_order_processor import make_draft

    cake = populated['cake']
    order = order_processor.create_order(make_draft((cake.id, 2)))

    updated = catalog.edit_product(cake.id, 'Carrot Cake (large)', '10')
    assert updated.name == 'Carrot Cake (large)'
    assert updated.price == 10.0

    stored = order_processor.get_order(order.id)
    assert stored.items[0].price == 15.0
    assert stored.total_price == 15.0

    with pytest.raises(NotFoundError):
        catalog.edit_product(9999, 'Nothing', '1')

def test_deactivate_and_activate_product(catalog, populated):
    """Test deactivated products drop out of the active list but are kept."""
    cake = populated['cake']

    catalog.deactivate_product(cake.id)
    assert cake.id not in {p.id for p in catalog.list_products()}

    everything = {p.id: p for p in catalog.list_products(include_inactive=True)}
    assert not everything[cake.id].active

    catalog.activate_product(cake.id)
    assert cake.id in {p.id for p in catalog.list_products()}

    with pytest.raises(NotFoundError):
        catalog.deactivate_product(9999)

def test_representatives(catalog):
    """Test adding, renaming and deactivating representatives."""
    thandi = catalog.add_representative('Thandi')
    sipho = catalog.add_representative('Sipho')

    assert [r.name for r in catalog.list_representatives()] == ['Sipho', 'Thandi']

    renamed = catalog.rename_representative(thandi.id, 'Thandiwe')
    assert renamed.name == 'Thandiwe'

    catalog.deactivate_representative(sipho.id)
    assert [r.name for r in catalog.list_representatives()] == ['Thandiwe']
    assert [r.name for r in catalog.list_representatives(include_inactive=True)] == ['Sipho', 'Thandiwe']

    catalog.activate_representative(sipho.id)
    assert len(catalog.list_representatives()) == 2

    with pytest.raises(ValidationError):
        catalog.add_representative('   ')
    with pytest.raises(NotFoundError):
        catalog.rename_representative(9999, 'Nobody')
