from datetime import datetime

from sari_pos.models import (
    CartItem,
    Category,
    InventoryItem,
    PaymentMethod,
    Sale,
    SaleItem,
    parse_category,
    parse_payment_method,
)
from sari_pos.utils import parse_date, to_float, to_int


def test_parse_enums():
    assert parse_category('Bakery') is Category.BAKERY
    assert parse_category('bakery') is None
    assert parse_payment_method('GCash') is PaymentMethod.GCASH
    assert parse_payment_method(None) is None


def test_inventory_item_dict_roundtrip_and_low_stock():
    item = InventoryItem.from_dict({'id': 'item-1', 'name': 'Chips', 'category': 'Snacks',
                                    'stock': 20, 'costPrice': 0.75, 'sellingPrice': 1.5})
    assert item.category is Category.SNACKS
    assert item.is_low_stock()
    assert not item.is_low_stock(threshold=19)
    assert item.to_dict()['sellingPrice'] == 1.5


def test_sale_total_computed_from_lines():
    items = [SaleItem('item-1', 'Chips', 10, 1.5), SaleItem('item-2', 'Cola', 2, 1.25, PaymentMethod.CARD)]
    sale = Sale(id='SALE-000001', date=datetime(2024, 5, 15, 10, 0), items=items)
    assert sale.total_amount == 17.5
    assert sale.total_quantity == 12
    assert items[0].subtotal == 15.0

    data = sale.to_dict()
    assert data['date'] == '2024-05-15T10:00:00'
    assert data['items'][1]['paymentMethod'] == 'Card'

    restored = Sale.from_dict(data)
    assert restored.date == sale.date
    assert restored.total_amount == 17.5


def test_cart_item_to_sale_item_drops_cart_id():
    line = CartItem.from_dict({'cartId': 'abc', 'itemId': 'item-1', 'name': 'Chips',
                               'quantity': 3, 'price': 1.5, 'paymentMethod': 'Cash'})
    assert line.to_dict()['cartId'] == 'abc'
    assert 'cartId' not in line.to_sale_item().to_dict()


def test_conversions():
    assert to_int('5') == 5
    assert to_int(5.0) == 5
    assert to_int(5.5) is None
    assert to_int(True) is None
    assert to_float('1.25') == 1.25
    assert to_float('nan') is None
    assert parse_date('') is None
    assert parse_date('2024-03-01').day == 1
