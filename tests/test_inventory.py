from conftest import add_sale


def test_initial_inventory_loaded(container):
    items = container.inventory_service.get_all_items()
    assert len(items) == 10
    assert items['item-1']['name'] == 'Potato Chips'
    assert items['item-1']['stock'] == 150


def test_add_new_item_generates_next_id(container):
    svc = container.inventory_service
    result = svc.add_new_item('Instant Noodles', 'Snacks', 0.40, 0.90, 30)
    assert result['ok'] is True
    item = result['item']
    assert item['id'] == 'item-11'
    assert item['category'] == 'Snacks'
    assert item['stock'] == 30
    assert item['lowStock'] is False

    second = svc.add_new_item('Candles', cost_price=0.2, selling_price=0.5)
    assert second['item']['id'] == 'item-12'
    assert second['item']['category'] == 'Miscellaneous'
    assert second['item']['stock'] == 1


def test_add_new_item_validation(container):
    svc = container.inventory_service
    assert svc.add_new_item('', 'Snacks', 1, 2)['ok'] is False
    assert svc.add_new_item('Soap', 'Snacks', 0, 2)['ok'] is False
    assert svc.add_new_item('Soap', 'Snacks', 1, -2)['ok'] is False
    assert svc.add_new_item('Soap', 'Snacks', 'abc', 2)['ok'] is False
    assert svc.add_new_item('Soap', 'Hardware', 1, 2)['ok'] is False
    assert svc.add_new_item('Soap', 'Snacks', 1, 2, -5)['ok'] is False
    assert len(svc.get_all_items()) == 10


def test_restock_adds_units(container):
    svc = container.inventory_service
    result = svc.restock('item-6', 10)
    assert result['ok'] is True
    assert result['item']['stock'] == 50
    assert svc.get_item('item-6')['stock'] == 50


def test_restock_rejects_invalid_quantity_and_unknown_item(container):
    svc = container.inventory_service
    assert svc.restock('item-6', 0)['ok'] is False
    assert svc.restock('item-6', -3)['ok'] is False
    assert svc.restock('', 3)['ok'] is False
    missing = svc.restock('item-99', 3)
    assert missing['ok'] is False
    assert missing['not_found'] is True
    assert svc.get_item('item-6')['stock'] == 40


def test_edit_item_replaces_fields_and_keeps_position(container):
    svc = container.inventory_service
    result = svc.edit_item({
        'id': 'item-3',
        'name': 'Toothpaste XL',
        'category': 'Toiletries',
        'costPrice': 1.8,
        'sellingPrice': 3.5,
    })
    assert result['ok'] is True
    item = svc.get_item('item-3')
    assert item['name'] == 'Toothpaste XL'
    assert item['costPrice'] == 1.8
    assert item['stock'] == 80
    assert list(svc.get_all_items().keys())[2] == 'item-3'


def test_edit_item_null_category_keeps_current(container):
    svc = container.inventory_service
    result = svc.edit_item({'id': 'item-3', 'name': 'Toothpaste', 'category': None,
                            'costPrice': 1.5, 'sellingPrice': 3.25})
    assert result['ok'] is True
    item = svc.get_item('item-3')
    assert item['category'] == 'Toiletries'
    assert item['sellingPrice'] == 3.25


def test_edit_item_unknown_id_is_not_found(container):
    result = container.inventory_service.edit_item({'id': 'item-404', 'name': 'X', 'costPrice': 1, 'sellingPrice': 1})
    assert result['ok'] is False
    assert result['not_found'] is True


def test_delete_requires_confirmation(container):
    svc = container.inventory_service
    result = svc.delete_item('item-2')
    assert result['ok'] is False
    assert result['confirmation_required'] is True
    assert svc.item_exists('item-2')

    assert svc.delete_item('item-2', confirmed=True)['ok'] is True
    assert not svc.item_exists('item-2')


def test_deleted_item_keeps_history(container):
    sale = add_sale(container, 'SALE-000001', container.now(), [('item-2', 'Cola', 2, 1.25, 'Cash')])
    container.inventory_service.delete_item('item-2', confirmed=True)

    stored = container.sales_service.get_sale('SALE-000001')
    assert stored['items'][0]['name'] == 'Cola'
    assert stored['items'][0]['price'] == 1.25
    assert stored['totalAmount'] == sale['totalAmount']
    names = [i['name'] for i in container.inventory_service.list_items()]
    assert 'Cola' not in names


def test_low_stock_threshold_is_inclusive(container):
    svc = container.inventory_service
    svc.edit_item({'id': 'item-4', 'name': 'Milk (1L)', 'category': 'Dairy',
                   'costPrice': 1.2, 'sellingPrice': 2.5, 'stock': 20})
    svc.edit_item({'id': 'item-10', 'name': 'Yogurt', 'category': 'Dairy',
                   'costPrice': 0.6, 'sellingPrice': 1.4, 'stock': 21})

    low_ids = [i['id'] for i in svc.get_low_stock_items()]
    assert 'item-4' in low_ids
    assert 'item-10' not in low_ids


def test_list_items_by_category_and_grouping(container):
    svc = container.inventory_service
    drinks = svc.list_items('Drinks')
    assert [i['name'] for i in drinks] == ['Cola', 'Bottled Water']

    grouped = svc.group_by_category()
    assert list(grouped.keys())[:3] == ['Snacks', 'Drinks', 'Toiletries']
    assert len(grouped['Snacks']) == 2


def test_inventory_activity_is_logged(container):
    svc = container.inventory_service
    svc.restock('item-1', 5)
    svc.delete_item('item-9', confirmed=True)

    logs = container.audit_service.get_recent_logs()
    assert logs[0]['type'] == 'PRODUCTO'
    assert 'Shampoo' in logs[0]['message']
    assert logs[1]['type'] == 'STOCK'
    assert logs[1]['timestamp'] == '2024-05-15 10:00:00'
