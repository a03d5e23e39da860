from datetime import datetime

import pytest

from conftest import add_sale


CHIPS = ('item-1', 'Potato Chips')
COLA = ('item-2', 'Cola')


def line(item, qty, price, method='Cash'):
    return (item[0], item[1], qty, price, method)


def sale_ids(sales):
    return [s['id'] for s in sales]


# ---------------------------------------------------------------------------
# Filtros por período
# ---------------------------------------------------------------------------

def test_weekly_starts_sunday_midnight(container):
    add_sale(container, 'SALE-000001', datetime(2024, 5, 12, 0, 0, 0), [line(CHIPS, 1, 1.5)])
    add_sale(container, 'SALE-000002', datetime(2024, 5, 11, 23, 59, 59, 999000), [line(CHIPS, 1, 1.5)])

    result = container.stats_service.sales_history(period='weekly')
    assert sale_ids(result['sales']) == ['SALE-000001']


def test_weekly_on_sunday_starts_same_day(container, clock):
    clock.now = datetime(2024, 5, 12, 18, 30)
    add_sale(container, 'SALE-000001', datetime(2024, 5, 12, 8, 0), [line(CHIPS, 1, 1.5)])
    add_sale(container, 'SALE-000002', datetime(2024, 5, 11, 20, 0), [line(CHIPS, 1, 1.5)])

    result = container.stats_service.sales_history(period='weekly')
    assert sale_ids(result['sales']) == ['SALE-000001']


def test_daily_and_monthly(container):
    add_sale(container, 'SALE-000001', datetime(2024, 5, 15, 7, 0), [line(CHIPS, 1, 1.5)])
    add_sale(container, 'SALE-000002', datetime(2024, 5, 1, 9, 0), [line(CHIPS, 1, 1.5)])
    add_sale(container, 'SALE-000003', datetime(2024, 4, 30, 23, 0), [line(CHIPS, 1, 1.5)])
    add_sale(container, 'SALE-000004', datetime(2023, 5, 15, 7, 0), [line(CHIPS, 1, 1.5)])

    stats = container.stats_service
    assert sale_ids(stats.sales_history(period='daily')['sales']) == ['SALE-000001']
    assert sale_ids(stats.sales_history(period='monthly')['sales']) == ['SALE-000001', 'SALE-000002']
    assert stats.sales_history(period='all')['count'] == 4


def test_custom_range_is_inclusive(container):
    add_sale(container, 'SALE-000001', datetime(2024, 3, 1, 0, 0), [line(CHIPS, 1, 1.5)])
    add_sale(container, 'SALE-000002', datetime(2024, 3, 10, 23, 59, 59), [line(CHIPS, 1, 1.5)])
    add_sale(container, 'SALE-000003', datetime(2024, 3, 11, 0, 0), [line(CHIPS, 1, 1.5)])

    result = container.stats_service.sales_history('custom', '2024-03-01', '2024-03-10')
    assert sale_ids(result['sales']) == ['SALE-000002', 'SALE-000001']


def test_custom_range_ends_at_last_millisecond(container):
    add_sale(container, 'SALE-000001', datetime(2024, 3, 10, 23, 59, 59, 999000), [line(CHIPS, 1, 1.5)])
    add_sale(container, 'SALE-000002', datetime(2024, 3, 10, 23, 59, 59, 999500), [line(CHIPS, 1, 1.5)])

    result = container.stats_service.sales_history('custom', '2024-03-10', '2024-03-10')
    assert sale_ids(result['sales']) == ['SALE-000001']


def test_custom_without_both_dates_keeps_everything(container):
    add_sale(container, 'SALE-000001', datetime(2024, 3, 1), [line(CHIPS, 1, 1.5)])
    add_sale(container, 'SALE-000002', datetime(2024, 4, 1), [line(CHIPS, 1, 1.5)])

    assert container.stats_service.sales_history('custom', '2024-03-15', None)['count'] == 2


def test_invalid_period_or_date_is_error(container):
    stats = container.stats_service
    assert stats.sales_history(period='yearly')['ok'] is False
    bad = stats.sales_history('custom', '2024-13-01', '2024-12-01')
    assert bad['ok'] is False
    assert 'YYYY-MM-DD' in bad['error']


def test_history_is_newest_first(container):
    add_sale(container, 'SALE-000001', datetime(2024, 5, 1), [line(CHIPS, 1, 1.5)])
    add_sale(container, 'SALE-000002', datetime(2024, 5, 14), [line(CHIPS, 1, 1.5)])
    add_sale(container, 'SALE-000003', datetime(2024, 5, 7), [line(CHIPS, 1, 1.5)])

    result = container.stats_service.sales_history()
    assert sale_ids(result['sales']) == ['SALE-000002', 'SALE-000003', 'SALE-000001']
    assert result['total_amount'] == 4.5


@pytest.mark.parametrize('term,expected', [
    ('cola', ['SALE-000002']),
    ('CHIPS', ['SALE-000001']),
    ('000001', ['SALE-000001']),
    ('  ', ['SALE-000002', 'SALE-000001']),
    ('yogurt', []),
])
def test_search_by_id_or_product_name(container, term, expected):
    add_sale(container, 'SALE-000001', datetime(2024, 5, 1), [line(CHIPS, 1, 1.5)])
    add_sale(container, 'SALE-000002', datetime(2024, 5, 2), [line(COLA, 1, 1.25)])

    result = container.stats_service.sales_history(search=term)
    assert sale_ids(result['sales']) == expected


# ---------------------------------------------------------------------------
# Métricas
# ---------------------------------------------------------------------------

def test_chips_scenario_profit(container):
    cart = container.cart_service
    cart.add_line('item-1', 10, 1.50, 'Cash')
    assert cart.checkout()['ok'] is True
    assert container.inventory_service.get_item('item-1')['stock'] == 140

    dash = container.stats_service.get_dashboard(period='daily')
    summary = dash['summary']
    assert summary['gross_sales'] == 15.0
    assert summary['cost_of_goods_sold'] == 7.5
    assert summary['expenses'] == 500.0
    assert summary['total_profit'] == -492.5
    assert summary['sales_count'] == 1
    assert dash['profit_per_item'] == [{'name': 'Potato Chips', 'profit': 7.5, 'quantity': 10}]


def test_cogs_uses_current_cost(container):
    add_sale(container, 'SALE-000001', container.now(), [line(CHIPS, 10, 1.5)])
    container.inventory_service.edit_item({
        'id': 'item-1', 'name': 'Potato Chips', 'category': 'Snacks',
        'costPrice': 1.0, 'sellingPrice': 1.5,
    })

    summary = container.stats_service.get_dashboard()['summary']
    assert summary['cost_of_goods_sold'] == 10.0


def test_deleted_item_excluded_from_cogs_and_ranking(container):
    add_sale(container, 'SALE-000001', container.now(), [line(CHIPS, 4, 1.5), line(COLA, 2, 1.25)])
    container.inventory_service.delete_item('item-2', confirmed=True)

    dash = container.stats_service.get_dashboard()
    assert dash['summary']['gross_sales'] == 8.5
    assert dash['summary']['cost_of_goods_sold'] == 3.0
    assert [p['name'] for p in dash['profit_per_item']] == ['Potato Chips']


def test_profit_ranking_top_ten_sorted(container):
    inv = container.inventory_service
    lines = []
    for n in range(12):
        item = inv.add_new_item(f'Product {n}', 'Snacks', 1.0, 2.0, 100)['item']
        lines.append((item['id'], item['name'], n + 1, 2.0, 'Cash'))
    add_sale(container, 'SALE-000001', container.now(), lines)

    ranking = container.stats_service.get_dashboard()['profit_per_item']
    assert len(ranking) == 10
    profits = [p['profit'] for p in ranking]
    assert profits == sorted(profits, reverse=True)
    assert ranking[0] == {'name': 'Product 11', 'profit': 12.0, 'quantity': 12}


def test_sales_over_time_by_day_ascending(container):
    add_sale(container, 'SALE-000001', datetime(2024, 5, 14, 9), [line(CHIPS, 2, 1.5)])
    add_sale(container, 'SALE-000002', datetime(2024, 5, 3, 9), [line(COLA, 4, 1.25)])
    add_sale(container, 'SALE-000003', datetime(2024, 5, 14, 18), [line(COLA, 1, 1.25)])

    series = container.stats_service.get_dashboard()['sales_over_time']
    assert series == [
        {'date': '2024-05-03', 'sales': 5.0},
        {'date': '2024-05-14', 'sales': 4.25},
    ]


def test_dashboard_defaults_to_monthly(container):
    add_sale(container, 'SALE-000001', datetime(2024, 4, 20), [line(CHIPS, 1, 1.5)])
    dash = container.stats_service.get_dashboard()
    assert dash['period'] == 'monthly'
    assert dash['summary']['sales_count'] == 0
    assert dash['date_range']['start'] == '2024-05-01T00:00:00'


def test_empty_ledger_dashboard(container):
    dash = container.stats_service.get_dashboard(period='all')
    assert dash['summary']['gross_sales'] == 0
    assert dash['summary']['total_profit'] == -500.0
    assert dash['profit_per_item'] == []
    assert dash['sales_over_time'] == []
    assert dash['date_range'] is None


# ---------------------------------------------------------------------------
# Gastos
# ---------------------------------------------------------------------------

def test_set_expenses(container):
    stats = container.stats_service
    assert stats.get_expenses() == 500.0

    assert stats.set_expenses(-1)['ok'] is False
    assert stats.set_expenses('abc')['ok'] is False
    assert stats.get_expenses() == 500.0

    assert stats.set_expenses(120.5)['ok'] is True
    assert stats.get_expenses() == 120.5
    assert stats.get_dashboard(period='all')['summary']['total_profit'] == -120.5

    logs = container.audit_service.get_logs_by_type('SISTEMA')
    assert len(logs) == 1
    assert logs[0]['details'] == {'from': 500.0, 'to': 120.5}


def test_zero_expenses_allowed(container):
    assert container.stats_service.set_expenses(0)['expenses'] == 0
