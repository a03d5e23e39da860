from datetime import datetime

from sari_pos.models import INITIAL_INVENTORY
from sari_pos.repositories import (
    AuditRepository,
    CartRepository,
    IAuditRepository,
    ICartRepository,
    IInventoryRepository,
    ISalesRepository,
    ISettingsRepository,
    InventoryRepository,
    SalesRepository,
    SettingsRepository,
)


def test_repositories_implement_interfaces():
    inventory = InventoryRepository(INITIAL_INVENTORY)
    assert isinstance(inventory, IInventoryRepository)
    assert isinstance(SalesRepository(), ISalesRepository)
    assert isinstance(CartRepository(), ICartRepository)
    assert isinstance(AuditRepository(), IAuditRepository)
    assert isinstance(SettingsRepository(), ISettingsRepository)


def test_reads_return_copies():
    repo = InventoryRepository(INITIAL_INVENTORY)
    item = repo.get_item('item-1')
    item['stock'] = 0
    repo.load()['item-2']['stock'] = 0

    assert repo.get_item('item-1')['stock'] == 150
    assert repo.get_item('item-2')['stock'] == 200
    assert INITIAL_INVENTORY[0]['stock'] == 150


def test_set_stock_ignores_unknown_ids():
    repo = InventoryRepository(INITIAL_INVENTORY)
    repo.set_stock({'item-1': 10, 'item-999': 5})
    assert repo.get_item('item-1')['stock'] == 10
    assert not repo.item_exists('item-999')


def test_next_id_uses_highest_suffix():
    repo = InventoryRepository([{'id': 'item-3', 'name': 'A'}, {'id': 'item-10', 'name': 'B'}, {'id': 'custom', 'name': 'C'}])
    assert repo.get_next_id() == 'item-11'
    assert InventoryRepository().get_next_id() == 'item-1'


def test_sale_id_bumps_on_collision():
    repo = SalesRepository()
    now = datetime(2024, 5, 15, 10, 0, 0)
    first = repo.get_next_sale_id(now)
    repo.create_sale({'id': first, 'date': now.isoformat(), 'items': [], 'totalAmount': 0})
    second = repo.get_next_sale_id(now)

    assert first.startswith('SALE-') and len(first) == 11
    assert second != first
    assert repo.sale_exists(first)
    assert not repo.sale_exists(second)


def test_audit_log_newest_first_and_capped():
    repo = AuditRepository(clock=lambda: datetime(2024, 1, 2, 3, 4, 5))
    repo.MAX_LOGS = 3
    for n in range(5):
        repo.log('STOCK', f'evento {n}', f'item-{n}')

    logs = repo.load()
    assert [log['message'] for log in logs] == ['evento 4', 'evento 3', 'evento 2']
    assert logs[0]['timestamp'] == '2024-01-02 03:04:05'
    assert repo.get_recent_logs(1)[0]['related_id'] == 'item-4'


def test_settings_default_value():
    repo = SettingsRepository({'expenses': 500.0})
    assert repo.get_setting('expenses') == 500.0
    assert repo.get_setting('missing', 'x') == 'x'
    repo.set_setting('expenses', 10)
    assert repo.load() == {'expenses': 10}
