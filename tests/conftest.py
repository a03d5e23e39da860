import os
from datetime import datetime

import pytest

# Sin archivos de log durante los tests
os.environ.setdefault('SARI_POS_PROFILING', '0')

from sari_pos.app_container import AppContainer
from sari_pos.main import app


# Miércoles 15 de mayo de 2024, 10:00
FIXED_NOW = datetime(2024, 5, 15, 10, 0, 0)


class FakeClock:
    """Reloj controlable: los tests mueven `now` a mano."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock(FIXED_NOW)


@pytest.fixture
def container(clock):
    AppContainer.reset_instance()
    c = AppContainer(settings=app.config, clock=clock)
    yield c
    AppContainer.reset_instance()


@pytest.fixture
def client(container):
    app.config['TESTING'] = True
    with app.test_client() as c:
        yield c


def add_sale(container, sale_id, date, lines):
    """
    Registra una venta directamente en el libro (sin pasar por el carrito).

    lines: [(item_id, name, quantity, price, payment_method)]
    """
    items = [
        {'itemId': i, 'name': n, 'quantity': q, 'price': p, 'paymentMethod': m}
        for i, n, q, p, m in lines
    ]
    sale = {
        'id': sale_id,
        'date': date.isoformat(),
        'items': items,
        'totalAmount': round(sum(q * p for _, _, q, p, _ in lines), 2),
    }
    container.sales_repo.create_sale(sale)
    return sale
