import pytest

from sari_pos import performance_logger


@pytest.fixture
def profiling(tmp_path):
    performance_logger.reset_stats()
    performance_logger.configure(enabled=True, logs_dir=str(tmp_path))
    yield tmp_path
    performance_logger.configure(enabled=False)
    performance_logger.reset_stats()


def test_profile_function_counts_calls(profiling):
    @performance_logger.profile_function(name="Suma de prueba")
    def add(a, b):
        return a + b

    assert add(2, 3) == 5
    assert add(1, 1) == 2

    stats = performance_logger.get_function_stats()
    assert stats["Suma de prueba"]["calls"] == 2


def test_profile_function_disabled_records_nothing(tmp_path):
    performance_logger.reset_stats()
    performance_logger.configure(enabled=False, logs_dir=str(tmp_path))

    @performance_logger.profile_function
    def noop():
        return 'ok'

    assert noop() == 'ok'
    assert performance_logger.get_function_stats() == {}


def test_requests_are_logged(profiling, client):
    client.get('/api/inventory')
    client.post('/api/cart/checkout')

    text = (profiling / 'performance.log').read_text(encoding='utf-8')
    assert 'Acción: Ver inventario' in text
    assert 'Acción: Confirmar venta' in text
    assert 'Estado: 400' in text


def test_checkout_is_profiled(profiling, container):
    container.cart_service.add_line('item-1', 1)
    container.cart_service.checkout()
    assert performance_logger.get_function_stats()["Crear venta desde carrito"]["calls"] == 1
