# ==============================================================================
# SISTEMA DE PROFILING INTERNO
# ==============================================================================
# Mide rendimiento de rutas y funciones sin afectar la experiencia del usuario.
# Guarda logs legibles en logs/ para análisis humano.
#
# ACTIVAR/DESACTIVAR: PROFILING_ENABLED en Config (SARI_POS_PROFILING)
# ==============================================================================

import os
import time
import threading
from datetime import datetime
from functools import wraps
from collections import defaultdict

# ═══════════════════════════════════════════════════════════════════════════
# CONFIGURACIÓN
# ═══════════════════════════════════════════════════════════════════════════

# Umbrales de tiempo (en milisegundos)
THRESHOLD_WARNING = 300   # Advertencia si supera 300ms
THRESHOLD_CRITICAL = 700  # Crítico si supera 700ms

# Estado configurable desde init_profiling() / configure()
_settings = {
    'enabled': True,
    'logs_dir': os.path.join(os.path.dirname(os.path.abspath(__file__)), 'logs'),
}

PERFORMANCE_LOG = 'performance.log'
SLOW_ROUTES_LOG = 'slow_routes.log'
SLOW_FUNCTIONS_LOG = 'slow_functions.log'

# Mapeo de rutas a nombres legibles (para logs más humanos)
ROUTE_NAMES = {
    # Inventario
    'GET /api/inventory': 'Ver inventario',
    'GET /api/inventory/grouped': 'Ver inventario por categoría',
    'GET /api/inventory/low-stock': 'Ver stock bajo',
    'POST /api/inventory': 'Crear producto',
    'POST /api/inventory/<item_id>/restock': 'Reponer stock',
    'PUT /api/inventory/<item_id>': 'Editar producto',
    'DELETE /api/inventory/<item_id>': 'Eliminar producto',

    # Carrito
    'GET /api/cart': 'Ver carrito',
    'POST /api/cart/add': 'Agregar al carrito',
    'POST /api/cart/remove': 'Quitar del carrito',
    'POST /api/cart/update': 'Cambiar cantidad',
    'POST /api/cart/clear': 'Vaciar carrito',
    'POST /api/cart/checkout': 'Confirmar venta',

    # Ventas y reportes
    'GET /api/sales': 'Ver historial de ventas',
    'GET /api/sales/<sale_id>': 'Ver detalle de venta',
    'GET /api/dashboard': 'Ver dashboard',
    'GET /api/dashboard/expenses': 'Ver gastos',
    'POST /api/dashboard/expenses': 'Guardar gastos',

    # Actividad
    'GET /api/activity': 'Ver registro de actividad',
}

_write_lock = threading.Lock()


def configure(enabled=None, logs_dir=None):
    """
    Ajusta el profiling en tiempo de ejecución.

    Args:
        enabled: Activar/desactivar escritura de logs y estadísticas
        logs_dir: Directorio donde escribir los archivos de log
    """
    if enabled is not None:
        _settings['enabled'] = bool(enabled)
    if logs_dir:
        _settings['logs_dir'] = logs_dir


def is_enabled():
    return _settings['enabled']


def _log_path(filename):
    return os.path.join(_settings['logs_dir'], filename)


def _ensure_logs_dir():
    """Crea el directorio de logs si no existe"""
    os.makedirs(_settings['logs_dir'], exist_ok=True)


# ═══════════════════════════════════════════════════════════════════════════
# ESTADÍSTICAS DE FUNCIONES (en memoria)
# ═══════════════════════════════════════════════════════════════════════════

# Estructura: {nombre_funcion: {calls: int, total_time: float, max_time: float}}
_function_stats = defaultdict(lambda: {'calls': 0, 'total_time': 0.0, 'max_time': 0.0})
_stats_lock = threading.Lock()


# ═══════════════════════════════════════════════════════════════════════════
# FUNCIONES DE LOGGING
# ═══════════════════════════════════════════════════════════════════════════

def _get_timestamp():
    """Obtiene timestamp legible"""
    return datetime.now().strftime('%Y-%m-%d %H:%M:%S')


def _write_log(filename, content):
    """Escribe contenido a un archivo de log (thread-safe)"""
    try:
        with _write_lock:
            _ensure_logs_dir()
            with open(_log_path(filename), 'a', encoding='utf-8') as f:
                f.write(content)
    except OSError:
        pass  # Un log que no se puede escribir no debe tumbar la petición


def _get_route_name(method, path, rule=None):
    """
    Obtiene nombre legible para una ruta.
    Intenta con la ruta exacta y luego con la regla de Flask.
    """
    key = f"{method} {path}"
    if key in ROUTE_NAMES:
        return ROUTE_NAMES[key]

    if rule:
        rule_key = f"{method} {rule}"
        if rule_key in ROUTE_NAMES:
            return ROUTE_NAMES[rule_key]

    return key


# ═══════════════════════════════════════════════════════════════════════════
# 1️⃣ PROFILING DE RUTAS (Middleware Flask)
# ═══════════════════════════════════════════════════════════════════════════

def log_route_performance(method, path, rule, time_ms, status=None):
    """
    Registra el rendimiento de una ruta en performance.log

    Args:
        method: GET, POST, etc.
        path: Ruta solicitada (/api/inventory/item-1/restock)
        rule: Regla de Flask (/api/inventory/<item_id>/restock)
        time_ms: Tiempo en milisegundos
        status: Código HTTP de la respuesta
    """
    if not is_enabled():
        return

    action_name = _get_route_name(method, path, rule)

    log_entry = f"""
════════════════════════════════════════
[PERFORMANCE] {_get_timestamp()}
────────────────────────────────────────
Acción: {action_name}
Ruta: {method} {path}
Estado: {status}
Tiempo: {time_ms:.0f} ms
"""

    _write_log(PERFORMANCE_LOG, log_entry)


def log_slow_route(method, path, rule, time_ms, level='WARNING'):
    """
    Registra una ruta lenta en slow_routes.log

    Args:
        level: 'WARNING' (>300ms) o 'CRITICAL' (>700ms)
    """
    if not is_enabled():
        return

    action_name = _get_route_name(method, path, rule)

    emoji = '⚠️' if level == 'WARNING' else '🔴'
    severity = 'LENTA' if level == 'WARNING' else 'MUY LENTA'

    log_entry = f"""
{emoji} [{level}] {_get_timestamp()}
────────────────────────────────────────
Ruta {severity}: {action_name}
Detalle: {method} {path}
Tiempo: {time_ms:.0f} ms (umbral: {THRESHOLD_WARNING if level == 'WARNING' else THRESHOLD_CRITICAL} ms)
────────────────────────────────────────
"""

    _write_log(SLOW_ROUTES_LOG, log_entry)


# ═══════════════════════════════════════════════════════════════════════════
# 2️⃣ HOOKS PARA FLASK (before/after request)
# ═══════════════════════════════════════════════════════════════════════════

def init_profiling(app):
    """
    Inicializa el sistema de profiling en una app Flask.
    Lee PROFILING_ENABLED y LOGS_DIR de app.config y registra
    hooks before_request y after_request.

    Uso:
        from sari_pos.performance_logger import init_profiling
        init_profiling(app)
    """
    configure(
        enabled=app.config.get('PROFILING_ENABLED', True),
        logs_dir=app.config.get('LOGS_DIR')
    )

    @app.before_request
    def _start_timer():
        from flask import g
        g.start_time = time.perf_counter()

    @app.after_request
    def _log_request(response):
        from flask import g, request

        if not is_enabled() or not hasattr(g, 'start_time'):
            return response

        elapsed = (time.perf_counter() - g.start_time) * 1000  # ms

        method = request.method
        path = request.path
        rule = str(request.url_rule) if request.url_rule else path

        log_route_performance(method, path, rule, elapsed, response.status_code)

        # Detectar rutas lentas
        if elapsed >= THRESHOLD_CRITICAL:
            log_slow_route(method, path, rule, elapsed, 'CRITICAL')
        elif elapsed >= THRESHOLD_WARNING:
            log_slow_route(method, path, rule, elapsed, 'WARNING')

        return response


# ═══════════════════════════════════════════════════════════════════════════
# 3️⃣ DECORADOR PARA FUNCIONES CLAVE
# ═══════════════════════════════════════════════════════════════════════════

def profile_function(func=None, name=None):
    """
    Decorador para medir rendimiento de funciones críticas.

    Uso:
        @profile_function
        def mi_funcion():
            ...

        @profile_function(name="Crear venta desde carrito")
        def create_sale_from_cart():
            ...

    Registra:
        - Cantidad de llamadas
        - Tiempo promedio
        - Tiempo máximo
    """
    def decorator(fn):
        func_name = name or fn.__name__

        @wraps(fn)
        def wrapper(*args, **kwargs):
            if not is_enabled():
                return fn(*args, **kwargs)

            start = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000

                with _stats_lock:
                    stats = _function_stats[func_name]
                    stats['calls'] += 1
                    stats['total_time'] += elapsed_ms
                    if elapsed_ms > stats['max_time']:
                        stats['max_time'] = elapsed_ms

                # Si es muy lenta, loguear inmediatamente
                if elapsed_ms >= THRESHOLD_WARNING:
                    _log_slow_function_call(func_name, elapsed_ms)

        return wrapper

    # Permitir uso sin paréntesis: @profile_function
    if func is not None:
        return decorator(func)
    return decorator


def _log_slow_function_call(func_name, time_ms):
    """Registra una llamada lenta a una función"""
    severity = 'CRÍTICO' if time_ms >= THRESHOLD_CRITICAL else 'LENTO'
    emoji = '🔴' if time_ms >= THRESHOLD_CRITICAL else '⚠️'

    log_entry = f"""
{emoji} [{severity}] {_get_timestamp()}
Función: {func_name}
Tiempo: {time_ms:.0f} ms
────────────────────────────────────────
"""

    _write_log(SLOW_FUNCTIONS_LOG, log_entry)


# ═══════════════════════════════════════════════════════════════════════════
# 4️⃣ REPORTE DE ESTADÍSTICAS
# ═══════════════════════════════════════════════════════════════════════════

def get_function_stats():
    """
    Obtiene estadísticas de todas las funciones perfiladas.

    Returns:
        dict: {nombre: {calls, avg_time, max_time}}
    """
    with _stats_lock:
        result = {}
        for func_name, stats in _function_stats.items():
            calls = stats['calls']
            avg = stats['total_time'] / calls if calls > 0 else 0
            result[func_name] = {
                'calls': calls,
                'avg_time': round(avg, 2),
                'max_time': round(stats['max_time'], 2)
            }
        return result


def reset_stats():
    """Reinicia todas las estadísticas (útil para testing)"""
    with _stats_lock:
        _function_stats.clear()


__all__ = [
    'THRESHOLD_WARNING',
    'THRESHOLD_CRITICAL',
    'configure',
    'is_enabled',
    'init_profiling',
    'profile_function',
    'get_function_stats',
    'reset_stats',
]
