# ==============================================================================
# CONFIGURACIÓN
# ==============================================================================
# Valores por defecto con override por variables de entorno.
# Se carga con app.config.from_object(Config).
# ==============================================================================

import os

from sari_pos.models import LOW_STOCK_THRESHOLD


def _env_bool(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    # Reglas de negocio
    LOW_STOCK_THRESHOLD = int(os.environ.get('SARI_POS_LOW_STOCK_THRESHOLD', LOW_STOCK_THRESHOLD))
    DEFAULT_EXPENSES = float(os.environ.get('SARI_POS_DEFAULT_EXPENSES', 500))
    CURRENCY = os.environ.get('SARI_POS_CURRENCY', '₱')

    # Profiling (logs/performance.log, logs/slow_routes.log)
    PROFILING_ENABLED = _env_bool('SARI_POS_PROFILING', True)
    LOGS_DIR = os.environ.get(
        'SARI_POS_LOGS_DIR',
        os.path.join(os.path.dirname(os.path.abspath(__file__)), 'logs')
    )

    # Servidor de desarrollo
    HOST = os.environ.get('FLASK_HOST', '0.0.0.0')
    PORT = int(os.environ.get('FLASK_PORT', 5000))
    DEBUG = _env_bool('FLASK_DEBUG', False)
