# ==============================================================================
# UTILIDADES DE CONVERSIÓN
# ==============================================================================
# Los valores llegan desde JSON o query strings: pueden ser int, float, str
# o None. Estas funciones nunca lanzan excepción, retornan `default`.
# ==============================================================================

import math
from datetime import date, datetime


def to_int(v, default=None):
    """Convierte a int. Rechaza bool y floats con parte decimal."""
    if v is None or isinstance(v, bool):
        return default
    if isinstance(v, float):
        return int(v) if v.is_integer() else default
    try:
        return int(str(v).strip())
    except (TypeError, ValueError):
        return default


def to_float(v, default=None):
    """Convierte a float finito."""
    if v is None or isinstance(v, bool):
        return default
    try:
        f = float(v)
    except (TypeError, ValueError):
        return default
    return f if math.isfinite(f) else default


def parse_date(v):
    """
    Parsea una fecha YYYY-MM-DD.

    Returns:
        date o None si está vacía

    Raises:
        ValueError: si el formato es inválido
    """
    if v is None or v == '':
        return None
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, date):
        return v
    return datetime.strptime(str(v).strip(), '%Y-%m-%d').date()


def is_truthy(v) -> bool:
    """Interpreta flags de query string ('1', 'true', 'yes', 'si')."""
    if isinstance(v, bool):
        return v
    return str(v or '').strip().lower() in ('1', 'true', 'yes', 'si', 'sí', 'on')
