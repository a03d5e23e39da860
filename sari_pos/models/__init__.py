# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema
# ==============================================================================
# Este módulo define todas las entidades del dominio usando dataclasses.
# Beneficios:
#   - Type hints para mejor documentación y autocompletado
#   - Fácil serialización/deserialización para la API JSON
#   - Independiente del mecanismo de almacenamiento (memoria ahora)
# ==============================================================================

from .entities import (
    # Enumeraciones
    Category,
    PaymentMethod,
    LOW_STOCK_THRESHOLD,
    parse_category,
    parse_payment_method,

    # Inventario
    InventoryItem,

    # Carrito y ventas
    CartItem,
    SaleItem,
    Sale,
)
from .seed import INITIAL_INVENTORY

__all__ = [
    # Enumeraciones
    'Category',
    'PaymentMethod',
    'LOW_STOCK_THRESHOLD',
    'parse_category',
    'parse_payment_method',

    # Inventario
    'InventoryItem',
    'INITIAL_INVENTORY',

    # Carrito y ventas
    'CartItem',
    'SaleItem',
    'Sale',
]
