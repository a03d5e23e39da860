# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Esta capa encapsula todo el acceso al almacenamiento (actualmente memoria).
# Para agregar persistencia solo hay que modificar esta capa.
# Las interfaces (métodos públicos) permanecen iguales.
#
# ESTRUCTURA:
# ├── interfaces.py            → Protocolos/Interfaces (contratos)
# ├── base.py                  → Clases base en memoria (DictRepository, ListRepository)
# ├── inventory_repository.py  → Inventario
# ├── sales_repository.py      → Libro de ventas (solo se agrega)
# ├── cart_repository.py       → Carrito de la venta en curso
# ├── audit_repository.py      → Registro de actividad
# └── settings_repository.py   → Configuraciones editables (gastos)
# ==============================================================================

# Interfaces
from .interfaces import (
    IInventoryRepository,
    ISalesRepository,
    ICartRepository,
    IAuditRepository,
    ISettingsRepository,
)

# Implementaciones concretas (memoria)
from .base import BaseRepository, DictRepository, ListRepository
from .inventory_repository import InventoryRepository
from .sales_repository import SalesRepository
from .cart_repository import CartRepository
from .audit_repository import AuditRepository
from .settings_repository import SettingsRepository

__all__ = [
    # Interfaces
    'IInventoryRepository',
    'ISalesRepository',
    'ICartRepository',
    'IAuditRepository',
    'ISettingsRepository',

    # Clases base
    'BaseRepository',
    'DictRepository',
    'ListRepository',

    # Implementaciones en memoria
    'InventoryRepository',
    'SalesRepository',
    'CartRepository',
    'AuditRepository',
    'SettingsRepository',
]
