# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# Esta capa contiene TODA la lógica de negocio de la aplicación.
#
# PRINCIPIOS:
# 1. Los servicios orquestan operaciones entre repositorios
# 2. Aplican reglas de negocio y validaciones
# 3. Las rutas (controllers) solo llaman a servicios
# 4. Los servicios NO conocen el tipo de almacenamiento
#
# ESTRUCTURA:
# ├── inventory_service.py → Productos, stock, stock bajo
# ├── cart_service.py      → Carrito de la venta en curso
# ├── sales_service.py     → Creación de ventas y detalle
# ├── stats_service.py     → Historial filtrado, ganancias, dashboard
# └── audit_service.py     → Registro de actividad
# ==============================================================================

from sari_pos.services.inventory_service import InventoryService
from sari_pos.services.sales_service import SalesService
from sari_pos.services.cart_service import CartService
from sari_pos.services.audit_service import AuditService
from sari_pos.services.stats_service import StatsService

__all__ = [
    'InventoryService',
    'SalesService',
    'CartService',
    'AuditService',
    'StatsService',
]
