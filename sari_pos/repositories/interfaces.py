# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
#
# Este archivo define las interfaces (protocolos) que todos los repositorios
# deben implementar. Esto permite:
#
# 1. INDEPENDENCIA DE ALMACENAMIENTO
#    - Los servicios dependen de interfaces, NO de implementaciones concretas
#    - Hoy todo vive en memoria; agregar un archivo o una BD solo requiere
#      una nueva implementación
#
# 2. TESTING
#    - Los cálculos de reportes se prueban sin depender del almacenamiento
#
# 3. DOCUMENTACIÓN
#    - Contratos claros de qué hace cada repositorio
#
# ==============================================================================

from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


# ==============================================================================
# INTERFACES ESPECÍFICAS POR DOMINIO
# ==============================================================================

@runtime_checkable
class IInventoryRepository(Protocol):
    """
    Interfaz para el repositorio de inventario.
    """

    def load(self) -> Dict[str, Dict[str, Any]]:
        """Carga todo el inventario {id: producto} en orden de inserción."""
        ...

    def get_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        """Obtiene un producto por ID."""
        ...

    def item_exists(self, item_id: str) -> bool:
        """Verifica si un producto existe."""
        ...

    def create_item(self, item_data: Dict[str, Any]) -> None:
        """Crea un nuevo producto."""
        ...

    def update_item(self, item_id: str, item_data: Dict[str, Any]) -> bool:
        """Reemplaza un producto existente."""
        ...

    def set_stock(self, updates: Dict[str, int]) -> None:
        """Aplica varios cambios de stock {id: nuevo_stock} de una sola vez."""
        ...

    def delete_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        """Elimina un producto."""
        ...

    def get_low_stock_items(self, threshold: int) -> List[Dict[str, Any]]:
        """Productos con stock en o por debajo del umbral."""
        ...

    def get_next_id(self) -> str:
        """Genera el siguiente ID de producto."""
        ...


@runtime_checkable
class ISalesRepository(Protocol):
    """
    Interfaz para el libro de ventas (solo se agrega, nunca se modifica).
    """

    def load(self) -> List[Dict[str, Any]]:
        """Carga todas las ventas en orden de registro."""
        ...

    def get_by_id(self, sale_id: str) -> Optional[Dict[str, Any]]:
        """Obtiene una venta por ID."""
        ...

    def create_sale(self, sale_data: Dict[str, Any]) -> str:
        """Registra una nueva venta, retorna su ID."""
        ...

    def get_next_sale_id(self, now: datetime) -> str:
        """Genera un ID de venta único derivado de la hora."""
        ...


@runtime_checkable
class ICartRepository(Protocol):
    """
    Interfaz para el carrito de la venta en curso.
    """

    def load(self) -> List[Dict[str, Any]]:
        """Carga las líneas del carrito."""
        ...

    def save(self, lines: List[Dict[str, Any]]) -> None:
        """Guarda las líneas del carrito."""
        ...

    def clear(self) -> None:
        """Vacía el carrito."""
        ...


@runtime_checkable
class IAuditRepository(Protocol):
    """
    Interfaz para el registro de actividad.
    """

    def load(self) -> List[Dict[str, Any]]:
        """Carga todos los eventos (más recientes primero)."""
        ...

    def log(
        self,
        log_type: str,
        message: str,
        related_id: str,
        details: Dict[str, Any]
    ) -> None:
        """Registra un evento."""
        ...

    def get_recent_logs(self, limit: int = 100) -> List[Dict[str, Any]]:
        """Obtiene los eventos más recientes."""
        ...

    def get_logs_by_type(self, log_type: str) -> List[Dict[str, Any]]:
        """Filtra eventos por tipo."""
        ...


@runtime_checkable
class ISettingsRepository(Protocol):
    """
    Interfaz para las configuraciones editables de la tienda.
    """

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Obtiene una configuración."""
        ...

    def set_setting(self, key: str, value: Any) -> None:
        """Establece una configuración."""
        ...
