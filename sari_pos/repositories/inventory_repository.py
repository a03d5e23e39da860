# ==============================================================================
# REPOSITORIO DE INVENTARIO
# ==============================================================================
# Encapsula todo el acceso al inventario en memoria.
# El inventario se almacena como diccionario ordenado: {id: producto}
# ==============================================================================

from typing import Any, Dict, Iterable, List, Optional

from .base import DictRepository


class InventoryRepository(DictRepository):
    """
    Repositorio para gestión de inventario.

    Formato de cada producto:
    {
        "id": "item-1",
        "name": "Potato Chips",
        "category": "Snacks",
        "stock": 150,
        "costPrice": 0.75,
        "sellingPrice": 1.5
    }
    """

    ID_PREFIX = 'item-'

    def __init__(self, initial_items: Iterable[Dict[str, Any]] = None):
        """
        Inicializa el repositorio de inventario.

        Args:
            initial_items: Productos iniciales (ej: INITIAL_INVENTORY)
        """
        super().__init__({item['id']: item for item in (initial_items or [])})

    def load(self) -> Dict[str, Dict[str, Any]]:
        """
        Carga todo el inventario.

        Returns:
            Diccionario {id: producto} en orden de inserción
        """
        return self.get_all()

    def get_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        """
        Obtiene un producto por su ID.

        Returns:
            Copia del producto o None
        """
        return self.get_by_id(item_id)

    def item_exists(self, item_id: str) -> bool:
        """Verifica si un producto existe."""
        with self._lock:
            return item_id in self._data

    def create_item(self, item_data: Dict[str, Any]) -> None:
        """
        Crea un nuevo producto al final del inventario.

        Args:
            item_data: Datos del producto (debe incluir 'id')
        """
        self.update(item_data['id'], item_data)

    def update_item(self, item_id: str, item_data: Dict[str, Any]) -> bool:
        """
        Reemplaza un producto existente conservando su posición.

        Returns:
            True si se actualizó, False si no existe
        """
        with self._lock:
            if item_id not in self._data:
                return False
            self.update(item_id, dict(item_data, id=item_id))
            return True

    def set_stock(self, updates: Dict[str, int]) -> None:
        """
        Aplica varios cambios de stock bajo un mismo lock.
        IDs inexistentes se ignoran.

        Args:
            updates: {id: nuevo_stock}
        """
        with self._lock:
            for item_id, new_stock in updates.items():
                if item_id in self._data:
                    self._data[item_id]['stock'] = new_stock

    def delete_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        """
        Elimina un producto.

        Returns:
            Datos del producto eliminado o None
        """
        return self.delete(item_id)

    def get_low_stock_items(self, threshold: int) -> List[Dict[str, Any]]:
        """
        Obtiene productos con stock en o por debajo del umbral.
        """
        return [item for item in self.load().values() if item.get('stock', 0) <= threshold]

    def get_next_id(self) -> str:
        """
        Genera el siguiente ID disponible.
        Formato: item-N donde N = mayor sufijo numérico + 1.
        """
        max_num = 0
        for item_id in self.load():
            if item_id.startswith(self.ID_PREFIX):
                try:
                    max_num = max(max_num, int(item_id[len(self.ID_PREFIX):]))
                except ValueError:
                    continue
        return f"{self.ID_PREFIX}{max_num + 1}"
