# ==============================================================================
# SERVICIO DE INVENTARIO
# ==============================================================================
# Centraliza toda la lógica de negocio relacionada con productos y stock:
# alta de productos, reposición, edición, eliminación y alertas de stock bajo.
# ==============================================================================

import threading
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from sari_pos.models import (
    Category,
    InventoryItem,
    LOW_STOCK_THRESHOLD,
    parse_category,
)
from sari_pos.repositories.interfaces import IInventoryRepository
from sari_pos.services.audit_service import AuditService
from sari_pos.utils import to_float, to_int


class InventoryService:
    """
    Servicio para gestión de inventario.

    Responsabilidades:
    - Alta, edición y eliminación de productos
    - Control de stock (reposición y descuento por ventas)
    - Señal de stock bajo (derivada, no almacenada)
    - Agrupación por categoría para el selector de productos

    Las operaciones que modifican datos retornan un dict con 'ok' y,
    si fallan, 'error'. Nunca modifican nada cuando la validación falla.
    """

    def __init__(
        self,
        inventory_repo: IInventoryRepository,
        audit_service: AuditService = None,
        low_stock_threshold: int = LOW_STOCK_THRESHOLD,
        lock=None
    ):
        """
        Inicializa el servicio de inventario.

        Args:
            inventory_repo: Repositorio de inventario
            audit_service: Servicio de actividad (opcional)
            low_stock_threshold: Umbral de stock bajo
            lock: Lock compartido de operaciones de escritura
        """
        self.inventory_repo = inventory_repo
        self.audit_service = audit_service
        self.low_stock_threshold = low_stock_threshold
        self._lock = lock or threading.RLock()

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_all_items(self) -> Dict[str, Dict[str, Any]]:
        """
        Obtiene todo el inventario.

        Returns:
            Diccionario {id: producto} en orden de inserción
        """
        return self.inventory_repo.load()

    def get_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        """
        Obtiene un producto por su ID.

        Returns:
            Datos del producto o None
        """
        if not item_id:
            return None
        return self.inventory_repo.get_item(item_id)

    def item_exists(self, item_id: str) -> bool:
        return bool(item_id) and self.inventory_repo.item_exists(item_id)

    def is_low_stock(self, item: Dict[str, Any]) -> bool:
        """Stock en o por debajo del umbral."""
        return InventoryItem.from_dict(item).is_low_stock(self.low_stock_threshold)

    def with_low_stock_flag(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """Copia del producto con el campo derivado 'lowStock'."""
        return dict(item, lowStock=self.is_low_stock(item))

    def list_items(self, category: str = None) -> List[Dict[str, Any]]:
        """
        Lista el inventario, opcionalmente filtrado por categoría.

        Args:
            category: Valor de Category o None/'all' para todas

        Returns:
            Lista de productos con el flag 'lowStock'
        """
        items = list(self.get_all_items().values())
        if category and category != 'all':
            items = [i for i in items if i.get('category') == category]
        return [self.with_low_stock_flag(i) for i in items]

    def get_low_stock_items(self) -> List[Dict[str, Any]]:
        return [
            self.with_low_stock_flag(i)
            for i in self.inventory_repo.get_low_stock_items(self.low_stock_threshold)
        ]

    def group_by_category(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Agrupa los productos por categoría, en orden de primera aparición.

        Returns:
            {categoria: [productos]}
        """
        grouped = OrderedDict()
        for item in self.get_all_items().values():
            grouped.setdefault(item.get('category', Category.MISC.value), []).append(item)
        return dict(grouped)

    # =========================================================================
    # ALTA, REPOSICIÓN, EDICIÓN, ELIMINACIÓN
    # =========================================================================

    def add_new_item(
        self,
        name: str,
        category: str = Category.MISC.value,
        cost_price: Any = None,
        selling_price: Any = None,
        initial_stock: Any = 1
    ) -> Dict[str, Any]:
        """
        Crea un producto nuevo con stock inicial.

        Args:
            name: Nombre del producto (obligatorio)
            category: Categoría (por defecto Miscellaneous)
            cost_price: Costo unitario (> 0)
            selling_price: Precio de venta (> 0)
            initial_stock: Stock inicial (entero >= 0)

        Returns:
            Dict con ok, item o error
        """
        name = (name or '').strip()
        cost = to_float(cost_price)
        price = to_float(selling_price)

        if not name or cost is None or cost <= 0 or price is None or price <= 0:
            return {'ok': False, 'error': 'Completa nombre, costo y precio de venta (mayores a 0)'}

        cat = parse_category(category or Category.MISC.value)
        if cat is None:
            return {'ok': False, 'error': f"Categoría inválida: {category}"}

        stock = to_int(initial_stock)
        if stock is None or stock < 0:
            return {'ok': False, 'error': 'Stock inicial debe ser un entero mayor o igual a 0'}

        with self._lock:
            item = InventoryItem(
                id=self.inventory_repo.get_next_id(),
                name=name,
                category=cat,
                stock=stock,
                cost_price=cost,
                selling_price=price,
            )
            item_data = item.to_dict()
            self.inventory_repo.create_item(item_data)

        if self.audit_service:
            self.audit_service.log_product_created(item.id, item.name, stock)

        return {'ok': True, 'mensaje': 'Producto agregado al inventario', 'item': self.with_low_stock_flag(item_data)}

    def restock(self, item_id: str, quantity: Any) -> Dict[str, Any]:
        """
        Suma unidades al stock de un producto existente.

        Args:
            item_id: ID del producto
            quantity: Unidades a sumar (entero > 0)

        Returns:
            Dict con ok, item o error
        """
        if not item_id:
            return {'ok': False, 'error': 'Selecciona un producto para reponer stock'}

        qty = to_int(quantity)
        if qty is None or qty <= 0:
            return {'ok': False, 'error': 'Cantidad debe ser mayor a 0'}

        with self._lock:
            item = self.get_item(item_id)
            if not item:
                return {'ok': False, 'error': 'Producto no encontrado', 'not_found': True}

            new_stock = int(item.get('stock', 0)) + qty
            self.inventory_repo.set_stock({item_id: new_stock})
            item['stock'] = new_stock

        if self.audit_service:
            self.audit_service.log_stock_add(item_id, item.get('name', ''), qty, new_stock)

        return {'ok': True, 'mensaje': 'Stock actualizado', 'item': self.with_low_stock_flag(item)}

    def edit_item(self, updated_item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Reemplaza nombre, categoría y precios del producto con ese ID.
        El stock se conserva salvo que venga uno válido en el payload.

        Args:
            updated_item: Producto completo (debe incluir 'id')

        Returns:
            Dict con ok, item o error
        """
        updated_item = updated_item or {}
        with self._lock:
            item_id = updated_item.get('id')
            current = self.get_item(item_id)
            if not current:
                return {'ok': False, 'error': 'Producto no encontrado', 'not_found': True}

            name = (updated_item.get('name') or '').strip()
            if not name:
                return {'ok': False, 'error': 'El nombre es obligatorio'}

            cat = parse_category(updated_item.get('category') or current.get('category'))
            if cat is None:
                return {'ok': False, 'error': f"Categoría inválida: {updated_item.get('category')}"}

            cost = to_float(updated_item.get('costPrice'))
            price = to_float(updated_item.get('sellingPrice'))
            if cost is None or cost < 0 or price is None or price < 0:
                return {'ok': False, 'error': 'Costo y precio de venta deben ser números mayores o iguales a 0'}

            stock = current.get('stock', 0)
            if updated_item.get('stock') is not None:
                stock = to_int(updated_item.get('stock'))
                if stock is None or stock < 0:
                    return {'ok': False, 'error': 'Stock debe ser un entero mayor o igual a 0'}

            new_data = InventoryItem(
                id=item_id,
                name=name,
                category=cat,
                stock=stock,
                cost_price=cost,
                selling_price=price,
            ).to_dict()

            changes = {
                k: {'from': current.get(k), 'to': v}
                for k, v in new_data.items()
                if current.get(k) != v
            }

            self.inventory_repo.update_item(item_id, new_data)

            if self.audit_service:
                self.audit_service.log_product_updated(item_id, name, changes)

            return {'ok': True, 'mensaje': 'Producto actualizado', 'item': self.with_low_stock_flag(new_data)}

    def delete_item(self, item_id: str, confirmed: bool = False) -> Dict[str, Any]:
        """
        Elimina un producto. Requiere confirmación explícita.
        Las ventas históricas conservan nombre y precio desnormalizados.

        Args:
            item_id: ID del producto
            confirmed: El usuario confirmó la eliminación

        Returns:
            Dict con ok, item eliminado o error
        """
        with self._lock:
            item = self.get_item(item_id)
            if not item:
                return {'ok': False, 'error': 'Producto no encontrado', 'not_found': True}

            if not confirmed:
                return {
                    'ok': False,
                    'error': 'Se requiere confirmación para eliminar el producto. Esta acción es permanente.',
                    'confirmation_required': True
                }

            removed = self.inventory_repo.delete_item(item_id)

            if removed and self.audit_service:
                self.audit_service.log_product_deleted(item_id, item.get('name', ''))

            return {'ok': True, 'mensaje': 'Producto eliminado', 'item': removed}

    # =========================================================================
    # DESCUENTO DE STOCK (usado por ventas)
    # =========================================================================

    def apply_stock_updates(self, updates: Dict[str, int]) -> None:
        """
        Aplica los nuevos valores de stock calculados por una venta.

        Args:
            updates: {item_id: nuevo_stock}
        """
        self.inventory_repo.set_stock(updates)
