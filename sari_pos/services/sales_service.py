# ==============================================================================
# SERVICIO DE VENTAS
# ==============================================================================
# Centraliza la creación de ventas y la consulta del libro de ventas.
# Una venta registrada es inmutable: no hay edición ni anulación.
# ==============================================================================

import threading
from collections import OrderedDict
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from sari_pos.models import CartItem, Sale
from sari_pos.performance_logger import profile_function
from sari_pos.repositories.interfaces import ISalesRepository
from sari_pos.services.audit_service import AuditService
from sari_pos.services.inventory_service import InventoryService


class SalesService:
    """
    Servicio para gestión de ventas.

    Responsabilidades:
    - Crear ventas desde el carrito (validación de stock todo o nada)
    - Descontar inventario
    - Consultar ventas y agrupar sus líneas para el detalle
    """

    def __init__(
        self,
        sales_repo: ISalesRepository,
        inventory_service: InventoryService,
        audit_service: AuditService = None,
        clock: Callable[[], datetime] = None,
        lock=None
    ):
        """
        Inicializa el servicio de ventas.

        Args:
            sales_repo: Repositorio de ventas
            inventory_service: Servicio de inventario
            audit_service: Servicio de actividad (opcional)
            clock: Función que retorna la hora actual (inyectable en tests)
            lock: Lock compartido de operaciones de escritura
        """
        self.sales_repo = sales_repo
        self.inventory_service = inventory_service
        self.audit_service = audit_service
        self.clock = clock or datetime.now
        self._lock = lock or threading.RLock()

    # =========================================================================
    # CREACIÓN DE VENTAS
    # =========================================================================

    @profile_function(name="Crear venta desde carrito")
    def create_sale_from_cart(self, cart_items: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Crea una venta desde las líneas del carrito.
        Esta es la ÚNICA función que crea ventas - centralizada.

        Args:
            cart_items: Líneas del carrito

        Returns:
            Dict con resultado:
            - ok: True/False
            - error: mensaje si falló
            - out_of_stock: detalle de líneas sin stock suficiente
            - sale: venta registrada
        """
        if not cart_items:
            return {'ok': False, 'error': 'El carrito está vacío'}

        # Validar y descontar bajo un mismo lock: dos ventas simultáneas
        # no pueden ver el mismo stock
        with self._lock:
            return self._create_sale(cart_items)

    def _create_sale(self, cart_items: List[Dict[str, Any]]) -> Dict[str, Any]:
        lines = [CartItem.from_dict(line) for line in cart_items]
        inventory = self.inventory_service.get_all_items()

        # Cantidad total pedida por producto (puede haber varias líneas
        # del mismo producto con distinto método de pago)
        requested = OrderedDict()
        for line in lines:
            requested[line.item_id] = requested.get(line.item_id, 0) + line.quantity

        # Validar stock de TODAS las líneas antes de tocar nada
        errors = []
        out_of_stock = []
        for item_id, qty in requested.items():
            item = inventory.get(item_id)
            available = int(item.get('stock', 0)) if item else 0
            if item is None or available < qty:
                name = item.get('name') if item else next(
                    (line.name for line in lines if line.item_id == item_id), item_id
                )
                errors.append(f"Stock insuficiente para {name}. Disponible: {available}")
                out_of_stock.append({
                    'itemId': item_id,
                    'name': name,
                    'requested': qty,
                    'available': available
                })

        if errors:
            return {'ok': False, 'error': '; '.join(errors), 'out_of_stock': out_of_stock}

        now = self.clock()
        sale = Sale(
            id=self.sales_repo.get_next_sale_id(now),
            date=now,
            items=[line.to_sale_item() for line in lines],
        )

        stock_updates = {
            item_id: int(inventory[item_id].get('stock', 0)) - qty
            for item_id, qty in requested.items()
        }

        sale_data = sale.to_dict()
        self.sales_repo.create_sale(sale_data)
        self.inventory_service.apply_stock_updates(stock_updates)

        if self.audit_service:
            self.audit_service.log_sale_created(sale.id, sale.total_amount, len(sale.items))
            self.audit_service.log_stock_sold(sale.id, stock_updates)

        return {
            'ok': True,
            'mensaje': f"Venta {sale.id} registrada",
            'sale': sale_data,
            'stock_updates': stock_updates
        }

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_all_sales(self) -> List[Dict[str, Any]]:
        """Todas las ventas en orden de registro."""
        return self.sales_repo.load()

    def get_sale(self, sale_id: str) -> Optional[Dict[str, Any]]:
        return self.sales_repo.get_by_id(sale_id)

    @staticmethod
    def group_sale_items(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Agrupa las líneas de una venta con mismo producto, precio y método
        de pago sumando cantidades. Solo para mostrar: no modifica la venta.

        Args:
            items: Líneas de la venta

        Returns:
            Líneas agrupadas en orden de primera aparición
        """
        grouped = OrderedDict()
        for item in items:
            key = (item.get('itemId'), item.get('price'), item.get('paymentMethod'))
            if key not in grouped:
                grouped[key] = dict(item, quantity=0)
            grouped[key]['quantity'] += item.get('quantity', 0)

        result = []
        for line in grouped.values():
            line['subtotal'] = round(line['quantity'] * line.get('price', 0), 2)
            result.append(line)
        return result

    def get_sale_detail(self, sale_id: str) -> Optional[Dict[str, Any]]:
        """
        Venta con sus líneas agrupadas para el detalle.

        Returns:
            Dict con la venta y 'groupedItems', o None si no existe
        """
        sale = self.get_sale(sale_id)
        if not sale:
            return None
        return dict(sale, groupedItems=self.group_sale_items(sale.get('items', [])))
