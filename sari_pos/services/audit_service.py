# ==============================================================================
# SERVICIO DE ACTIVIDAD
# ==============================================================================
# Centraliza el registro de eventos del negocio.
# Formatea mensajes humanizados y categoriza eventos.
# ==============================================================================

from typing import Any, Dict, List

from sari_pos.repositories.interfaces import IAuditRepository


class AuditService:
    """
    Servicio para registro y consulta de actividad.

    Centraliza:
    - Registro de eventos con mensajes humanizados
    - Categorización de eventos (VENTA, STOCK, PRODUCTO, SISTEMA)
    - Consulta de eventos recientes
    """

    # Tipos de eventos
    TYPE_VENTA = 'VENTA'
    TYPE_STOCK = 'STOCK'
    TYPE_PRODUCTO = 'PRODUCTO'
    TYPE_SISTEMA = 'SISTEMA'

    def __init__(self, audit_repo: IAuditRepository, currency: str = '₱'):
        """
        Inicializa el servicio de actividad.

        Args:
            audit_repo: Repositorio de actividad
            currency: Símbolo de moneda para los mensajes
        """
        self.audit_repo = audit_repo
        self.currency = currency

    # =========================================================================
    # REGISTRO DE EVENTOS
    # =========================================================================

    def log(
        self,
        log_type: str,
        message: str,
        related_id: str = '',
        details: Dict[str, Any] = None
    ) -> None:
        """
        Registra un evento genérico.

        Args:
            log_type: Tipo de evento (VENTA, STOCK, etc.)
            message: Mensaje descriptivo humanizado
            related_id: ID relacionado (venta, producto)
            details: Detalles adicionales
        """
        self.audit_repo.log(log_type, message, related_id, details or {})

    def log_sale_created(self, sale_id: str, total: float, lines_count: int) -> None:
        """
        Registra una venta confirmada.

        Args:
            sale_id: ID de la venta
            total: Total de la venta
            lines_count: Cantidad de líneas
        """
        message = f"Venta {sale_id} registrada - Total: {self.currency}{total:.2f} - {lines_count} líneas"
        self.log(
            self.TYPE_VENTA,
            message,
            sale_id,
            {'total': total, 'lines_count': lines_count}
        )

    def log_stock_add(self, item_id: str, name: str, quantity: int, new_stock: int) -> None:
        """
        Registra una entrada de stock.
        """
        message = f"Stock de {name}: +{quantity} unidades (nuevo stock: {new_stock})"
        self.log(
            self.TYPE_STOCK,
            message,
            item_id,
            {'quantity': quantity, 'new_stock': new_stock}
        )

    def log_stock_sold(self, sale_id: str, updates: Dict[str, int]) -> None:
        """
        Registra la salida de stock por una venta.

        Args:
            sale_id: ID de la venta
            updates: {item_id: nuevo_stock}
        """
        message = f"Stock descontado por venta {sale_id} ({len(updates)} productos)"
        self.log(self.TYPE_STOCK, message, sale_id, {'new_stock': dict(updates)})

    def log_product_created(self, item_id: str, name: str, initial_stock: int) -> None:
        message = f"Producto creado: {name} ({item_id}) con {initial_stock} unidades"
        self.log(self.TYPE_PRODUCTO, message, item_id, {'initial_stock': initial_stock})

    def log_product_updated(self, item_id: str, name: str, changes: Dict[str, Any]) -> None:
        """
        Registra la edición de un producto.

        Args:
            item_id: ID del producto
            name: Nombre (después de la edición)
            changes: Campos modificados {campo: {'from': x, 'to': y}}
        """
        fields = ', '.join(changes.keys()) if changes else 'sin cambios'
        message = f"Producto editado: {name} ({item_id}) - {fields}"
        self.log(self.TYPE_PRODUCTO, message, item_id, {'changes': changes})

    def log_product_deleted(self, item_id: str, name: str) -> None:
        message = f"Producto eliminado: {name} ({item_id})"
        self.log(self.TYPE_PRODUCTO, message, item_id)

    def log_expenses_changed(self, old_value: float, new_value: float) -> None:
        message = f"Gastos actualizados: {self.currency}{old_value:.2f} → {self.currency}{new_value:.2f}"
        self.log(self.TYPE_SISTEMA, message, 'expenses', {'from': old_value, 'to': new_value})

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_recent_logs(self, limit: int = 100) -> List[Dict[str, Any]]:
        return self.audit_repo.get_recent_logs(limit)

    def get_logs_by_type(self, log_type: str) -> List[Dict[str, Any]]:
        return self.audit_repo.get_logs_by_type(log_type)
