# ==============================================================================
# REPOSITORIO DEL CARRITO
# ==============================================================================
# Líneas de la venta en curso. Es estado transitorio: se vacía al confirmar
# la venta o al cancelarla.
# ==============================================================================

from typing import Any, Dict, List

from .base import ListRepository


class CartRepository(ListRepository):
    """
    Repositorio para el carrito de la venta en curso.

    Formato de cada línea:
    {
        "cartId": "3f2a...",
        "itemId": "item-1",
        "name": "Potato Chips",
        "quantity": 2,
        "price": 1.5,
        "paymentMethod": "Cash"
    }
    """

    def load(self) -> List[Dict[str, Any]]:
        """Carga las líneas del carrito."""
        return self.get_all()

    def save(self, lines: List[Dict[str, Any]]) -> None:
        """Guarda las líneas del carrito (reemplazo completo)."""
        self.save_all(lines)

    def clear(self) -> None:
        """Vacía el carrito."""
        self.save_all([])
