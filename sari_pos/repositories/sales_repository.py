# ==============================================================================
# REPOSITORIO DE VENTAS
# ==============================================================================
# Libro de ventas en memoria. Solo se agregan ventas: una venta registrada
# nunca se modifica ni se elimina.
# ==============================================================================

from datetime import datetime
from typing import Any, Dict, List, Optional

from .base import ListRepository


class SalesRepository(ListRepository):
    """
    Repositorio para el libro de ventas.

    Formato de cada venta:
    {
        "id": "SALE-123456",
        "date": "2024-01-01T10:00:00",
        "items": [{"itemId": ..., "name": ..., "quantity": ..., "price": ..., "paymentMethod": ...}],
        "totalAmount": 15.0
    }
    """

    ID_PREFIX = 'SALE-'

    def load(self) -> List[Dict[str, Any]]:
        """
        Carga todas las ventas.

        Returns:
            Lista de ventas en orden de registro
        """
        return self.get_all()

    def get_by_id(self, sale_id: str) -> Optional[Dict[str, Any]]:
        """
        Busca una venta por ID.

        Returns:
            Datos de la venta o None
        """
        return self.find_by('id', sale_id)

    def sale_exists(self, sale_id: str) -> bool:
        with self._lock:
            return any(sale.get('id') == sale_id for sale in self._data)

    def create_sale(self, sale_data: Dict[str, Any]) -> str:
        """
        Registra una nueva venta al final del libro.

        Args:
            sale_data: Datos de la venta (debe incluir 'id')

        Returns:
            ID de la venta
        """
        self.append(sale_data)
        return sale_data.get('id', '')

    def get_next_sale_id(self, now: datetime) -> str:
        """
        Genera el ID de una nueva venta a partir de la hora.
        Formato: SALE-XXXXXX con los últimos 6 dígitos del timestamp en ms.
        Si el ID ya existe se avanza un milisegundo hasta encontrar uno libre.
        """
        millis = int(now.timestamp() * 1000)
        with self._lock:
            used = {sale.get('id') for sale in self._data}
            while True:
                sale_id = f"{self.ID_PREFIX}{str(millis)[-6:]}"
                if sale_id not in used:
                    return sale_id
                millis += 1
