# ==============================================================================
# REPOSITORIO DE ACTIVIDAD
# ==============================================================================
# Registro en memoria de los eventos del negocio (ventas, stock, productos).
# Se almacena como lista, más reciente primero.
# ==============================================================================

from datetime import datetime
from typing import Any, Callable, Dict, List

from .base import ListRepository


class AuditRepository(ListRepository):
    """
    Repositorio para el registro de actividad.

    Formato de cada evento:
    {
        "type": "VENTA",
        "message": "Venta SALE-123456 registrada - Total: ₱15.00 - 1 líneas",
        "timestamp": "2024-01-01 10:00:00",
        "related_id": "SALE-123456",
        "details": {...}
    }
    """

    # Límite de registros para no crecer sin control
    MAX_LOGS = 10000

    def __init__(self, clock: Callable[[], datetime] = None):
        """
        Inicializa el repositorio de actividad.

        Args:
            clock: Función que retorna la hora actual (inyectable en tests)
        """
        super().__init__()
        self._clock = clock or datetime.now

    def load(self) -> List[Dict[str, Any]]:
        """
        Carga todos los eventos.

        Returns:
            Lista de eventos (más recientes primero)
        """
        return self.get_all()

    def log(
        self,
        log_type: str,
        message: str,
        related_id: str = '',
        details: Dict[str, Any] = None
    ) -> None:
        """
        Registra un nuevo evento.

        Args:
            log_type: Tipo de evento (VENTA, STOCK, PRODUCTO, SISTEMA)
            message: Mensaje descriptivo humanizado
            related_id: ID relacionado (venta, producto)
            details: Detalles adicionales
        """
        log_entry = {
            'type': log_type,
            'message': message,
            'timestamp': self._clock().strftime("%Y-%m-%d %H:%M:%S"),
            'related_id': related_id,
            'details': details or {}
        }

        with self._lock:
            self._data.insert(0, log_entry)
            # Mantener solo los últimos MAX_LOGS registros
            del self._data[self.MAX_LOGS:]

    def get_recent_logs(self, limit: int = 100) -> List[Dict[str, Any]]:
        """
        Obtiene los eventos más recientes.

        Args:
            limit: Número máximo de eventos
        """
        return self.load()[:limit]

    def get_logs_by_type(self, log_type: str) -> List[Dict[str, Any]]:
        """
        Filtra eventos por tipo.
        """
        return [log for log in self.load() if log.get('type') == log_type]
