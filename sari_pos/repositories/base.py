# ==============================================================================
# REPOSITORIO BASE - Almacenamiento en memoria
# ==============================================================================
# No hay persistencia: todos los datos viven en el proceso y se pierden al
# reiniciar. Los repositorios entregan COPIAS de los registros para que
# nadie modifique el estado almacenado sin pasar por el repositorio.
# ==============================================================================

import copy
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class BaseRepository(ABC):
    """
    Clase base abstracta para todos los repositorios.
    Mantiene los datos en memoria con un lock para que el servidor de
    desarrollo (multi-hilo) no intercale dos escrituras.

    Para agregar persistencia:
    - Crear otra implementación de las interfaces en interfaces.py
    - Cambiar la instanciación en app_container.py
    """

    def __init__(self, initial_data: Any = None):
        """
        Inicializa el repositorio.

        Args:
            initial_data: Datos iniciales (se copian). None = estructura vacía
        """
        self._lock = threading.RLock()
        self._data = self._empty_data() if initial_data is None else copy.deepcopy(initial_data)

    @abstractmethod
    def _empty_data(self) -> Any:
        """
        Retorna la estructura de datos vacía para este repositorio.

        Returns:
            Estructura vacía (dict, list, etc.) según el repositorio
        """

    def _read_raw(self) -> Any:
        """
        Retorna una copia profunda de los datos almacenados.
        """
        with self._lock:
            return copy.deepcopy(self._data)

    def _write_raw(self, data: Any) -> None:
        """
        Reemplaza los datos almacenados por una copia de `data`.
        """
        with self._lock:
            self._data = copy.deepcopy(data)


class DictRepository(BaseRepository):
    """
    Repositorio base para datos almacenados como diccionario.
    El ID es la clave; se conserva el orden de inserción.

    Ejemplo: inventario -> {"item-1": {...}, "item-2": {...}}
    """

    def _empty_data(self) -> Dict:
        return {}

    def get_all(self) -> Dict[str, Any]:
        """
        Obtiene todos los registros.

        Returns:
            Diccionario con todos los datos
        """
        return self._read_raw()

    def get_by_id(self, record_id: Any) -> Optional[Dict[str, Any]]:
        """
        Obtiene un registro por su ID.

        Returns:
            Copia del registro o None si no existe
        """
        with self._lock:
            record = self._data.get(record_id)
            return copy.deepcopy(record) if record is not None else None

    def save_all(self, data: Dict[str, Any]) -> None:
        """Guarda todos los registros (reemplazo completo)."""
        self._write_raw(data)

    def update(self, record_id: Any, record_data: Dict[str, Any]) -> None:
        """
        Crea o reemplaza un registro específico.

        Args:
            record_id: ID del registro
            record_data: Nuevos datos del registro
        """
        with self._lock:
            self._data[record_id] = copy.deepcopy(record_data)

    def delete(self, record_id: Any) -> Optional[Dict[str, Any]]:
        """
        Elimina un registro.

        Returns:
            Datos del registro eliminado o None si no existía
        """
        with self._lock:
            return self._data.pop(record_id, None)


class ListRepository(BaseRepository):
    """
    Repositorio base para datos almacenados como lista.

    Ejemplo: ventas -> [{...}, {...}]
    """

    def _empty_data(self) -> List:
        return []

    def get_all(self) -> List[Dict[str, Any]]:
        """
        Obtiene todos los registros.

        Returns:
            Lista con todos los datos
        """
        return self._read_raw()

    def save_all(self, data: List[Dict[str, Any]]) -> None:
        """Guarda todos los registros (reemplazo completo)."""
        self._write_raw(data)

    def append(self, record: Dict[str, Any]) -> None:
        """Agrega un registro al final."""
        with self._lock:
            self._data.append(copy.deepcopy(record))

    def find_by(self, field: str, value: Any) -> Optional[Dict[str, Any]]:
        """
        Busca un registro por un campo específico.

        Returns:
            Primer registro que coincide o None
        """
        for record in self.get_all():
            if record.get(field) == value:
                return record
        return None
