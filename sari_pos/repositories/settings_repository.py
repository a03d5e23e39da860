# ==============================================================================
# REPOSITORIO DE CONFIGURACIONES DE LA TIENDA
# ==============================================================================
# Valores editables desde la interfaz (ej: gastos del período para el
# cálculo de ganancia del dashboard).
# ==============================================================================

from typing import Any, Dict

from .base import DictRepository


class SettingsRepository(DictRepository):
    """
    Repositorio para configuraciones de la tienda.

    Formato:
    {
        "expenses": 500.0
    }
    """

    def __init__(self, defaults: Dict[str, Any] = None):
        """
        Inicializa el repositorio de settings.

        Args:
            defaults: Valores iniciales
        """
        super().__init__(defaults or {})

    def load(self) -> Dict[str, Any]:
        """
        Carga todas las configuraciones.

        Returns:
            Diccionario {clave: valor}
        """
        return self.get_all()

    def get_setting(self, key: str, default: Any = None) -> Any:
        """
        Obtiene una configuración específica.

        Args:
            key: Clave de la configuración
            default: Valor por defecto si no existe
        """
        value = self.get_by_id(key)
        return default if value is None else value

    def set_setting(self, key: str, value: Any) -> None:
        """
        Establece una configuración específica.

        Args:
            key: Clave de la configuración
            value: Valor a guardar
        """
        self.update(key, value)
