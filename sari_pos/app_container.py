# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Este módulo proporciona una forma centralizada de obtener instancias
# de repositorios y servicios. Facilita:
#   - Inyección de dependencias
#   - Testing (reloj fijo, repositorios propios)
#   - Cambiar el almacenamiento sin tocar servicios
#
# Todo el estado de la aplicación (inventario, ventas, carrito, actividad,
# gastos) vive en los repositorios de este contenedor. No hay colecciones
# mutables a nivel de módulo.
# ==============================================================================

import threading
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from sari_pos.models import INITIAL_INVENTORY, LOW_STOCK_THRESHOLD

# ═══════════════════════════════════════════════════════════════════════════════
# REPOSITORIOS - Capa de persistencia (memoria)
# ═══════════════════════════════════════════════════════════════════════════════
from sari_pos.repositories import (
    InventoryRepository,
    SalesRepository,
    CartRepository,
    AuditRepository,
    SettingsRepository,
)

# ═══════════════════════════════════════════════════════════════════════════════
# SERVICIOS - Capa de lógica de negocio
# ═══════════════════════════════════════════════════════════════════════════════
from sari_pos.services import (
    InventoryService,
    SalesService,
    CartService,
    AuditService,
    StatsService,
)


class AppContainer:
    """
    Contenedor de dependencias de la aplicación.

    Implementa el patrón Singleton para asegurar una única instancia
    de cada repositorio y servicio.

    Uso:
        container = AppContainer(settings={'LOW_STOCK_THRESHOLD': 20})
        inventory_service = container.inventory_service
        cart_service = container.cart_service
    """

    _instance: Optional['AppContainer'] = None

    DEFAULT_SETTINGS = {
        'LOW_STOCK_THRESHOLD': LOW_STOCK_THRESHOLD,
        'DEFAULT_EXPENSES': 500.0,
        'CURRENCY': '₱',
    }

    def __new__(cls, settings: Dict[str, Any] = None, clock: Callable[[], datetime] = None):
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, settings: Dict[str, Any] = None, clock: Callable[[], datetime] = None):
        """
        Inicializa el contenedor.

        Args:
            settings: Valores de Config (umbral de stock, gastos, moneda)
            clock: Función que retorna la hora actual (por defecto datetime.now)
        """
        if self._initialized:
            return

        self.settings = dict(self.DEFAULT_SETTINGS)
        self.settings.update({k: v for k, v in (settings or {}).items() if k in self.DEFAULT_SETTINGS})
        self.clock = clock or datetime.now

        # Lock de escritura compartido por inventario, carrito y ventas:
        # una venta valida y descuenta stock sin otra escritura en medio
        self.lock = threading.RLock()

        # Inicializar repositorios (lazy loading)
        self._inventory_repo: Optional[InventoryRepository] = None
        self._sales_repo: Optional[SalesRepository] = None
        self._cart_repo: Optional[CartRepository] = None
        self._audit_repo: Optional[AuditRepository] = None
        self._settings_repo: Optional[SettingsRepository] = None

        # Inicializar servicios (lazy loading)
        self._inventory_service: Optional[InventoryService] = None
        self._sales_service: Optional[SalesService] = None
        self._cart_service: Optional[CartService] = None
        self._audit_service: Optional[AuditService] = None
        self._stats_service: Optional[StatsService] = None

        self._initialized = True

    def now(self) -> datetime:
        return self.clock()

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def inventory_repo(self) -> InventoryRepository:
        """Repositorio de inventario (singleton), sembrado con el catálogo inicial."""
        if self._inventory_repo is None:
            self._inventory_repo = InventoryRepository(INITIAL_INVENTORY)
        return self._inventory_repo

    @property
    def sales_repo(self) -> SalesRepository:
        """Repositorio de ventas (singleton)."""
        if self._sales_repo is None:
            self._sales_repo = SalesRepository()
        return self._sales_repo

    @property
    def cart_repo(self) -> CartRepository:
        """Repositorio del carrito (singleton)."""
        if self._cart_repo is None:
            self._cart_repo = CartRepository()
        return self._cart_repo

    @property
    def audit_repo(self) -> AuditRepository:
        """Repositorio de actividad (singleton)."""
        if self._audit_repo is None:
            self._audit_repo = AuditRepository(clock=self.now)
        return self._audit_repo

    @property
    def settings_repo(self) -> SettingsRepository:
        """Repositorio de configuraciones (singleton)."""
        if self._settings_repo is None:
            self._settings_repo = SettingsRepository({
                StatsService.SETTING_EXPENSES: float(self.settings['DEFAULT_EXPENSES'])
            })
        return self._settings_repo

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def audit_service(self) -> AuditService:
        """Servicio de actividad (singleton)."""
        if self._audit_service is None:
            self._audit_service = AuditService(self.audit_repo, self.settings['CURRENCY'])
        return self._audit_service

    @property
    def inventory_service(self) -> InventoryService:
        """Servicio de inventario (singleton)."""
        if self._inventory_service is None:
            self._inventory_service = InventoryService(
                self.inventory_repo,
                self.audit_service,
                int(self.settings['LOW_STOCK_THRESHOLD']),
                lock=self.lock
            )
        return self._inventory_service

    @property
    def sales_service(self) -> SalesService:
        """Servicio de ventas (singleton)."""
        if self._sales_service is None:
            self._sales_service = SalesService(
                self.sales_repo,
                self.inventory_service,
                self.audit_service,
                clock=self.now,
                lock=self.lock
            )
        return self._sales_service

    @property
    def cart_service(self) -> CartService:
        """Servicio de carrito (singleton)."""
        if self._cart_service is None:
            self._cart_service = CartService(
                self.cart_repo,
                self.inventory_service,
                self.sales_service,
                lock=self.lock
            )
        return self._cart_service

    @property
    def stats_service(self) -> StatsService:
        """Servicio de reportes (singleton)."""
        if self._stats_service is None:
            self._stats_service = StatsService(
                sales_loader=self.sales_service.get_all_sales,
                inventory_loader=self.inventory_service.get_all_items,
                settings_repo=self.settings_repo,
                audit_service=self.audit_service,
                clock=self.now,
                default_expenses=float(self.settings['DEFAULT_EXPENSES'])
            )
        return self._stats_service

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    def reset(self) -> None:
        """
        Reinicia todas las instancias.
        El inventario vuelve al catálogo inicial y se pierden ventas,
        carrito, actividad y gastos editados.
        """
        self._inventory_repo = None
        self._sales_repo = None
        self._cart_repo = None
        self._audit_repo = None
        self._settings_repo = None

        self._inventory_service = None
        self._sales_service = None
        self._cart_service = None
        self._audit_service = None
        self._stats_service = None

    @classmethod
    def get_instance(
        cls,
        settings: Dict[str, Any] = None,
        clock: Callable[[], datetime] = None
    ) -> 'AppContainer':
        """
        Obtiene la instancia singleton del contenedor.

        Args:
            settings: Configuración (solo se usa en primera llamada)
            clock: Reloj (solo se usa en primera llamada)

        Returns:
            Instancia del contenedor
        """
        if cls._instance is None:
            return cls(settings, clock)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Elimina la instancia singleton (útil para tests)."""
        if cls._instance is not None:
            cls._instance.reset()
            cls._instance = None


# Función helper para obtener el contenedor global
def get_container(settings: Dict[str, Any] = None, clock: Callable[[], datetime] = None) -> AppContainer:
    """
    Obtiene el contenedor de dependencias global.

    Args:
        settings: Configuración de la app (primera llamada)
        clock: Reloj inyectable (primera llamada)

    Returns:
        Instancia del contenedor
    """
    return AppContainer.get_instance(settings, clock)
