# ==============================================================================
# SERVICIO DE ESTADÍSTICAS Y REPORTES
# ==============================================================================
# Deriva vistas filtradas y métricas del libro de ventas y del inventario:
# - Historial de ventas (por período y texto de búsqueda)
# - Ventas brutas, costo de lo vendido (COGS) y ganancia
# - Ranking de ganancia por producto (top 10)
# - Serie de ventas por día
#
# REGLA: el costo se toma del inventario ACTUAL, no del momento de la venta.
# Editar el costo de un producto cambia la ganancia histórica. Un producto
# eliminado aporta 0 al COGS y no aparece en el ranking.
# ==============================================================================

from collections import defaultdict
from datetime import datetime, time, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

from sari_pos.performance_logger import profile_function
from sari_pos.repositories.interfaces import ISettingsRepository
from sari_pos.services.audit_service import AuditService
from sari_pos.utils import parse_date, to_float


class StatsService:
    """
    Servicio para reportes y estadísticas financieras.

    Responsabilidades:
    - Filtrar ventas por período (daily/weekly/monthly/all/custom)
    - Filtrar ventas por texto (ID de venta o nombre de producto)
    - Calcular ventas brutas, COGS y ganancia neta de gastos
    - Ranking de productos y serie temporal para gráficos

    Todo se recalcula en cada consulta sobre copias de los datos.
    """

    PERIODS = ('all', 'daily', 'weekly', 'monthly', 'custom')

    # Cantidad de productos en el ranking de ganancia
    TOP_PRODUCTS = 10

    SETTING_EXPENSES = 'expenses'

    # Fin inclusivo del rango custom (precisión de milisegundos)
    CUSTOM_END_OF_DAY = time(23, 59, 59, 999000)

    def __init__(
        self,
        sales_loader: Callable[[], List[Dict[str, Any]]] = None,
        inventory_loader: Callable[[], Dict[str, Dict[str, Any]]] = None,
        settings_repo: ISettingsRepository = None,
        audit_service: AuditService = None,
        clock: Callable[[], datetime] = None,
        default_expenses: float = 500.0
    ):
        """
        Inicializa el servicio.

        Args:
            sales_loader: Función que retorna la lista de ventas
            inventory_loader: Función que retorna el inventario {id: producto}
            settings_repo: Repositorio donde se guardan los gastos
            audit_service: Servicio de actividad (opcional)
            clock: Función que retorna la hora actual (inyectable en tests)
            default_expenses: Gastos iniciales
        """
        self._sales_loader = sales_loader
        self._inventory_loader = inventory_loader
        self.settings_repo = settings_repo
        self.audit_service = audit_service
        self.clock = clock or datetime.now
        self.default_expenses = default_expenses

    def _load_sales(self) -> List[Dict[str, Any]]:
        if self._sales_loader:
            return self._sales_loader()
        return []

    def _load_inventory(self) -> Dict[str, Dict[str, Any]]:
        if self._inventory_loader:
            return self._inventory_loader()
        return {}

    @staticmethod
    def _sale_date(sale: Dict[str, Any]) -> datetime:
        value = sale.get('date')
        if isinstance(value, datetime):
            return value
        return datetime.fromisoformat(value)

    # =========================================================================
    # FILTROS
    # =========================================================================

    @staticmethod
    def week_start(now: datetime) -> datetime:
        """Domingo más reciente a las 00:00:00."""
        days_since_sunday = (now.weekday() + 1) % 7
        return datetime.combine(now.date() - timedelta(days=days_since_sunday), time.min)

    def get_date_range(
        self,
        period: str,
        custom_start: Any = None,
        custom_end: Any = None,
        now: datetime = None
    ) -> Optional[Tuple[datetime, datetime]]:
        """
        Calcula el rango de fechas (inclusivo) del período.

        Args:
            period: 'all', 'daily', 'weekly', 'monthly', 'custom'
            custom_start: Fecha inicio (YYYY-MM-DD o date) si period='custom'
            custom_end: Fecha fin (YYYY-MM-DD o date) si period='custom'
            now: Hora de referencia (por defecto el reloj del servicio)

        Returns:
            Tupla (inicio, fin) o None si el período no filtra

        Raises:
            ValueError: período desconocido o fecha custom inválida
        """
        if period not in self.PERIODS:
            raise ValueError(f"Período inválido: {period}")

        now = now or self.clock()
        today_start = datetime.combine(now.date(), time.min)

        if period == 'all':
            return None

        if period == 'daily':
            return today_start, datetime.combine(now.date(), time.max)

        if period == 'weekly':
            return self.week_start(now), now

        if period == 'monthly':
            month_start = today_start.replace(day=1)
            if month_start.month == 12:
                next_month = month_start.replace(year=month_start.year + 1, month=1)
            else:
                next_month = month_start.replace(month=month_start.month + 1)
            return month_start, next_month - timedelta(microseconds=1)

        if period == 'custom':
            try:
                start = parse_date(custom_start)
                end = parse_date(custom_end)
            except ValueError:
                raise ValueError(
                    f"Fecha inválida (use YYYY-MM-DD): {custom_start} / {custom_end}"
                ) from None
            # Sin ambos extremos el filtro custom no filtra
            if start is None or end is None:
                return None
            return datetime.combine(start, time.min), datetime.combine(end, self.CUSTOM_END_OF_DAY)

    def filter_by_period(
        self,
        sales: List[Dict[str, Any]],
        period: str = 'all',
        custom_start: Any = None,
        custom_end: Any = None,
        now: datetime = None
    ) -> List[Dict[str, Any]]:
        """
        Conserva las ventas cuya fecha cae dentro del período.

        Raises:
            ValueError: período desconocido o fecha custom inválida
        """
        date_range = self.get_date_range(period, custom_start, custom_end, now)
        if date_range is None:
            return list(sales)

        start, end = date_range
        return [s for s in sales if start <= self._sale_date(s) <= end]

    @staticmethod
    def filter_by_search(sales: List[Dict[str, Any]], term: str = '') -> List[Dict[str, Any]]:
        """
        Búsqueda sin distinguir mayúsculas en el ID de la venta o en el
        nombre de cualquiera de sus líneas.
        """
        term = (term or '').strip().lower()
        if not term:
            return list(sales)
        return [
            s for s in sales
            if term in s.get('id', '').lower()
            or any(term in item.get('name', '').lower() for item in s.get('items', []))
        ]

    # =========================================================================
    # HISTORIAL DE VENTAS
    # =========================================================================

    def sales_history(
        self,
        period: str = 'all',
        custom_start: Any = None,
        custom_end: Any = None,
        search: str = '',
        now: datetime = None
    ) -> Dict[str, Any]:
        """
        Historial de ventas filtrado, más reciente primero.

        Returns:
            Dict con ok, sales, count, total_amount o error
        """
        try:
            sales = self.filter_by_period(self._load_sales(), period, custom_start, custom_end, now)
        except ValueError as e:
            return {'ok': False, 'error': str(e)}

        sales = self.filter_by_search(sales, search)
        sales.sort(key=self._sale_date, reverse=True)

        return {
            'ok': True,
            'period': period,
            'search': search or '',
            'sales': sales,
            'count': len(sales),
            'total_amount': round(sum(float(s.get('totalAmount', 0) or 0) for s in sales), 2)
        }

    # =========================================================================
    # MÉTRICAS FINANCIERAS
    # =========================================================================

    @staticmethod
    def gross_sales(sales: List[Dict[str, Any]]) -> float:
        """Suma de totalAmount."""
        return round(sum(float(s.get('totalAmount', 0) or 0) for s in sales), 2)

    @staticmethod
    def cost_of_goods_sold(
        sales: List[Dict[str, Any]],
        inventory: Dict[str, Dict[str, Any]]
    ) -> float:
        """
        Suma de costo ACTUAL × cantidad de todas las líneas.
        Líneas de productos eliminados aportan 0.
        """
        total = 0.0
        for sale in sales:
            for item in sale.get('items', []):
                inv_item = inventory.get(item.get('itemId'))
                if inv_item:
                    total += float(inv_item.get('costPrice', 0) or 0) * int(item.get('quantity', 0) or 0)
        return round(total, 2)

    def financial_summary(
        self,
        sales: List[Dict[str, Any]],
        inventory: Dict[str, Dict[str, Any]],
        expenses: float
    ) -> Dict[str, Any]:
        """
        Ventas brutas, COGS y ganancia (ventas - COGS - gastos).
        """
        gross = self.gross_sales(sales)
        cogs = self.cost_of_goods_sold(sales, inventory)
        return {
            'gross_sales': gross,
            'cost_of_goods_sold': cogs,
            'expenses': round(expenses, 2),
            'total_profit': round(gross - cogs - expenses, 2),
            'sales_count': len(sales),
            'items_sold': sum(
                int(item.get('quantity', 0) or 0)
                for s in sales for item in s.get('items', [])
            )
        }

    def profit_per_item(
        self,
        sales: List[Dict[str, Any]],
        inventory: Dict[str, Dict[str, Any]],
        limit: int = None
    ) -> List[Dict[str, Any]]:
        """
        Ganancia por nombre de producto: (precio de la línea - costo actual)
        × cantidad. Ordenado de mayor a menor, máximo `limit` entradas.
        Las líneas de productos eliminados se omiten.
        """
        limit = self.TOP_PRODUCTS if limit is None else limit
        profits = defaultdict(lambda: {'profit': 0.0, 'quantity': 0})

        for sale in sales:
            for item in sale.get('items', []):
                inv_item = inventory.get(item.get('itemId'))
                if not inv_item:
                    continue
                qty = int(item.get('quantity', 0) or 0)
                price = float(item.get('price', 0) or 0)
                cost = float(inv_item.get('costPrice', 0) or 0)
                entry = profits[item.get('name', '')]
                entry['profit'] += (price - cost) * qty
                entry['quantity'] += qty

        ranking = [
            {'name': name, 'profit': round(data['profit'], 2), 'quantity': data['quantity']}
            for name, data in profits.items()
        ]
        ranking.sort(key=lambda x: x['profit'], reverse=True)
        return ranking[:limit]

    def sales_over_time(self, sales: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Ventas por fecha de calendario (YYYY-MM-DD), ascendente.
        """
        daily = defaultdict(float)
        for sale in sales:
            day_key = self._sale_date(sale).strftime('%Y-%m-%d')
            daily[day_key] += float(sale.get('totalAmount', 0) or 0)

        return [
            {'date': day, 'sales': round(total, 2)}
            for day, total in sorted(daily.items())
        ]

    # =========================================================================
    # GASTOS
    # =========================================================================

    def get_expenses(self) -> float:
        if not self.settings_repo:
            return self.default_expenses
        return float(self.settings_repo.get_setting(self.SETTING_EXPENSES, self.default_expenses))

    def set_expenses(self, value: Any) -> Dict[str, Any]:
        """
        Actualiza los gastos usados en el cálculo de ganancia.

        Args:
            value: Número >= 0

        Returns:
            Dict con ok, expenses o error
        """
        expenses = to_float(value)
        if expenses is None or expenses < 0:
            return {'ok': False, 'error': 'Los gastos deben ser un número mayor o igual a 0'}

        old_value = self.get_expenses()
        self.settings_repo.set_setting(self.SETTING_EXPENSES, round(expenses, 2))

        if self.audit_service and old_value != expenses:
            self.audit_service.log_expenses_changed(old_value, expenses)

        return {'ok': True, 'mensaje': 'Gastos actualizados', 'expenses': round(expenses, 2)}

    # =========================================================================
    # DASHBOARD
    # =========================================================================

    @profile_function(name="Calcular dashboard")
    def get_dashboard(
        self,
        period: str = 'monthly',
        custom_start: Any = None,
        custom_end: Any = None,
        now: datetime = None
    ) -> Dict[str, Any]:
        """
        Calcula todas las métricas del dashboard para el período.

        Returns:
            {
                'ok': True,
                'period': str,
                'date_range': {'start': str, 'end': str} o None,
                'summary': {
                    'gross_sales': float,
                    'cost_of_goods_sold': float,
                    'expenses': float,
                    'total_profit': float,
                    'sales_count': int,
                    'items_sold': int,
                },
                'profit_per_item': [{'name': str, 'profit': float, 'quantity': int}],
                'sales_over_time': [{'date': 'YYYY-MM-DD', 'sales': float}]
            }
        """
        now = now or self.clock()
        try:
            date_range = self.get_date_range(period, custom_start, custom_end, now)
            sales = self.filter_by_period(self._load_sales(), period, custom_start, custom_end, now)
        except ValueError as e:
            return {'ok': False, 'error': str(e)}

        inventory = self._load_inventory()

        return {
            'ok': True,
            'period': period,
            'date_range': {
                'start': date_range[0].isoformat(),
                'end': date_range[1].isoformat()
            } if date_range else None,
            'summary': self.financial_summary(sales, inventory, self.get_expenses()),
            'profit_per_item': self.profit_per_item(sales, inventory),
            'sales_over_time': self.sales_over_time(sales)
        }
