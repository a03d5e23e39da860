# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto del negocio de la tienda.
# Diseñadas para ser independientes del mecanismo de almacenamiento.
# Las claves de los diccionarios usan camelCase (formato de la API JSON).
# ==============================================================================

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any
from enum import Enum
from datetime import datetime


# ==============================================================================
# ENUMERACIONES - Categorías y métodos de pago válidos
# ==============================================================================

class Category(str, Enum):
    """Categorías de productos de la tienda."""
    SNACKS = "Snacks"
    DRINKS = "Drinks"
    TOILETRIES = "Toiletries"
    DAIRY = "Dairy"
    PRODUCE = "Produce"
    BAKERY = "Bakery"
    MISC = "Miscellaneous"


class PaymentMethod(str, Enum):
    """Métodos de pago aceptados."""
    CASH = "Cash"
    GCASH = "GCash"
    CARD = "Card"


# Umbral por defecto para alerta de stock bajo
LOW_STOCK_THRESHOLD = 20


def parse_category(value: Any) -> Optional[Category]:
    """Convierte un string a Category. Retorna None si no es válido."""
    if isinstance(value, Category):
        return value
    try:
        return Category(value)
    except ValueError:
        return None


def parse_payment_method(value: Any) -> Optional[PaymentMethod]:
    """Convierte un string a PaymentMethod. Retorna None si no es válido."""
    if isinstance(value, PaymentMethod):
        return value
    try:
        return PaymentMethod(value)
    except ValueError:
        return None


def _parse_ts(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


# ==============================================================================
# ENTIDADES DE INVENTARIO
# ==============================================================================

@dataclass
class InventoryItem:
    """
    Producto del inventario.

    Attributes:
        id: Identificador único (ej: "item-1")
        name: Nombre del producto
        category: Categoría para clasificación
        stock: Unidades disponibles (nunca negativo)
        cost_price: Costo de compra por unidad
        selling_price: Precio de venta sugerido por unidad
    """
    id: str
    name: str
    category: Category = Category.MISC
    stock: int = 0
    cost_price: float = 0.0
    selling_price: float = 0.0

    def is_low_stock(self, threshold: int = LOW_STOCK_THRESHOLD) -> bool:
        """Verifica si el stock está en o por debajo del umbral."""
        return self.stock <= threshold

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para almacenamiento/API."""
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category.value if isinstance(self.category, Enum) else self.category,
            'stock': self.stock,
            'costPrice': round(self.cost_price, 2),
            'sellingPrice': round(self.selling_price, 2),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InventoryItem':
        """Crea instancia desde diccionario."""
        return cls(
            id=data.get('id', ''),
            name=data.get('name', ''),
            category=parse_category(data.get('category')) or Category.MISC,
            stock=int(data.get('stock', 0) or 0),
            cost_price=float(data.get('costPrice', 0.0) or 0.0),
            selling_price=float(data.get('sellingPrice', 0.0) or 0.0),
        )


# ==============================================================================
# ENTIDADES DE CARRITO Y VENTA
# ==============================================================================

@dataclass
class SaleItem:
    """
    Línea de una venta ya registrada.
    Guarda nombre y precio desnormalizados: no cambian si luego se edita
    o elimina el producto del inventario.
    """
    item_id: str
    name: str
    quantity: int
    price: float
    payment_method: PaymentMethod = PaymentMethod.CASH

    @property
    def subtotal(self) -> float:
        return round(self.quantity * self.price, 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'itemId': self.item_id,
            'name': self.name,
            'quantity': self.quantity,
            'price': round(self.price, 2),
            'paymentMethod': self.payment_method.value if isinstance(self.payment_method, Enum) else self.payment_method,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SaleItem':
        return cls(
            item_id=data.get('itemId', ''),
            name=data.get('name', ''),
            quantity=int(data.get('quantity', 0) or 0),
            price=float(data.get('price', 0.0) or 0.0),
            payment_method=parse_payment_method(data.get('paymentMethod')) or PaymentMethod.CASH,
        )


@dataclass
class CartItem(SaleItem):
    """
    Línea del carrito (venta en curso).

    Attributes:
        cart_id: ID único de la línea dentro del carrito
        item_id: ID del producto del inventario
        name: Nombre del producto al momento de agregarlo
        quantity: Cantidad (> 0)
        price: Precio unitario (editable, por defecto el precio de venta)
        payment_method: Método de pago de la línea
    """
    cart_id: str = ''

    def to_sale_item(self) -> SaleItem:
        """Convierte la línea en ítem de venta (sin cart_id)."""
        return SaleItem(
            item_id=self.item_id,
            name=self.name,
            quantity=self.quantity,
            price=self.price,
            payment_method=self.payment_method,
        )

    def to_dict(self) -> Dict[str, Any]:
        d = {'cartId': self.cart_id}
        d.update(super().to_dict())
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CartItem':
        base = SaleItem.from_dict(data)
        return cls(
            item_id=base.item_id,
            name=base.name,
            quantity=base.quantity,
            price=base.price,
            payment_method=base.payment_method,
            cart_id=data.get('cartId', ''),
        )


@dataclass
class Sale:
    """
    Venta completada. Inmutable una vez creada.

    Attributes:
        id: Identificador de la venta (ej: "SALE-123456")
        date: Fecha y hora de la venta
        items: Líneas vendidas (en el orden del carrito)
        total_amount: Suma de precio × cantidad
    """
    id: str
    date: datetime
    items: List[SaleItem] = field(default_factory=list)
    total_amount: float = 0.0

    def __post_init__(self):
        if not self.total_amount and self.items:
            self.total_amount = self.calculate_total(self.items)

    @staticmethod
    def calculate_total(items: List[SaleItem]) -> float:
        """Suma de precio × cantidad de todas las líneas."""
        return round(sum(item.price * item.quantity for item in items), 2)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para almacenamiento/API."""
        return {
            'id': self.id,
            'date': self.date.isoformat(),
            'items': [item.to_dict() for item in self.items],
            'totalAmount': round(self.total_amount, 2),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Sale':
        """Crea instancia desde diccionario."""
        items = [SaleItem.from_dict(i) for i in data.get('items', [])]
        return cls(
            id=data.get('id', ''),
            date=_parse_ts(data.get('date')),
            items=items,
            total_amount=float(data.get('totalAmount', 0.0) or 0.0),
        )
