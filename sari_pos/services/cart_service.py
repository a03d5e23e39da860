# ==============================================================================
# SERVICIO DE CARRITO
# ==============================================================================
# Centraliza toda la lógica de negocio del carrito de la venta en curso.
# El carrito vive en su propio repositorio en memoria.
# ==============================================================================

import threading
import uuid
from typing import Any, Dict, List

from sari_pos.models import CartItem, PaymentMethod, parse_payment_method
from sari_pos.repositories.interfaces import ICartRepository
from sari_pos.services.inventory_service import InventoryService
from sari_pos.utils import to_float, to_int


class CartService:
    """
    Servicio para gestión del carrito de compras.

    Responsabilidades:
    - Agregar líneas (fusionando mismo producto + mismo método de pago)
    - Eliminar líneas y cambiar cantidades
    - Calcular totales
    - Confirmar la venta (delegando en SalesService) y vaciar el carrito

    El stock NO se valida al agregar: se valida al confirmar la venta.
    """

    def __init__(
        self,
        cart_repo: ICartRepository,
        inventory_service: InventoryService,
        sales_service=None,
        lock=None
    ):
        """
        Inicializa el servicio de carrito.

        Args:
            cart_repo: Repositorio del carrito
            inventory_service: Servicio de inventario
            sales_service: Servicio de ventas (necesario para checkout)
            lock: Lock compartido de operaciones de escritura
        """
        self.cart_repo = cart_repo
        self.inventory_service = inventory_service
        self.sales_service = sales_service
        self._lock = lock or threading.RLock()

    def _get_cart(self) -> List[Dict[str, Any]]:
        return self.cart_repo.load()

    def _save_cart(self, cart: List[Dict[str, Any]]) -> None:
        self.cart_repo.save(cart)

    @staticmethod
    def _totals(cart: List[Dict[str, Any]]) -> Dict[str, Any]:
        total_items = sum(line.get('quantity', 0) for line in cart)
        total_amount = sum(line.get('quantity', 0) * line.get('price', 0) for line in cart)
        return {
            'total_items': total_items,
            'total_amount': round(total_amount, 2),
            'items_count': len(cart)
        }

    def get_cart(self) -> Dict[str, Any]:
        """
        Obtiene el carrito con totales calculados.

        Returns:
            Dict con items, total_items, total_amount, items_count
        """
        cart = self._get_cart()
        result = {'items': cart}
        result.update(self._totals(cart))
        return result

    def get_cart_items(self) -> List[Dict[str, Any]]:
        return self._get_cart()

    def add_line(
        self,
        item_id: str,
        quantity: Any,
        price: Any = None,
        payment_method: Any = PaymentMethod.CASH.value
    ) -> Dict[str, Any]:
        """
        Agrega una línea al carrito.

        Si ya existe una línea con el mismo producto y método de pago,
        suma la cantidad y sobrescribe el precio.

        Args:
            item_id: ID del producto
            quantity: Cantidad a agregar (> 0)
            price: Precio unitario (None = precio de venta del producto)
            payment_method: Método de pago

        Returns:
            Dict con resultado (ok, error, line, carrito)
        """
        qty = to_int(quantity)
        if not item_id or qty is None or qty <= 0:
            return {'ok': False, 'error': 'Selecciona un producto e ingresa una cantidad válida'}

        item = self.inventory_service.get_item(item_id)
        if not item:
            return {'ok': False, 'error': 'Producto no encontrado', 'not_found': True}

        if price is None or price == '':
            unit_price = float(item.get('sellingPrice', 0))
        else:
            unit_price = to_float(price)
            if unit_price is None or unit_price < 0:
                return {'ok': False, 'error': 'Precio unitario inválido'}

        method = parse_payment_method(payment_method or PaymentMethod.CASH.value)
        if method is None:
            return {'ok': False, 'error': f"Método de pago inválido: {payment_method}"}

        with self._lock:
            cart = self._get_cart()

            existing = None
            for line in cart:
                if line.get('itemId') == item_id and line.get('paymentMethod') == method.value:
                    existing = line
                    break

            if existing:
                existing['quantity'] += qty
                existing['price'] = round(unit_price, 2)
                line_data = existing
            else:
                line_data = CartItem(
                    cart_id=uuid.uuid4().hex,
                    item_id=item_id,
                    name=item.get('name', ''),
                    quantity=qty,
                    price=unit_price,
                    payment_method=method,
                ).to_dict()
                cart.append(line_data)

            self._save_cart(cart)

        return {
            'ok': True,
            'mensaje': 'Producto agregado al carrito',
            'line': line_data,
            'carrito': self._totals(cart)
        }

    def remove_line(self, cart_id: str) -> Dict[str, Any]:
        """
        Elimina una línea del carrito. Un ID inexistente no es error.

        Args:
            cart_id: ID de la línea
        """
        with self._lock:
            cart = self._get_cart()
            new_cart = [line for line in cart if line.get('cartId') != cart_id]
            self._save_cart(new_cart)

        return {
            'ok': True,
            'mensaje': 'Producto eliminado del carrito',
            'removed': len(new_cart) != len(cart),
            'carrito': self._totals(new_cart)
        }

    def update_quantity(self, cart_id: str, new_quantity: Any) -> Dict[str, Any]:
        """
        Reemplaza la cantidad de una línea.
        Cantidades <= 0 (o no numéricas) se ignoran sin modificar el carrito.

        Args:
            cart_id: ID de la línea
            new_quantity: Nueva cantidad
        """
        qty = to_int(new_quantity)
        with self._lock:
            cart = self._get_cart()
            updated = False

            if qty is not None and qty > 0:
                for line in cart:
                    if line.get('cartId') == cart_id:
                        line['quantity'] = qty
                        updated = True
                        break
                if updated:
                    self._save_cart(cart)

        return {
            'ok': True,
            'mensaje': 'Cantidad actualizada' if updated else 'Sin cambios',
            'updated': updated,
            'carrito': self._totals(cart)
        }

    def clear_cart(self) -> Dict[str, Any]:
        """
        Vacía el carrito completamente (cancela la venta en curso).
        """
        with self._lock:
            self.cart_repo.clear()
        return {
            'ok': True,
            'mensaje': 'Carrito vaciado',
            'carrito': self._totals([])
        }

    def checkout(self) -> Dict[str, Any]:
        """
        Confirma el carrito y crea la venta.
        Todo o nada: si alguna línea no tiene stock suficiente no se
        registra la venta, no se descuenta stock y el carrito se conserva.

        Returns:
            Dict con ok, sale o error
        """
        # El carrito se lee, se vende y se vacía sin que otra petición
        # pueda confirmarlo o modificarlo en medio
        with self._lock:
            cart = self._get_cart()
            if not cart:
                return {'ok': False, 'error': 'El carrito está vacío'}

            result = self.sales_service.create_sale_from_cart(cart)

            # Limpiar carrito solo si la venta fue exitosa
            if result.get('ok'):
                self.cart_repo.clear()

            return result
