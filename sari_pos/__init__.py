# ==============================================================================
# SARI-POS - Punto de venta para tiendas sari-sari
# ==============================================================================
# Inventario, carrito, libro de ventas y reportes de ganancia.
# La aplicación Flask vive en sari_pos.main (app).
# ==============================================================================

__version__ = '1.0.0'
