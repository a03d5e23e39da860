# ==============================================================================
# APLICACIÓN FLASK - API JSON DEL PUNTO DE VENTA
# ==============================================================================
# Las rutas solo traducen HTTP <-> servicios:
#   - Leen parámetros / JSON
#   - Llaman al servicio correspondiente (vía contenedor)
#   - Traducen el dict de resultado a código HTTP (400 / 404)
# Toda la lógica de negocio vive en services/.
# ==============================================================================

from functools import wraps

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from sari_pos.config import Config
from sari_pos.models import parse_category
from sari_pos.utils import is_truthy, to_int

# Sistema de profiling interno
from sari_pos.performance_logger import init_profiling

# ═══════════════════════════════════════════════════════════════════════════
# CONTENEDOR DE DEPENDENCIAS - Servicios y Repositorios
# ═══════════════════════════════════════════════════════════════════════════
from sari_pos.app_container import get_container

app = Flask(__name__)
app.config.from_object(Config)

# ═══════════════════════════════════════════════════════════════════════════
# INICIALIZAR SISTEMA DE PROFILING
# ═══════════════════════════════════════════════════════════════════════════
# Mide rendimiento de rutas y funciones. Logs en logs/
# Para desactivar: SARI_POS_PROFILING=0
init_profiling(app)


def container():
    """Contenedor global, configurado con app.config en la primera llamada."""
    return get_container(settings=app.config)


# ═══════════════════════════════════════════════════════════════════════════
# HELPERS DE RESPUESTA
# ═══════════════════════════════════════════════════════════════════════════

def result_response(result, **extra):
    """
    Convierte el dict de resultado de un servicio en respuesta HTTP.

    - ok=True         → 200
    - not_found=True  → 404
    - ok=False        → 400
    """
    result = dict(result)
    result.update(extra)
    if result.get('ok'):
        return result
    status = 404 if result.pop('not_found', False) else 400
    return result, status


def json_body():
    """JSON del request o None si no llegó o es inválido."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


def api_errors(f):
    """Captura errores inesperados y siempre devuelve JSON."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except Exception as e:
            app.logger.exception("Error en %s %s", request.method, request.path)
            return {"ok": False, "error": f"Error interno: {str(e)}"}, 500
    return wrapper


BAD_BODY = {"ok": False, "error": "Datos no recibidos o formato inválido"}


# ═══════════════════════════════════════════════════════════════════════════
# INVENTARIO
# ═══════════════════════════════════════════════════════════════════════════

@app.route("/api/inventory", methods=["GET"])
@api_errors
def api_inventory_list():
    """Listar inventario (opcional ?category=Snacks)"""
    category = (request.args.get("category") or "").strip()
    if category and category != "all" and parse_category(category) is None:
        return {"ok": False, "error": f"Categoría inválida: {category}"}, 400

    items = container().inventory_service.list_items(category or None)
    return {"ok": True, "items": items, "count": len(items)}


@app.route("/api/inventory/grouped", methods=["GET"])
@api_errors
def api_inventory_grouped():
    """Productos agrupados por categoría (selector del carrito)"""
    return {"ok": True, "categories": container().inventory_service.group_by_category()}


@app.route("/api/inventory/low-stock", methods=["GET"])
@api_errors
def api_inventory_low_stock():
    service = container().inventory_service
    items = service.get_low_stock_items()
    return {
        "ok": True,
        "threshold": service.low_stock_threshold,
        "items": items,
        "count": len(items)
    }


@app.route("/api/inventory", methods=["POST"])
@api_errors
def api_inventory_create():
    """
    Crear producto.
    Espera JSON con: name, category, costPrice, sellingPrice, stock (opcional, 1)
    """
    data = json_body()
    if data is None:
        return BAD_BODY, 400

    result = container().inventory_service.add_new_item(
        name=data.get("name"),
        category=data.get("category"),
        cost_price=data.get("costPrice"),
        selling_price=data.get("sellingPrice"),
        initial_stock=data.get("stock", 1)
    )
    if result.get("ok"):
        return result, 201
    return result_response(result)


@app.route("/api/inventory/<item_id>/restock", methods=["POST"])
@api_errors
def api_inventory_restock(item_id):
    """Sumar stock. Espera JSON con: quantity"""
    data = json_body()
    if data is None:
        return BAD_BODY, 400
    return result_response(container().inventory_service.restock(item_id, data.get("quantity")))


@app.route("/api/inventory/<item_id>", methods=["PUT"])
@api_errors
def api_inventory_edit(item_id):
    """
    Editar producto.
    Espera JSON con: name, category, costPrice, sellingPrice, stock (opcional)
    """
    data = json_body()
    if data is None:
        return BAD_BODY, 400
    return result_response(container().inventory_service.edit_item(dict(data, id=item_id)))


@app.route("/api/inventory/<item_id>", methods=["DELETE"])
@api_errors
def api_inventory_delete(item_id):
    """Eliminar producto. Requiere ?confirm=1 (o JSON {"confirm": true})"""
    data = json_body() or {}
    confirmed = is_truthy(request.args.get("confirm")) or is_truthy(data.get("confirm"))
    return result_response(container().inventory_service.delete_item(item_id, confirmed))


# ═══════════════════════════════════════════════════════════════════════════
# CARRITO
# ═══════════════════════════════════════════════════════════════════════════

@app.route("/api/cart", methods=["GET"])
@api_errors
def api_cart_view():
    """Ver contenido actual del carrito"""
    return dict(container().cart_service.get_cart(), ok=True)


@app.route("/api/cart/add", methods=["POST"])
@api_errors
def api_cart_add():
    """
    Agregar línea al carrito.
    Espera JSON con: itemId, quantity, price (opcional), paymentMethod (opcional)
    """
    data = json_body()
    if data is None:
        return BAD_BODY, 400

    result = container().cart_service.add_line(
        item_id=data.get("itemId"),
        quantity=data.get("quantity"),
        price=data.get("price"),
        payment_method=data.get("paymentMethod")
    )
    return result_response(result)


@app.route("/api/cart/remove", methods=["POST"])
@api_errors
def api_cart_remove():
    """Eliminar una línea del carrito. Espera JSON con: cartId"""
    data = json_body()
    if data is None or not data.get("cartId"):
        return {"ok": False, "error": "ID de línea inválido"}, 400
    return result_response(container().cart_service.remove_line(data["cartId"]))


@app.route("/api/cart/update", methods=["POST"])
@api_errors
def api_cart_update():
    """Cambiar cantidad de una línea. Espera JSON con: cartId, quantity"""
    data = json_body()
    if data is None or not data.get("cartId"):
        return {"ok": False, "error": "ID de línea inválido"}, 400
    return result_response(
        container().cart_service.update_quantity(data["cartId"], data.get("quantity"))
    )


@app.route("/api/cart/clear", methods=["POST"])
@api_errors
def api_cart_clear():
    """Vaciar el carrito"""
    return result_response(container().cart_service.clear_cart())


@app.route("/api/cart/checkout", methods=["POST"])
@api_errors
def api_cart_checkout():
    """
    Confirmar carrito y crear la venta.

    Respuesta:
    - ok: true/false
    - sale: venta registrada (si ok)
    - error / out_of_stock: si falta stock (nada se modifica)
    """
    result = container().cart_service.checkout()
    if result.get("ok"):
        return result, 201
    return result_response(result)


# ═══════════════════════════════════════════════════════════════════════════
# VENTAS Y DASHBOARD
# ═══════════════════════════════════════════════════════════════════════════

@app.route("/api/sales", methods=["GET"])
@api_errors
def api_sales_history():
    """Historial de ventas: ?period=all|daily|weekly|monthly|custom&start=&end=&q="""
    result = container().stats_service.sales_history(
        period=request.args.get("period", "all"),
        custom_start=request.args.get("start"),
        custom_end=request.args.get("end"),
        search=request.args.get("q", "")
    )
    return result_response(result)


@app.route("/api/sales/<sale_id>", methods=["GET"])
@api_errors
def api_sale_detail(sale_id):
    """Detalle de una venta con líneas agrupadas"""
    sale = container().sales_service.get_sale_detail(sale_id)
    if not sale:
        return {"ok": False, "error": "Venta no encontrada"}, 404
    return {"ok": True, "sale": sale}


@app.route("/api/dashboard", methods=["GET"])
@api_errors
def api_dashboard():
    """Métricas del dashboard: ?period=monthly (por defecto)&start=&end="""
    result = container().stats_service.get_dashboard(
        period=request.args.get("period", "monthly"),
        custom_start=request.args.get("start"),
        custom_end=request.args.get("end")
    )
    return result_response(result)


@app.route("/api/dashboard/expenses", methods=["GET", "POST"])
@api_errors
def api_dashboard_expenses():
    """Leer o actualizar los gastos. POST espera JSON con: expenses"""
    stats = container().stats_service
    if request.method == "GET":
        return {"ok": True, "expenses": stats.get_expenses()}

    data = json_body()
    if data is None:
        return BAD_BODY, 400
    return result_response(stats.set_expenses(data.get("expenses")))


# ═══════════════════════════════════════════════════════════════════════════
# ACTIVIDAD
# ═══════════════════════════════════════════════════════════════════════════

@app.route("/api/activity", methods=["GET"])
@api_errors
def api_activity():
    """Registro de actividad (más reciente primero). ?limit=100&type=VENTA"""
    raw_limit = (request.args.get("limit") or "").strip()
    limit = to_int(raw_limit) if raw_limit else 100
    if limit is None or limit <= 0:
        return {"ok": False, "error": "limit debe ser un entero mayor a 0"}, 400

    audit = container().audit_service
    log_type = (request.args.get("type") or "").strip().upper()
    if log_type:
        logs = audit.get_logs_by_type(log_type)[:limit]
    else:
        logs = audit.get_recent_logs(limit)
    return {"ok": True, "logs": logs, "count": len(logs)}


# ═══════════════════════════════════════════════════════════════════════════
# ERRORES HTTP
# ═══════════════════════════════════════════════════════════════════════════

HTTP_ERRORS = {
    404: "Recurso no encontrado",
    405: "Método no permitido",
}


@app.errorhandler(HTTPException)
def http_error(e):
    """Errores HTTP (404, 405, ...) siempre en JSON."""
    return {"ok": False, "error": HTTP_ERRORS.get(e.code, e.description)}, e.code


if __name__ == "__main__":
    HOST = app.config['HOST']
    PORT = app.config['PORT']
    DEBUG = app.config['DEBUG']

    print(f"\n{'='*50}")
    print(f"  [SARI-POS] Servidor iniciado en http://{HOST}:{PORT}")
    print(f"  [SARI-POS] Acceso local: http://localhost:{PORT}")
    print(f"  [SARI-POS] Profiling: {'activo' if app.config['PROFILING_ENABLED'] else 'inactivo'}")
    print(f"{'='*50}\n")

    app.run(host=HOST, port=PORT, debug=DEBUG)
