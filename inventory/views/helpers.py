"""
Shared view helpers: request parsing, error responses and JSON shapes
"""

import functools
import json
import logging
from datetime import datetime

from django.http import JsonResponse

from inventory.exceptions import InvalidInputError, InventoryError

logger = logging.getLogger(__name__)


def json_body(request) -> dict:
    """Decode a JSON request body (empty body -> {})."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise InvalidInputError("request body is not valid JSON")
    if not isinstance(data, dict):
        raise InvalidInputError("request body must be a JSON object")
    return data


def parse_day(value, field):
    """'YYYY-MM-DD' -> date; empty -> None"""
    if not value:
        return None
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError:
        raise InvalidInputError(f"{field} must be a date (YYYY-MM-DD), got {value!r}")


def error_response(error: InventoryError) -> JsonResponse:
    return JsonResponse({'success': False, 'error': str(error)}, status=error.status_code)


def api_errors(view):
    """Turn service errors into {'success': False, 'error': ...} responses."""

    @functools.wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except InventoryError as e:
            return error_response(e)
        except Exception as e:
            logger.exception("API: %s %s failed", request.method, request.path)
            return JsonResponse({'success': False, 'error': str(e)}, status=500)

    return wrapper


def _money(value):
    return float(value or 0)


# ===================================
# JSON shapes
# ===================================
def product_to_dict(product) -> dict:
    data = {
        'id': product.id,
        'code': product.code,
        'name': product.name,
        'unit': product.unit,
        'cost_price': _money(product.cost_price),
        'sell_price': _money(product.sell_price),
        'description': product.description,
        'created_at': product.created_at.isoformat() if product.created_at else None,
    }
    stock_total = getattr(product, 'stock_total', None)
    if stock_total is not None:
        data['stock_total'] = float(stock_total)
    return data


def customer_to_dict(customer) -> dict:
    data = {
        'id': customer.id,
        'name': customer.name,
        'phone': customer.phone,
        'address': customer.address,
        'created_at': customer.created_at.isoformat() if customer.created_at else None,
    }
    order_count = getattr(customer, 'order_count', None)
    if order_count is not None:
        data['order_count'] = order_count
    return data


def batch_to_dict(batch) -> dict:
    return {
        'id': batch.id,
        'product_id': batch.product_id,
        'product_name': batch.product.name,
        'product_code': batch.product.code,
        'batch_no': batch.batch_no,
        'initial_quantity': float(batch.initial_quantity),
        'quantity': float(batch.quantity),
        'min_threshold': float(batch.min_threshold),
        'is_low_stock': batch.is_low_stock,
        'created_at': batch.created_at.isoformat(),
    }


def order_item_to_dict(item) -> dict:
    return {
        'id': item.id,
        'product_id': item.product_id,
        'product_name': item.product.name,
        'batch_id': item.batch_id,
        'quantity': float(item.quantity),
        'unit_price': _money(item.unit_price),
        'subtotal': _money(item.subtotal),
    }


def order_to_dict(order, with_items=True) -> dict:
    data = {
        'id': order.id,
        'customer_id': order.customer_id,
        'customer_name': order.customer.name,
        'order_date': order.order_date.isoformat(),
        'status': order.status,
        'status_label': order.get_status_display(),
        'total_amount': _money(order.total_amount),
        'shipping_fee': _money(order.shipping_fee),
        'discount': _money(order.discount),
        'notes': order.notes,
    }
    if with_items:
        data['items'] = [order_item_to_dict(item) for item in order.items.all()]
    failed = getattr(order, 'failed_batch_updates', None)
    if failed:
        data['failed_batch_updates'] = failed
    return data
