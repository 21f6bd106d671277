"""
Views: orders (place order, list, detail, status)
"""

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from inventory.Services import order_service
from .helpers import api_errors, json_body, order_to_dict, parse_day


# ===================================
# 1. List / place order
# ===================================
@require_http_methods(["GET", "POST"])
@api_errors
def order_list(request):
    """
    GET:  ?status=&date=YYYY-MM-DD&customer=
    POST: {
        "customer_id": 1,
        "items": [{"product_id": 1, "quantity": 12, "unit_price": 0}],
        "order_date": "2024-05-01T08:00:00", "status": "pending",
        "shipping_fee": 30000, "discount": 5000, "notes": ""
    }
    """
    if request.method == "POST":
        data = json_body(request)
        order = order_service.place_order(
            customer_id=data.get('customer_id'),
            items=data.get('items') or [],
            order_date=data.get('order_date'),
            status=data.get('status'),
            shipping_fee=data.get('shipping_fee', 0),
            discount=data.get('discount', 0),
            notes=data.get('notes', ''),
        )
        return JsonResponse({'success': True, 'order': order_to_dict(order)}, status=201)

    orders = order_service.list_orders(
        status=request.GET.get('status') or None,
        order_date=parse_day(request.GET.get('date'), 'date'),
        customer_id=request.GET.get('customer') or None,
    )
    results = [order_to_dict(o, with_items=False) for o in orders]

    return JsonResponse({
        'success': True,
        'count': len(results),
        'orders': results,
    })


# ===================================
# 2. Detail
# ===================================
@require_http_methods(["GET"])
@api_errors
def order_detail(request, order_id):
    order = order_service.get_order(order_id)
    return JsonResponse({
        'success': True,
        'order': order_to_dict(order),
        'allowed_statuses': order_service.allowed_transitions(order.status),
    })


# ===================================
# 3. Status
# ===================================
@require_http_methods(["POST"])
@api_errors
def order_status(request, order_id):
    data = json_body(request)
    order = order_service.update_order_status(order_id, data.get('status'))
    return JsonResponse({'success': True, 'order': order_to_dict(order)})
