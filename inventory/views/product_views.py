"""
Views: products (seed varieties) and their FIFO ledger
"""

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from inventory.Services.product_service import ProductService
from inventory.Services.stock_service import get_stock_ledger, product_stock_total
from .helpers import api_errors, batch_to_dict, json_body, product_to_dict

PRODUCT_FIELDS = ('code', 'name', 'unit', 'cost_price', 'sell_price', 'description')


@require_http_methods(["GET", "POST"])
@api_errors
def product_list(request):
    """GET: list / search (?q=)   POST: create"""

    if request.method == "POST":
        data = json_body(request)
        product = ProductService.create_product(**{k: data.get(k) for k in PRODUCT_FIELDS})
        return JsonResponse({'success': True, 'product': product_to_dict(product)}, status=201)

    query = request.GET.get('q', '').strip()
    products = ProductService.search_products(query, limit=500)

    results = [product_to_dict(p) for p in products]
    return JsonResponse({
        'success': True,
        'count': len(results),
        'products': results,
    })


@require_http_methods(["GET", "POST"])
@api_errors
def product_detail(request, product_id):
    """GET: product + stock   POST: partial update"""

    if request.method == "POST":
        data = json_body(request)
        changes = {k: v for k, v in data.items() if k in PRODUCT_FIELDS}
        product = ProductService.update_product(product_id, **changes)
        return JsonResponse({'success': True, 'product': product_to_dict(product)})

    product = ProductService.get_product(product_id)
    stock_status = ProductService.get_stock_status(product)

    return JsonResponse({
        'success': True,
        'product': product_to_dict(product),
        'quantity': float(stock_status['quantity']),
        'stock_status': stock_status['status'],
    })


@require_http_methods(["POST"])
@api_errors
def product_delete(request, product_id):
    ProductService.delete_product(product_id)
    return JsonResponse({'success': True})


@require_http_methods(["GET"])
@api_errors
def product_ledger(request, product_id):
    """Batches still holding stock, in the order an order would draw them."""
    product = ProductService.get_product(product_id)
    ledger = get_stock_ledger(product.pk).select_related('product')

    return JsonResponse({
        'success': True,
        'product': product_to_dict(product),
        'total': float(product_stock_total(product.pk)),
        'batches': [batch_to_dict(b) for b in ledger],
    })
