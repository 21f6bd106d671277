"""
Views: inventory batches and stock adjustments
"""

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from inventory.Services import stock_service
from .helpers import api_errors, batch_to_dict, json_body, parse_day

BATCH_EDIT_FIELDS = ('batch_no', 'min_threshold')


@require_http_methods(["GET", "POST"])
@api_errors
def batch_list(request):
    """GET: ?product=<id>&date=YYYY-MM-DD&low=1   POST: receive a new batch"""

    if request.method == "POST":
        data = json_body(request)
        batch = stock_service.create_batch(
            product_id=data.get('product_id'),
            batch_no=data.get('batch_no'),
            initial_quantity=data.get('initial_quantity'),
            min_threshold=data.get('min_threshold', 0),
        )
        return JsonResponse({'success': True, 'batch': batch_to_dict(batch)}, status=201)

    if request.GET.get('low'):
        batches = stock_service.low_stock_batches()
    else:
        batches = stock_service.list_batches(
            product_id=request.GET.get('product') or None,
            created_on=parse_day(request.GET.get('date'), 'date'),
        )

    results = [batch_to_dict(b) for b in batches]
    return JsonResponse({
        'success': True,
        'count': len(results),
        'batches': results,
    })


@require_http_methods(["GET", "POST"])
@api_errors
def batch_detail(request, batch_id):
    if request.method == "POST":
        data = json_body(request)
        batch = stock_service.update_batch(batch_id, **data)
    else:
        batch = stock_service.get_batch(batch_id)

    return JsonResponse({'success': True, 'batch': batch_to_dict(batch)})


@require_http_methods(["POST"])
@api_errors
def batch_delete(request, batch_id):
    stock_service.delete_batch(batch_id)
    return JsonResponse({'success': True})


@require_http_methods(["POST"])
@api_errors
def batch_add_stock(request, batch_id):
    data = json_body(request)
    batch = stock_service.add_stock(batch_id, data.get('quantity'))
    return JsonResponse({'success': True, 'batch': batch_to_dict(batch)})


@require_http_methods(["POST"])
@api_errors
def batch_remove_stock(request, batch_id):
    data = json_body(request)
    batch = stock_service.remove_stock(
        batch_id,
        data.get('quantity'),
        reason=data.get('reason') or "manual removal",
    )
    return JsonResponse({'success': True, 'batch': batch_to_dict(batch)})
