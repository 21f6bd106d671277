"""
Views: customers
"""

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from inventory.Services.customer_service import CustomerService
from .helpers import api_errors, customer_to_dict, json_body

CUSTOMER_FIELDS = ('name', 'phone', 'address')


@require_http_methods(["GET", "POST"])
@api_errors
def customer_list(request):
    if request.method == "POST":
        data = json_body(request)
        customer = CustomerService.create_customer(
            name=data.get('name'),
            phone=data.get('phone', ''),
            address=data.get('address', ''),
        )
        return JsonResponse({'success': True, 'customer': customer_to_dict(customer)}, status=201)

    customers = CustomerService.list_customers(request.GET.get('q', '').strip())
    results = [customer_to_dict(c) for c in customers]

    return JsonResponse({
        'success': True,
        'count': len(results),
        'customers': results,
    })


@require_http_methods(["GET", "POST"])
@api_errors
def customer_detail(request, customer_id):
    if request.method == "POST":
        data = json_body(request)
        changes = {k: v for k, v in data.items() if k in CUSTOMER_FIELDS}
        customer = CustomerService.update_customer(customer_id, **changes)
    else:
        customer = CustomerService.get_customer(customer_id)

    return JsonResponse({'success': True, 'customer': customer_to_dict(customer)})


@require_http_methods(["POST"])
@api_errors
def customer_delete(request, customer_id):
    CustomerService.delete_customer(customer_id)
    return JsonResponse({'success': True})
