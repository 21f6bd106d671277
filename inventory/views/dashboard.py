"""
Views: dashboard and sales report
"""

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from inventory.models import SystemSetting
from inventory.Services import report_service
from .helpers import api_errors, batch_to_dict, order_to_dict, parse_day


def _daily(rows):
    return [{'date': row['date'].isoformat(), 'revenue': float(row['revenue'])} for row in rows]


# ===================================
# 1. Dashboard
# ===================================
@require_http_methods(["GET"])
@api_errors
def dashboard(request):
    summary = report_service.dashboard_summary()

    return JsonResponse({
        'success': True,
        'store_name': SystemSetting.get('store_name'),
        'currency': SystemSetting.get('currency'),
        'inventory_value': float(summary['inventory_value']),
        'open_orders': summary['open_orders'],
        'monthly_revenue': float(summary['monthly_revenue']),
        'product_count': summary['product_count'],
        'daily_revenue': _daily(summary['daily_revenue']),
        'top_products': [
            {
                'product_id': row['product_id'],
                'name': row['product__name'],
                'code': row['product__code'],
                'quantity': float(row['total_quantity']),
            }
            for row in summary['top_products']
        ],
        'recent_orders': [order_to_dict(o, with_items=False) for o in summary['recent_orders']],
        'low_stock_batches': [batch_to_dict(b) for b in summary['low_stock_batches']],
    })


# ===================================
# 2. Sales report
# ===================================
@require_http_methods(["GET"])
@api_errors
def sales_report(request):
    """?start=YYYY-MM-DD&end=YYYY-MM-DD (default: last 30 days)"""
    report = report_service.sales_report(
        start=parse_day(request.GET.get('start'), 'start'),
        end=parse_day(request.GET.get('end'), 'end'),
    )

    return JsonResponse({
        'success': True,
        'start': report['start'].isoformat(),
        'end': report['end'].isoformat(),
        'total_revenue': float(report['total_revenue']),
        'order_count': report['order_count'],
        'total_quantity': float(report['total_quantity']),
        'daily_revenue': _daily(report['daily_revenue']),
        'by_product': [
            {
                'product_id': row['product_id'],
                'name': row['product__name'],
                'quantity': float(row['total_quantity'] or 0),
                'revenue': float(row['total_revenue'] or 0),
            }
            for row in report['by_product']
        ],
    })
