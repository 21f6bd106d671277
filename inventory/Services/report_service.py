"""
Report Service: dashboard figures and the sales report

Revenue only counts completed orders.
"""

from datetime import datetime, time, timedelta
from decimal import Decimal

from django.db.models import DecimalField, ExpressionWrapper, F, Sum
from django.db.models.functions import TruncDate
from django.utils import timezone

from inventory.models import InventoryBatch, Order, OrderItem, Product
from inventory.Services.stock_service import low_stock_batches

DASHBOARD_REVENUE_DAYS = 30
DASHBOARD_CHART_POINTS = 15
DASHBOARD_TOP_PRODUCTS = 5
DASHBOARD_RECENT_ORDERS = 5
REPORT_DEFAULT_DAYS = 30

MONEY = DecimalField(max_digits=20, decimal_places=2)


def _day_bounds(start_day, end_day):
    query_min = timezone.make_aware(datetime.combine(start_day, time.min))
    query_max = timezone.make_aware(datetime.combine(end_day, time.max))
    return query_min, query_max


def _completed_orders():
    return Order.objects.filter(status=Order.Status.COMPLETED)


def _daily_revenue(orders):
    rows = (
        orders.annotate(day=TruncDate('order_date'))
        .values('day')
        .annotate(revenue=Sum('total_amount'))
        .order_by('day')
    )
    return [{'date': row['day'], 'revenue': row['revenue'] or Decimal('0')} for row in rows]


def inventory_value() -> Decimal:
    """Σ batch quantity × product cost price"""
    value = InventoryBatch.objects.aggregate(
        total=Sum(
            ExpressionWrapper(F('quantity') * F('product__cost_price'), output_field=MONEY)
        )
    )['total']
    return value or Decimal('0')


# ===================================
# 1. Dashboard
# ===================================
def dashboard_summary(today=None) -> dict:
    today = today or timezone.localdate()

    # ----- Financials -----
    month_start = today.replace(day=1)
    month_min, month_max = _day_bounds(month_start, today)
    monthly_revenue = _completed_orders().filter(
        order_date__range=(month_min, month_max),
    ).aggregate(total=Sum('total_amount'))['total'] or Decimal('0')

    # ----- Chart: last 30 days, only the last 15 days that had revenue -----
    chart_min, chart_max = _day_bounds(today - timedelta(days=DASHBOARD_REVENUE_DAYS), today)
    daily = _daily_revenue(_completed_orders().filter(order_date__range=(chart_min, chart_max)))

    # ----- Top products by completed quantity -----
    top_products = list(
        OrderItem.objects.filter(order__status=Order.Status.COMPLETED)
        .values('product_id', 'product__name', 'product__code')
        .annotate(total_quantity=Sum('quantity'))
        .order_by('-total_quantity')[:DASHBOARD_TOP_PRODUCTS]
    )

    recent_orders = list(
        Order.objects.select_related('customer').order_by('-order_date', '-id')[:DASHBOARD_RECENT_ORDERS]
    )

    return {
        'inventory_value': inventory_value(),
        'open_orders': Order.objects.filter(status__in=Order.OPEN_STATUSES).count(),
        'monthly_revenue': monthly_revenue,
        'daily_revenue': daily[-DASHBOARD_CHART_POINTS:],
        'top_products': top_products,
        'recent_orders': recent_orders,
        'product_count': Product.objects.count(),
        'low_stock_batches': list(low_stock_batches()),
    }


# ===================================
# 2. Sales report
# ===================================
def sales_report(start=None, end=None) -> dict:
    """
    Completed orders with order_date in [start, end] (whole days)

    Args:
        start, end: date; default the last 30 days up to today
    """
    end = end or timezone.localdate()
    start = start or end - timedelta(days=REPORT_DEFAULT_DAYS)
    if start > end:
        start, end = end, start

    query_min, query_max = _day_bounds(start, end)
    orders = _completed_orders().filter(order_date__range=(query_min, query_max))

    daily = _daily_revenue(orders)

    by_product = list(
        OrderItem.objects.filter(order__in=orders)
        .values('product_id', 'product__name')
        .annotate(
            total_quantity=Sum('quantity'),
            total_revenue=Sum(
                ExpressionWrapper(F('quantity') * F('unit_price'), output_field=MONEY)
            ),
        )
        .order_by('-total_revenue')
    )

    return {
        'start': start,
        'end': end,
        'daily_revenue': daily,
        'by_product': by_product,
        'total_revenue': sum((row['revenue'] for row in daily), Decimal('0')),
        'order_count': orders.count(),
        'total_quantity': sum((row['total_quantity'] or Decimal('0') for row in by_product), Decimal('0')),
    }
