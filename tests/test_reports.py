"""
Dashboard figures and the sales report
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from inventory.Services.order_service import place_order
from inventory.Services.report_service import dashboard_summary, inventory_value, sales_report

pytestmark = pytest.mark.django_db


@pytest.fixture
def sales(customer, product, other_product, make_batch):
    make_batch(product, 'ST-1', 100, min_threshold=98)
    make_batch(other_product, 'OM-1', 100)
    now = timezone.now()

    completed = place_order(
        customer.pk,
        [{'product_id': product.pk, 'quantity': 2}, {'product_id': other_product.pk, 'quantity': 1}],
        order_date=now,
        status='completed',
        shipping_fee=10000,
    )
    old = place_order(
        customer.pk,
        [{'product_id': other_product.pk, 'quantity': 10}],
        order_date=now - timedelta(days=60),
        status='completed',
    )
    pending = place_order(
        customer.pk,
        [{'product_id': product.pk, 'quantity': 1}],
        order_date=now,
    )
    return completed, old, pending


def test_inventory_value(product, make_batch):
    make_batch(product, 'B1', 10)
    make_batch(product, 'B2', '2.5')

    assert inventory_value() == Decimal('375000')


def test_dashboard_summary(sales, product):
    completed, _, pending = sales

    summary = dashboard_summary()

    assert summary['open_orders'] == 1
    assert summary['product_count'] == 2
    assert summary['monthly_revenue'] == completed.total_amount
    assert [row['revenue'] for row in summary['daily_revenue']] == [completed.total_amount]
    assert summary['recent_orders'][0] in (completed, pending)
    # the old order counts toward top products
    assert summary['top_products'][0]['product_id'] != product.pk
    assert [b.batch_no for b in summary['low_stock_batches']] == ['ST-1']


def test_sales_report_counts_completed_orders_in_range(sales, product, other_product):
    completed, _, _ = sales

    report = sales_report()

    assert report['order_count'] == 1
    assert report['total_revenue'] == completed.total_amount
    assert report['total_quantity'] == Decimal('3')
    assert [(row['product_id'], row['total_revenue']) for row in report['by_product']] == [
        (product.pk, Decimal('100000')),
        (other_product.pk, Decimal('20000')),
    ]


def test_sales_report_custom_range(sales):
    _, old, _ = sales
    day = timezone.localdate() - timedelta(days=60)

    report = sales_report(start=day, end=day)

    assert report['order_count'] == 1
    assert report['total_revenue'] == old.total_amount
    assert report['daily_revenue'][0]['date'] == day


def test_sales_report_swaps_reversed_range():
    today = timezone.localdate()

    report = sales_report(start=today, end=today - timedelta(days=7))

    assert report['start'] < report['end']
    assert report['order_count'] == 0
    assert report['total_revenue'] == Decimal('0')
