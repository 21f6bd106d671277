"""
JSON API under /api/
"""
from decimal import Decimal

import pytest

from inventory.models import InventoryBatch, Order, Product

pytestmark = pytest.mark.django_db


def test_product_crud(client, post_json):
    response = post_json('/api/products/', {'code': 'om18', 'name': 'Lúa giống OM18', 'sell_price': 20000})
    assert response.status_code == 201
    product = response.json()['product']
    assert product['code'] == 'OM18'

    response = post_json(f"/api/products/{product['id']}/", {'sell_price': 21000})
    assert response.json()['product']['sell_price'] == 21000.0

    response = client.get('/api/products/?q=om1')
    assert response.json()['count'] == 1

    response = post_json(f"/api/products/{product['id']}/delete/")
    assert response.json() == {'success': True}
    assert not Product.objects.exists()


def test_validation_error_is_400(post_json):
    response = post_json('/api/products/', {'name': ''})

    assert response.status_code == 400
    assert response.json()['success'] is False
    assert 'name' in response.json()['error']


def test_malformed_json_is_400(client):
    response = client.post('/api/orders/', data='{nope', content_type='application/json')

    assert response.status_code == 400


def test_missing_record_is_404(client):
    assert client.get('/api/products/999999/').status_code == 404
    assert client.get('/api/orders/999999/').status_code == 404


def test_delete_with_dependents_is_409(post_json, product, make_batch):
    make_batch(product, 'B1', 10)

    response = post_json(f'/api/products/{product.pk}/delete/')

    assert response.status_code == 409
    assert Product.objects.filter(pk=product.pk).exists()


def test_wrong_method_is_405(client, product):
    assert client.get(f'/api/products/{product.pk}/delete/').status_code == 405


def test_batch_endpoints(client, post_json, product):
    response = post_json('/api/batches/', {
        'product_id': product.pk, 'batch_no': 'L01', 'initial_quantity': 100, 'min_threshold': 10,
    })
    assert response.status_code == 201
    batch_id = response.json()['batch']['id']

    response = post_json(f'/api/batches/{batch_id}/add-stock/', {'quantity': 20})
    assert response.json()['batch']['quantity'] == 120.0
    assert response.json()['batch']['initial_quantity'] == 120.0

    response = post_json(f'/api/batches/{batch_id}/remove-stock/', {'quantity': 115, 'reason': 'mold'})
    assert response.json()['batch']['quantity'] == 5.0
    assert response.json()['batch']['is_low_stock'] is True

    response = post_json(f'/api/batches/{batch_id}/remove-stock/', {'quantity': 6})
    assert response.status_code == 400
    assert 'available 5' in response.json()['error']

    response = client.get('/api/batches/?low=1')
    assert [b['id'] for b in response.json()['batches']] == [batch_id]

    response = post_json(f'/api/batches/{batch_id}/delete/')
    assert response.status_code == 409


def test_ledger_endpoint(client, product, fifo_batches):
    b1, b2 = fifo_batches

    response = client.get(f'/api/products/{product.pk}/ledger/')

    assert [b['id'] for b in response.json()['batches']] == [b1.pk, b2.pk]
    assert response.json()['total'] == 15.0


def test_place_order_and_change_status(client, post_json, customer, product, fifo_batches):
    b1, b2 = fifo_batches

    response = post_json('/api/orders/', {
        'customer_id': customer.pk,
        'items': [{'product_id': product.pk, 'quantity': 3, 'unit_price': 0}],
        'shipping_fee': 10000,
        'discount': 5000,
    })
    assert response.status_code == 201
    order = response.json()['order']
    assert order['total_amount'] == 155000.0
    assert order['items'][0]['batch_id'] == b1.pk

    response = post_json(f"/api/orders/{order['id']}/status/", {'status': 'shipped'})
    assert response.json()['order']['status'] == 'shipped'

    response = client.get('/api/orders/?status=shipped')
    assert response.json()['count'] == 1

    response = client.get(f"/api/orders/{order['id']}/")
    assert 'completed' in response.json()['allowed_statuses']


def test_insufficient_stock_is_400_and_nothing_is_written(post_json, customer, product, fifo_batches):
    response = post_json('/api/orders/', {
        'customer_id': customer.pk,
        'items': [{'product_id': product.pk, 'quantity': 20}],
    })

    assert response.status_code == 400
    assert 'requested 20, available 15' in response.json()['error']
    assert Order.objects.count() == 0
    assert sorted(InventoryBatch.objects.values_list('quantity', flat=True)) == [Decimal('5'), Decimal('10')]


def test_unknown_status_is_400(post_json, customer, product, fifo_batches):
    order = post_json('/api/orders/', {
        'customer_id': customer.pk,
        'items': [{'product_id': product.pk, 'quantity': 1}],
    }).json()['order']

    response = post_json(f"/api/orders/{order['id']}/status/", {'status': 'teleported'})

    assert response.status_code == 400


def test_customer_endpoints(client, post_json):
    response = post_json('/api/customers/', {'name': 'Trần Thị Tư', 'phone': '0945456789'})
    assert response.status_code == 201
    customer_id = response.json()['customer']['id']

    response = client.get('/api/customers/')
    assert response.json()['customers'][0]['order_count'] == 0

    response = post_json(f'/api/customers/{customer_id}/delete/')
    assert response.json()['success'] is True


def test_dashboard_and_report(client, customer, product, fifo_batches):
    response = client.get('/api/dashboard/')
    body = response.json()
    assert body['success'] is True
    assert body['currency'] == 'VND'
    assert body['inventory_value'] == 450000.0

    response = client.get('/api/reports/sales/?start=2024-01-01&end=2024-01-31')
    assert response.json()['order_count'] == 0

    response = client.get('/api/reports/sales/?start=yesterday')
    assert response.status_code == 400
