"""
Pytest configuration and fixtures for the inventory tests
"""
import json
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from inventory.models import Customer, InventoryBatch, Product


@pytest.fixture
def product(db):
    """Seed variety sold at 50,000 / kg"""
    return Product.objects.create(
        code='ST25',
        name='Lúa giống ST25',
        unit='kg',
        cost_price=Decimal('30000'),
        sell_price=Decimal('50000'),
    )


@pytest.fixture
def other_product(db):
    return Product.objects.create(
        code='OM5451',
        name='Lúa giống OM5451',
        cost_price=Decimal('15000'),
        sell_price=Decimal('20000'),
    )


@pytest.fixture
def customer(db):
    return Customer.objects.create(name='Đại lý Hai Lúa', phone='0918234567', address='An Giang')


@pytest.fixture
def make_batch(db):
    """Factory: make_batch(product, 'B1', 10, days_ago=2)"""

    def _make(product, batch_no, quantity, days_ago=0, min_threshold=0, initial_quantity=None):
        quantity = Decimal(quantity)
        return InventoryBatch.objects.create(
            product=product,
            batch_no=batch_no,
            initial_quantity=Decimal(initial_quantity) if initial_quantity is not None else quantity,
            quantity=quantity,
            min_threshold=Decimal(min_threshold),
            created_at=timezone.now() - timedelta(days=days_ago),
        )

    return _make


@pytest.fixture
def fifo_batches(product, make_batch):
    """B1 received on day 1 with 10, B2 on day 2 with 5"""
    b1 = make_batch(product, 'B1', 10, days_ago=2)
    b2 = make_batch(product, 'B2', 5, days_ago=1)
    return b1, b2


@pytest.fixture
def post_json(client):
    """POST a JSON body with the Django test client"""

    def _post(url, data=None):
        return client.post(url, data=json.dumps(data or {}), content_type='application/json')

    return _post
