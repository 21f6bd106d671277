"""
Products and customers
"""
from decimal import Decimal

import pytest

from inventory.exceptions import InvalidInputError, NotFoundError, ReferentialIntegrityError
from inventory.models import Customer, Product
from inventory.Services.customer_service import CustomerService
from inventory.Services.order_service import place_order
from inventory.Services.product_service import ProductService

pytestmark = pytest.mark.django_db


# ===================================
# Products
# ===================================
def test_create_product_with_defaults():
    product = ProductService.create_product(name='Lúa giống OM18')

    assert product.code.startswith('SP-')
    assert product.unit == 'kg'
    assert product.sell_price == Decimal('0')


def test_product_code_is_upper_cased_and_unique(product):
    created = ProductService.create_product(code='dt8', name='Đài Thơm 8', sell_price=24000)
    assert created.code == 'DT8'

    with pytest.raises(InvalidInputError, match="already exists"):
        ProductService.create_product(code='st25', name='Duplicate')


@pytest.mark.parametrize('data', [
    {'name': ''},
    {'name': 'X', 'sell_price': -1},
    {'name': 'X', 'cost_price': 'cheap'},
])
def test_create_product_validation(data):
    with pytest.raises(InvalidInputError):
        ProductService.create_product(**data)

    assert not Product.objects.exists()


def test_update_product_is_partial(product):
    created_at = product.created_at

    updated = ProductService.update_product(product.pk, sell_price=52000, created_at=None)

    assert updated.sell_price == Decimal('52000')
    assert updated.name == 'Lúa giống ST25'
    assert updated.created_at == created_at


def test_search_products_includes_stock(product, other_product, make_batch):
    make_batch(product, 'B1', 10)
    make_batch(product, 'B2', 5)

    results = list(ProductService.search_products('st2'))

    assert results == [product]
    assert results[0].stock_total == Decimal('15')


def test_delete_product_without_dependents(product):
    assert ProductService.delete_product(product.pk) is True
    assert not Product.objects.exists()


def test_delete_product_with_batches_is_refused(product, make_batch):
    make_batch(product, 'B1', 10)

    with pytest.raises(ReferentialIntegrityError, match="inventory batches"):
        ProductService.delete_product(product.pk)

    product.refresh_from_db()
    assert product.name == 'Lúa giống ST25'


def test_missing_product():
    with pytest.raises(NotFoundError):
        ProductService.get_product(999999)


def test_stock_status(product, make_batch):
    assert ProductService.get_stock_status(product)['status'] == 'out_of_stock'

    make_batch(product, 'B1', 5, min_threshold=10)
    assert ProductService.get_stock_status(product) == {'quantity': Decimal('5'), 'status': 'low_stock'}


# ===================================
# Customers
# ===================================
def test_create_customer_normalises_phone():
    customer = CustomerService.create_customer('  Nguyễn Văn Ba ', phone='0939 345-678')

    assert customer.name == 'Nguyễn Văn Ba'
    assert customer.phone == '0939345678'


@pytest.mark.parametrize('name, phone', [('', ''), ('Ba', '12ab'), ('Ba', '123')])
def test_create_customer_validation(name, phone):
    with pytest.raises(InvalidInputError):
        CustomerService.create_customer(name, phone=phone)

    assert not Customer.objects.exists()


def test_update_customer(customer):
    updated = CustomerService.update_customer(customer.pk, address='Châu Thành, An Giang')

    assert updated.address == 'Châu Thành, An Giang'
    assert updated.name == customer.name


def test_list_customers_counts_orders(customer, product, make_batch):
    make_batch(product, 'B1', 10)
    place_order(customer.pk, [{'product_id': product.pk, 'quantity': 1}])
    place_order(customer.pk, [{'product_id': product.pk, 'quantity': 1}])

    [listed] = CustomerService.list_customers('hai lúa')
    assert listed.order_count == 2


def test_delete_customer_with_orders_is_refused(customer, product, make_batch):
    make_batch(product, 'B1', 10)
    place_order(customer.pk, [{'product_id': product.pk, 'quantity': 1}])

    with pytest.raises(ReferentialIntegrityError):
        CustomerService.delete_customer(customer.pk)

    assert Customer.objects.filter(pk=customer.pk).exists()


def test_delete_customer_without_orders(customer):
    assert CustomerService.delete_customer(customer.pk) is True
    assert not Customer.objects.exists()
