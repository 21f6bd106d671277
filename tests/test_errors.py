"""
Error types and data-store error wrapping
"""
from decimal import Decimal
from io import StringIO
from types import SimpleNamespace

import pytest
from django.core.management import call_command
from django.db import DatabaseError, IntegrityError

from inventory.exceptions import (
    InsufficientStockError,
    InventoryError,
    StoreError,
    describe_store_error,
    format_quantity,
)
from inventory.models import InventoryBatch, Order, SystemSetting
from inventory.Services.validation import store_call, to_decimal


@pytest.mark.parametrize('value, expected', [
    (Decimal('20.00'), '20'),
    (Decimal('2.50'), '2.5'),
    ('0', '0'),
    (15, '15'),
])
def test_format_quantity(value, expected):
    assert format_quantity(value) == expected


def test_business_errors_are_value_errors():
    error = InsufficientStockError(SimpleNamespace(name='ST25'), 20, 15)

    assert isinstance(error, ValueError)
    assert isinstance(error, InventoryError)
    assert str(error) == "insufficient stock for ST25, requested 20, available 15"


def test_store_message_includes_driver_diagnostics():
    error = DatabaseError('duplicate key value violates unique constraint')
    error.diag = SimpleNamespace(message_detail='Key (code)=(ST25) already exists.', message_hint=None)

    assert describe_store_error(error) == (
        "duplicate key value violates unique constraint "
        "Detail: Key (code)=(ST25) already exists."
    )


def test_store_message_falls_back_to_the_cause():
    try:
        try:
            raise ValueError('disk I/O error')
        except ValueError as cause:
            raise IntegrityError('write failed') from cause
    except IntegrityError as error:
        assert describe_store_error(error) == "write failed Detail: disk I/O error"


def test_store_call_wraps_database_errors():
    @store_call
    def broken():
        raise IntegrityError('CHECK constraint failed: inventory_batch_quantity_non_negative')

    with pytest.raises(StoreError, match="inventory_batch_quantity_non_negative") as exc:
        broken()

    assert exc.value.status_code == 500
    assert isinstance(exc.value.__cause__, IntegrityError)


@pytest.mark.parametrize('value', [True, 'nan', 'inf', 'ten'])
def test_to_decimal_rejects_non_numbers(value):
    with pytest.raises(InventoryError):
        to_decimal(value, 'quantity')


@pytest.mark.django_db
def test_system_setting_rejects_unknown_modes():
    with pytest.raises(ValueError):
        SystemSetting.set('order_commit_mode', 'sometimes')

    assert SystemSetting.get('order_commit_mode') == 'atomic'
    assert SystemSetting.get_all()['currency'] == 'VND'


@pytest.mark.django_db
def test_low_stock_report_command(product, make_batch):
    make_batch(product, 'ST25-L01', 5, min_threshold=10)
    out = StringIO()

    call_command('low_stock_report', stdout=out)

    assert 'ST25-L01' in out.getvalue()
    assert '1 batch(es) low on stock' in out.getvalue()


@pytest.mark.django_db
def test_seed_demo_data_command():
    out = StringIO()

    call_command('seed_demo_data', '--orders', '5', '--seed', '7', stdout=out)

    assert 'Done:' in out.getvalue()
    assert Order.objects.count() + out.getvalue().count('Skipped order') == 5
    assert not InventoryBatch.objects.filter(quantity__lt=0).exists()
