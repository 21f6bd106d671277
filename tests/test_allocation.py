"""
FIFO allocator and stock ledger
"""
from decimal import Decimal
from types import SimpleNamespace

import pytest

from inventory.exceptions import InsufficientStockError, InvalidInputError
from inventory.Services.stock_service import allocate_fifo, allocate_stock, get_stock_ledger


def _batch(batch_id, quantity):
    return SimpleNamespace(id=batch_id, quantity=Decimal(quantity))


PRODUCT = SimpleNamespace(name='ST25')


def test_draws_oldest_batch_first():
    batches = [_batch(1, 10), _batch(2, 5)]

    allocation = allocate_fifo(PRODUCT, batches, 12)

    assert [(d.batch_id, d.consumed, d.quantity_after) for d in allocation.draws] == [
        (1, Decimal('10'), Decimal('0')),
        (2, Decimal('2'), Decimal('3')),
    ]
    assert allocation.first_batch_id == 1
    assert allocation.allocated == Decimal('12')


def test_stops_once_covered():
    batches = [_batch(1, 10), _batch(2, 5), _batch(3, 7)]

    allocation = allocate_fifo(PRODUCT, batches, 4)

    assert [d.batch_id for d in allocation.draws] == [1]
    assert allocation.draws[0].quantity_after == Decimal('6')


def test_consumed_always_sums_to_request():
    batches = [_batch(1, '2.5'), _batch(2, '0.5'), _batch(3, 4)]

    for requested in ('0.5', '2.5', '3', '6.9', '7'):
        allocation = allocate_fifo(PRODUCT, batches, Decimal(requested))
        assert allocation.allocated == Decimal(requested)


def test_shortfall_reports_requested_and_available():
    batches = [_batch(1, 10), _batch(2, 5)]

    with pytest.raises(InsufficientStockError, match="requested 20, available 15") as exc:
        allocate_fifo(PRODUCT, batches, 20)

    assert exc.value.requested == Decimal('20')
    assert exc.value.available == Decimal('15')
    # input untouched
    assert [b.quantity for b in batches] == [Decimal('10'), Decimal('5')]


def test_reserved_quantities_are_not_drawn_twice():
    batches = [_batch(1, 10), _batch(2, 5)]

    allocation = allocate_fifo(PRODUCT, batches, 4, reserved={1: Decimal('8')})

    assert [(d.batch_id, d.consumed) for d in allocation.draws] == [
        (1, Decimal('2')),
        (2, Decimal('2')),
    ]


def test_fully_reserved_batch_is_skipped():
    batches = [_batch(1, 10), _batch(2, 5)]

    with pytest.raises(InsufficientStockError, match="available 5"):
        allocate_fifo(PRODUCT, batches, 6, reserved={1: Decimal('10')})


@pytest.mark.parametrize('requested', [0, -3])
def test_non_positive_request_is_rejected(requested):
    with pytest.raises(InvalidInputError):
        allocate_fifo(PRODUCT, [_batch(1, 10)], requested)


@pytest.mark.django_db
def test_ledger_is_oldest_first_and_skips_empty_batches(product, make_batch):
    newest = make_batch(product, 'B3', 4, days_ago=0)
    oldest = make_batch(product, 'B1', 10, days_ago=5)
    make_batch(product, 'B0', 0, days_ago=9, initial_quantity=20)
    middle = make_batch(product, 'B2', 5, days_ago=2)

    assert list(get_stock_ledger(product.pk)) == [oldest, middle, newest]


@pytest.mark.django_db
def test_allocate_stock_reads_the_ledger_without_writing(fifo_batches):
    b1, b2 = fifo_batches

    allocation = allocate_stock(b1.product, 12)

    assert allocation.first_batch_id == b1.pk
    b1.refresh_from_db()
    b2.refresh_from_db()
    assert (b1.quantity, b2.quantity) == (Decimal('10'), Decimal('5'))
