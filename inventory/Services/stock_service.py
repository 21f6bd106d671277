"""
Stock Service: batches, the FIFO stock ledger and stock adjustments

Quantities on a batch move only through three doors:
- add_stock      (quantity and initial_quantity grow together)
- remove_stock   (quantity shrinks, never below 0)
- order allocation (see order_service)
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

from django.db import transaction
from django.db.models import F, Sum
from django.forms.models import model_to_dict

from inventory.exceptions import (
    InsufficientStockError,
    InvalidInputError,
    NotFoundError,
    ReferentialIntegrityError,
    format_quantity,
)
from inventory.forms import BatchEditForm, BatchForm
from inventory.models import InventoryBatch, OrderItem, Product
from inventory.signals import stock_changed
from inventory.Services.validation import positive, store_call, validate_form

logger = logging.getLogger(__name__)


# ===================================
# 1. Stock Ledger (FIFO order)
# ===================================
def get_stock_ledger(product_id, lock=False):
    """
    Batches of a product that still hold stock, oldest first.

    Args:
        product_id: Product id
        lock: take row locks (only meaningful inside transaction.atomic)

    Returns:
        QuerySet of InventoryBatch
    """
    ledger = InventoryBatch.objects.filter(
        product_id=product_id,
        quantity__gt=0,
    ).order_by('created_at', 'id')

    if lock:
        ledger = ledger.select_for_update()

    return ledger


# ===================================
# 2. Order Allocator
# ===================================
@dataclass
class BatchDraw:
    batch_id: int
    consumed: Decimal
    quantity_after: Decimal


@dataclass
class Allocation:
    product: Product
    requested: Decimal
    draws: List[BatchDraw] = field(default_factory=list)

    @property
    def first_batch_id(self) -> Optional[int]:
        """Batch of record for the order line (the line may straddle several)."""
        return self.draws[0].batch_id if self.draws else None

    @property
    def allocated(self) -> Decimal:
        return sum((d.consumed for d in self.draws), Decimal('0'))


def allocate_fifo(product, batches, requested, reserved: Optional[Dict[int, Decimal]] = None) -> Allocation:
    """
    Decide which batches supply `requested` units, oldest batch first.

    Pure: nothing is written and the batches are not modified.

    Args:
        product: Product (used for the error message)
        batches: ledger in FIFO order (see get_stock_ledger)
        requested: quantity wanted, > 0
        reserved: {batch_id: qty} already promised to earlier lines of the same order

    Raises:
        InsufficientStockError: when the ledger cannot cover the request

    Returns:
        Allocation
    """
    requested = Decimal(requested)
    if requested <= 0:
        raise InvalidInputError("quantity must be greater than 0")

    reserved = reserved or {}
    remaining = requested
    draws = []

    for batch in batches:
        if remaining <= 0:
            break

        available = batch.quantity - reserved.get(batch.id, Decimal('0'))
        if available <= 0:
            continue

        take = min(remaining, available)
        draws.append(BatchDraw(
            batch_id=batch.id,
            consumed=take,
            quantity_after=available - take,
        ))
        remaining -= take

    if remaining > 0:
        raise InsufficientStockError(product, requested, requested - remaining)

    return Allocation(product=product, requested=requested, draws=draws)


def allocate_stock(product, requested, reserved=None, lock=False) -> Allocation:
    """Fetch the ledger for `product` and run the allocator over it."""
    ledger = list(get_stock_ledger(product.pk, lock=lock))
    return allocate_fifo(product, ledger, requested, reserved=reserved)


# ===================================
# 3. Batch queries
# ===================================
def list_batches(product_id=None, created_on=None):
    """Newest first, joined with the product."""
    batches = InventoryBatch.objects.select_related('product').order_by('-created_at', '-id')
    if product_id:
        batches = batches.filter(product_id=product_id)
    if created_on:
        batches = batches.filter(created_at__date=created_on)
    return batches


def get_batch(batch_id):
    try:
        return InventoryBatch.objects.select_related('product').get(pk=batch_id)
    except InventoryBatch.DoesNotExist:
        raise NotFoundError(f"batch {batch_id} does not exist")


def product_stock_total(product_id) -> Decimal:
    total = InventoryBatch.objects.filter(product_id=product_id).aggregate(total=Sum('quantity'))['total']
    return total or Decimal('0')


def low_stock_batches():
    """Batches at or under their (non-zero) minimum threshold."""
    return list_batches().filter(
        min_threshold__gt=0,
        quantity__lte=F('min_threshold'),
    )


# ===================================
# 4. Batch CRUD
# ===================================
@store_call
def create_batch(product_id, batch_no, initial_quantity, min_threshold=0):
    """New batch; its current quantity starts equal to initial_quantity."""
    form = BatchForm(data={
        'product': product_id,
        'batch_no': batch_no,
        'initial_quantity': initial_quantity,
        'min_threshold': 0 if min_threshold in (None, '') else min_threshold,
    })
    validate_form(form)

    batch = form.save(commit=False)
    batch.quantity = batch.initial_quantity
    batch.save()

    logger.info("BATCH: created %s for %s (%s)", batch.batch_no, batch.product.code, batch.quantity)
    return get_batch(batch.pk)


@store_call
def update_batch(batch_id, **changes):
    """Partial update of batch_no / min_threshold."""
    batch = get_batch(batch_id)

    forbidden = set(changes) - {'batch_no', 'min_threshold'}
    if forbidden:
        raise InvalidInputError(
            f"cannot edit {', '.join(sorted(forbidden))} directly; "
            f"use add/remove stock instead"
        )

    data = model_to_dict(batch, fields=BatchEditForm.Meta.fields)
    data.update(changes)
    form = BatchEditForm(data=data, instance=batch)
    validate_form(form)
    form.save()

    return get_batch(batch_id)


@store_call
def delete_batch(batch_id):
    """
    Delete a batch that nothing has drawn from yet.

    Raises:
        ReferentialIntegrityError: stock already moved, or an order line points at it
    """
    batch = get_batch(batch_id)

    if batch.has_moved:
        raise ReferentialIntegrityError(
            f"batch {batch.batch_no} already shipped stock "
            f"(current {format_quantity(batch.quantity)} < initial {format_quantity(batch.initial_quantity)})"
        )

    if OrderItem.objects.filter(batch_id=batch_id).exists():
        raise ReferentialIntegrityError(f"batch {batch.batch_no} is referenced by an order")

    batch.delete()
    logger.info("BATCH: deleted %s", batch.batch_no)
    return True


# ===================================
# 5. Stock adjustments
# ===================================
@store_call
def add_stock(batch_id, quantity):
    """Receive more stock into an existing batch (quantity and initial_quantity +qty)."""
    qty = positive(quantity, "quantity to add")
    batch = get_batch(batch_id)

    InventoryBatch.objects.filter(pk=batch.pk).update(
        quantity=F('quantity') + qty,
        initial_quantity=F('initial_quantity') + qty,
    )

    batch.refresh_from_db()
    stock_changed.send(sender=InventoryBatch, batch=batch, delta=qty, reason="stock added")
    return batch


@store_call
def remove_stock(batch_id, quantity, reason="manual removal"):
    """
    Take stock out of a batch outside of an order (damage, samples...).

    Raises:
        InsufficientStockError: the batch holds less than `quantity`
    """
    qty = positive(quantity, "quantity to remove")
    batch = get_batch(batch_id)

    with transaction.atomic():
        # conditional decrement: no row matches if the batch would go negative
        updated = InventoryBatch.objects.filter(pk=batch.pk, quantity__gte=qty).update(
            quantity=F('quantity') - qty,
        )
        if not updated:
            batch.refresh_from_db()
            raise InsufficientStockError(batch.product, qty, batch.quantity)

    batch.refresh_from_db()
    stock_changed.send(sender=InventoryBatch, batch=batch, delta=-qty, reason=reason)
    return batch
