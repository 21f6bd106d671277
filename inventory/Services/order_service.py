"""
Order Service: order totals, order placement (FIFO allocation) and status changes

Placement runs in one of two commit modes (SystemSetting "order_commit_mode"):
- atomic:      header, lines and batch decrements commit together or not at all
- best_effort: the historical sequence; writes are not rolled back on failure
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Iterable, Tuple

from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from inventory.exceptions import (
    InvalidInputError,
    InvalidTransitionError,
    NotFoundError,
    StockConflictError,
)
from inventory.models import Customer, InventoryBatch, Order, OrderItem, Product, SystemSetting
from inventory.signals import order_placed, order_status_changed, stock_changed
from inventory.Services.stock_service import allocate_stock
from inventory.Services.validation import non_negative, positive, store_call

logger = logging.getLogger(__name__)

Status = Order.Status

COMMIT_ATOMIC = 'atomic'
COMMIT_BEST_EFFORT = 'best_effort'

STATUS_MODE_PERMISSIVE = 'permissive'
STATUS_MODE_STRICT = 'strict'

# strict mode: the normal flow forward, cancel from anything not finished
STRICT_TRANSITIONS = {
    Status.PENDING:    {Status.PROCESSING, Status.CANCELLED},
    Status.PROCESSING: {Status.PACKING, Status.CANCELLED},
    Status.PACKING:    {Status.SHIPPED, Status.CANCELLED},
    Status.SHIPPED:    {Status.COMPLETED, Status.CANCELLED},
    Status.COMPLETED:  set(),
    Status.CANCELLED:  set(),
}


# ===================================
# 1. Order Total Calculator
# ===================================
def resolve_unit_price(override, product) -> Decimal:
    """A positive override wins; otherwise the product's current sell price."""
    override = Decimal(str(override or 0))
    if override > 0:
        return override
    return Decimal(str(product.sell_price or 0))


def compute_order_total(lines: Iterable[Tuple[Decimal, Decimal]], shipping_fee=0, discount=0) -> Decimal:
    """
    max(0, Σ quantity × unit_price + shipping_fee − discount)

    Args:
        lines: (quantity, unit_price) pairs, prices already resolved
    """
    subtotal = sum(
        (Decimal(str(qty)) * Decimal(str(price)) for qty, price in lines),
        Decimal('0'),
    )
    total = subtotal + Decimal(str(shipping_fee or 0)) - Decimal(str(discount or 0))
    return max(Decimal('0'), total)


# ===================================
# 2. Validation
# ===================================
@dataclass
class OrderLine:
    product: Product
    quantity: Decimal
    unit_price: Decimal


def _parse_order_date(value):
    if value in (None, ''):
        return timezone.now()

    if isinstance(value, str):
        parsed = parse_datetime(value)
        if parsed is None:
            day = parse_date(value)
            if day is None:
                raise InvalidInputError(f"order_date is not a valid date: {value!r}")
            parsed = datetime.combine(day, time.min)
        value = parsed
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, time.min)

    if timezone.is_naive(value):
        value = timezone.make_aware(value)
    return value


def _validate_lines(items_data):
    """
    Every line: existing product, quantity > 0, price override >= 0.
    Runs before any write.
    """
    if not items_data:
        raise InvalidInputError("an order needs at least one line item")

    parsed = []
    for i, item in enumerate(items_data, 1):
        if not isinstance(item, dict):
            raise InvalidInputError(f"line {i}: expected an object")
        if not item.get('product_id'):
            raise InvalidInputError(f"line {i}: product_id is required")
        try:
            product_id = int(item['product_id'])
        except (TypeError, ValueError):
            raise InvalidInputError(f"line {i}: product_id must be an integer")
        quantity = positive(item.get('quantity'), f"line {i}: quantity")
        override = non_negative(item.get('unit_price'), f"line {i}: unit_price", default=0)
        parsed.append((product_id, quantity, override))

    products = Product.objects.in_bulk([pid for pid, _, _ in parsed])

    lines = []
    for i, (product_id, quantity, override) in enumerate(parsed, 1):
        product = products.get(product_id)
        if product is None:
            raise InvalidInputError(f"line {i}: product {product_id} does not exist")

        lines.append(OrderLine(
            product=product,
            quantity=quantity,
            unit_price=resolve_unit_price(override, product),
        ))

    return lines


def _resolve_commit_mode(commit_mode):
    mode = commit_mode or SystemSetting.get('order_commit_mode')
    if mode not in (COMMIT_ATOMIC, COMMIT_BEST_EFFORT):
        raise InvalidInputError(f"unknown order commit mode: {mode!r}")
    return mode


# ===================================
# 3. Place Order (Order Commit)
# ===================================
@store_call
def place_order(
    customer_id,
    items,
    order_date=None,
    status=None,
    shipping_fee=0,
    discount=0,
    notes='',
    commit_mode=None,
):
    """
    Create an order, its lines, and draw stock FIFO for every line

    Args:
        customer_id: Customer id
        items: [{'product_id': 1, 'quantity': 3, 'unit_price': 0}, ...]
               unit_price <= 0 (or missing) -> product sell price
        order_date: datetime / ISO string, default now
        status: default pending
        shipping_fee, discount: >= 0
        notes: free text
        commit_mode: 'atomic' | 'best_effort' (default from SystemSetting)

    Raises:
        InvalidInputError: bad input, nothing written
        InsufficientStockError: a line cannot be covered
        StockConflictError: atomic mode, stock changed under us (rolled back)

    Returns:
        Order re-fetched with customer and items; `failed_batch_updates`
        lists batch ids whose decrement did not apply (best_effort only)
    """

    # ----------------------------------------------------
    # 1. Validate (no writes yet)
    # ----------------------------------------------------
    try:
        customer = Customer.objects.get(pk=customer_id)
    except (Customer.DoesNotExist, ValueError, TypeError):
        raise InvalidInputError(f"customer {customer_id} does not exist")

    lines = _validate_lines(items)

    status = status or Status.PENDING
    if status not in Status.values:
        raise InvalidInputError(f"unknown order status: {status!r}")

    shipping_fee = non_negative(shipping_fee, "shipping_fee", default=0)
    discount = non_negative(discount, "discount", default=0)
    mode = _resolve_commit_mode(commit_mode)

    # ----------------------------------------------------
    # 2. Total
    # ----------------------------------------------------
    total = compute_order_total(
        [(line.quantity, line.unit_price) for line in lines],
        shipping_fee,
        discount,
    )

    header = {
        'customer': customer,
        'order_date': _parse_order_date(order_date),
        'status': status,
        'total_amount': total,
        'shipping_fee': shipping_fee,
        'discount': discount,
        'notes': notes or '',
    }

    # ----------------------------------------------------
    # 3-6. Header, allocation, lines, decrements
    # ----------------------------------------------------
    if mode == COMMIT_ATOMIC:
        order, drawn, failed = _commit_atomic(header, lines)
    else:
        order, drawn, failed = _commit_best_effort(header, lines)

    _announce_stock_changes(drawn, failed, order)

    # ----------------------------------------------------
    # 7. Canonical result
    # ----------------------------------------------------
    order = get_order(order.pk)
    order.failed_batch_updates = failed
    order_placed.send(sender=Order, order=order, failed_batch_updates=failed)
    return order


def _allocate_lines(order, lines, lock):
    """
    Run the allocator for each line; later lines see what earlier ones took.

    Returns:
        (OrderItem list, {batch_id: total consumed})
    """
    reserved = {}
    order_items = []

    for line in lines:
        allocation = allocate_stock(line.product, line.quantity, reserved=reserved, lock=lock)

        for draw in allocation.draws:
            reserved[draw.batch_id] = reserved.get(draw.batch_id, Decimal('0')) + draw.consumed

        order_items.append(OrderItem(
            order=order,
            product=line.product,
            batch_id=allocation.first_batch_id,
            quantity=line.quantity,
            unit_price=line.unit_price,
        ))

    return order_items, reserved


def _decrement_batch(batch_id, consumed) -> bool:
    """Conditional decrement; False when the batch holds less than `consumed`."""
    updated = InventoryBatch.objects.filter(pk=batch_id, quantity__gte=consumed).update(
        quantity=F('quantity') - consumed,
    )
    return updated == 1


def _commit_atomic(header, lines):
    with transaction.atomic():
        order = Order.objects.create(**header)

        # ledger rows stay locked until commit
        order_items, reserved = _allocate_lines(order, lines, lock=True)
        OrderItem.objects.bulk_create(order_items)

        for batch_id, consumed in reserved.items():
            if not _decrement_batch(batch_id, consumed):
                raise StockConflictError(batch_id, consumed)

    return order, reserved, []


def _commit_best_effort(header, lines):
    order = Order.objects.create(**header)

    try:
        order_items, reserved = _allocate_lines(order, lines, lock=False)
    except ValueError as e:
        # header stays behind without lines
        logger.warning("ORDER: #%s kept without items after allocation failure: %s", order.pk, e)
        e.partial_order_id = order.pk
        raise

    OrderItem.objects.bulk_create(order_items)

    failed = []
    for batch_id, consumed in reserved.items():
        try:
            applied = _decrement_batch(batch_id, consumed)
        except DatabaseError as e:
            logger.error("ORDER: #%s batch %s update failed: %s", order.pk, batch_id, e)
            failed.append(batch_id)
            continue

        if not applied:
            logger.error(
                "ORDER: #%s batch %s holds less than %s, update skipped",
                order.pk, batch_id, consumed,
            )
            failed.append(batch_id)

    return order, reserved, failed


def _announce_stock_changes(drawn, failed, order):
    applied = {pk: qty for pk, qty in drawn.items() if pk not in failed}
    if not applied:
        return
    for batch in InventoryBatch.objects.filter(pk__in=applied).select_related('product'):
        stock_changed.send(
            sender=InventoryBatch,
            batch=batch,
            delta=-applied[batch.pk],
            reason=f"order #{order.pk}",
        )


# ===================================
# 4. Order queries
# ===================================
def _order_queryset():
    return Order.objects.select_related('customer').prefetch_related(
        'items__product',
        'items__batch',
    )


def get_order(order_id) -> Order:
    try:
        return _order_queryset().get(pk=order_id)
    except (Order.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(f"order {order_id} does not exist")


def list_orders(status=None, order_date=None, customer_id=None):
    """Newest first; every filter optional."""
    orders = _order_queryset().order_by('-order_date', '-id')
    if status:
        orders = orders.filter(status=status)
    if order_date:
        orders = orders.filter(order_date__date=order_date)
    if customer_id:
        orders = orders.filter(customer_id=customer_id)
    return orders


# ===================================
# 5. Status Transition
# ===================================
def _resolve_status_mode(mode):
    mode = mode or SystemSetting.get('order_status_mode')
    if mode not in (STATUS_MODE_PERMISSIVE, STATUS_MODE_STRICT):
        raise InvalidInputError(f"unknown order status mode: {mode!r}")
    return mode


def can_transition(current, target, mode=STATUS_MODE_PERMISSIVE) -> bool:
    if target not in Status.values:
        return False
    if mode == STATUS_MODE_PERMISSIVE or current == target:
        return True
    return target in STRICT_TRANSITIONS.get(current, set())


def allowed_transitions(current, mode=None):
    mode = _resolve_status_mode(mode)
    if mode == STATUS_MODE_PERMISSIVE:
        return [s for s in Status.values if s != current]
    return [s for s in Status.values if s in STRICT_TRANSITIONS.get(current, set())]


@store_call
def update_order_status(order_id, status, mode=None) -> Order:
    """
    Write a new status

    Does not re-allocate, restock on cancellation, or re-validate the order.

    Args:
        mode: 'permissive' (any known status) | 'strict' (state machine);
              default from SystemSetting
    """
    if status not in Status.values:
        raise InvalidInputError(f"unknown order status: {status!r}")
    mode = _resolve_status_mode(mode)

    with transaction.atomic():
        try:
            order = Order.objects.select_for_update().get(pk=order_id)
        except (Order.DoesNotExist, ValueError, TypeError):
            raise NotFoundError(f"order {order_id} does not exist")

        previous = order.status
        if not can_transition(previous, status, mode):
            raise InvalidTransitionError(previous, status)

        if previous != status:
            Order.objects.filter(pk=order.pk).update(status=status)

    order = get_order(order_id)
    if previous != status:
        order_status_changed.send(sender=Order, order=order, previous_status=previous)
    return order
