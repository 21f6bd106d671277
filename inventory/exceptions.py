"""
Business errors raised by the service layer.

Every error is a ValueError so callers that only care about "the operation
was refused" can keep catching ValueError.
"""

from decimal import Decimal


def format_quantity(value):
    """20.00 -> '20', 2.50 -> '2.5'"""
    value = Decimal(value)
    if value == value.to_integral_value():
        return f"{value.quantize(Decimal(1)):f}"
    return f"{value.normalize():f}"


class InventoryError(ValueError):
    """Base class; `status_code` is what the JSON API answers with."""

    status_code = 400


class InvalidInputError(InventoryError):
    """Missing field, non-positive quantity, unknown status value..."""


class NotFoundError(InventoryError):
    status_code = 404


class ReferentialIntegrityError(InventoryError):
    """The record still has dependents and cannot be deleted."""

    status_code = 409


class InsufficientStockError(InventoryError):

    def __init__(self, product, requested, available):
        self.product = product
        self.requested = Decimal(requested)
        self.available = Decimal(available)
        name = getattr(product, 'name', product)
        super().__init__(
            f"insufficient stock for {name}, "
            f"requested {format_quantity(self.requested)}, "
            f"available {format_quantity(self.available)}"
        )


class StockConflictError(InventoryError):
    """A conditional decrement found less stock than the allocation read."""

    status_code = 409

    def __init__(self, batch_id, consumed):
        self.batch_id = batch_id
        self.consumed = Decimal(consumed)
        super().__init__(
            f"batch {batch_id} no longer holds {format_quantity(self.consumed)}; "
            f"stock changed while the order was being placed"
        )


class InvalidTransitionError(InventoryError):
    status_code = 409

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"cannot change order status from {current} to {target}")


class StoreError(InventoryError):
    """The data store rejected or failed a query."""

    status_code = 500


def describe_store_error(exc):
    """
    Raw store message plus whatever diagnostics the driver attached
    (psycopg exposes them on `diag`, wrapped errors on `__cause__`).
    """
    message = str(exc) or exc.__class__.__name__
    parts = [message]

    cause = exc.__cause__
    diag = getattr(exc, 'diag', None) or getattr(cause, 'diag', None)
    if diag is not None:
        detail = getattr(diag, 'message_detail', None)
        hint = getattr(diag, 'message_hint', None)
        if detail:
            parts.append(f"Detail: {detail}")
        if hint:
            parts.append(f"Hint: {hint}")
    elif cause is not None and str(cause) and str(cause) != message:
        parts.append(f"Detail: {cause}")

    return " ".join(parts)


def store_error_from(exc):
    error = StoreError(describe_store_error(exc))
    error.__cause__ = exc
    return error
