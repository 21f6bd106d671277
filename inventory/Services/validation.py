"""
Shared input checks for the service layer.

All checks run before any write so a rejected call leaves no trace.
"""

import functools
from decimal import Decimal, InvalidOperation

from django.db import DatabaseError

from inventory.exceptions import InvalidInputError, store_error_from


def to_decimal(value, field, default=None):
    """Parse a number coming from a form/JSON payload."""
    if value is None or value == "":
        if default is not None:
            return Decimal(default)
        raise InvalidInputError(f"{field} is required")
    if isinstance(value, bool):
        raise InvalidInputError(f"{field} must be a number")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidInputError(f"{field} must be a number, got {value!r}")
    if not result.is_finite():
        raise InvalidInputError(f"{field} must be a finite number")
    return result


def positive(value, field):
    value = to_decimal(value, field)
    if value <= 0:
        raise InvalidInputError(f"{field} must be greater than 0")
    return value


def non_negative(value, field, default=None):
    value = to_decimal(value, field, default=default)
    if value < 0:
        raise InvalidInputError(f"{field} must not be negative")
    return value


def form_error_message(form):
    """Flatten Django form errors into one line."""
    parts = []
    for field, errors in form.errors.items():
        label = "" if field == "__all__" else f"{field}: "
        parts.append(label + " ".join(str(e) for e in errors))
    return "; ".join(parts)


def validate_form(form):
    if not form.is_valid():
        raise InvalidInputError(form_error_message(form))
    return form.cleaned_data


def store_call(func):
    """Re-raise data-store failures as StoreError carrying the store's message."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as e:
            raise store_error_from(e) from e

    return wrapper
