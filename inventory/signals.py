"""
Change events sent by the services.

Consumers (dashboards, caches, notifications) connect here instead of
reading state kept by the caller.
"""

from django.dispatch import Signal

# kwargs: batch, delta, reason
stock_changed = Signal()

# kwargs: order, failed_batch_updates
order_placed = Signal()

# kwargs: order, previous_status
order_status_changed = Signal()
