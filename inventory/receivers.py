import logging

from django.dispatch import receiver

from inventory.exceptions import format_quantity
from inventory.signals import order_placed, order_status_changed, stock_changed

logger = logging.getLogger(__name__)


@receiver(stock_changed)
def log_stock_change(sender, batch, delta, reason='', **kwargs):
    logger.info(
        "STOCK: batch %s (%s) %s%s -> %s %s",
        batch.batch_no, batch.product_id,
        '+' if delta > 0 else '', format_quantity(delta),
        format_quantity(batch.quantity), reason,
    )


@receiver(order_placed)
def log_order_placed(sender, order, failed_batch_updates=(), **kwargs):
    logger.info("ORDER: #%s placed, total %s", order.pk, order.total_amount)
    if failed_batch_updates:
        logger.warning(
            "ORDER: #%s left %d batch update(s) unapplied: %s",
            order.pk, len(failed_batch_updates), list(failed_batch_updates),
        )


@receiver(order_status_changed)
def log_order_status(sender, order, previous_status, **kwargs):
    logger.info("ORDER: #%s status %s -> %s", order.pk, previous_status, order.status)
