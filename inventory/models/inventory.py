from django.db import models
from django.utils import timezone


# ------------------------
# Inventory Batch (lô hàng)
# ------------------------
class InventoryBatch(models.Model):
    product = models.ForeignKey('Product', on_delete=models.PROTECT, related_name='batches')
    batch_no = models.CharField(max_length=50, verbose_name="Số lô")

    # initial_quantity grows together with quantity on stock-add only
    initial_quantity = models.DecimalField(max_digits=12, decimal_places=2, default=0, verbose_name="Số lượng ban đầu")
    quantity = models.DecimalField(max_digits=12, decimal_places=2, default=0, verbose_name="Tồn kho hiện tại")
    min_threshold = models.DecimalField(max_digits=12, decimal_places=2, default=0, verbose_name="Ngưỡng tối thiểu")

    # entry date, drives FIFO order
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "inventory_batches"
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=0),
                name="inventory_batch_quantity_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.batch_no} - {self.product.name} ({self.quantity})"

    @property
    def is_low_stock(self):
        return self.min_threshold > 0 and self.quantity <= self.min_threshold

    @property
    def has_moved(self):
        """Some stock already left this batch."""
        return self.quantity < self.initial_quantity
