from decimal import Decimal
from django.db import models
from django.db.models import F, Sum
from django.utils import timezone


# ------------------------
# Order (đơn hàng)
# ------------------------
class Order(models.Model):

    class Status(models.TextChoices):
        PENDING = 'pending', 'Chờ xử lý'
        PROCESSING = 'processing', 'Đang xử lý'
        PACKING = 'packing', 'Đóng gói'
        SHIPPED = 'shipped', 'Đang giao'
        COMPLETED = 'completed', 'Hoàn thành'
        CANCELLED = 'cancelled', 'Đã hủy'

    # still being worked on (dashboard "open orders")
    OPEN_STATUSES = (Status.PENDING, Status.PROCESSING, Status.PACKING)
    TERMINAL_STATUSES = (Status.COMPLETED, Status.CANCELLED)

    customer = models.ForeignKey('Customer', on_delete=models.PROTECT, related_name='orders')
    order_date = models.DateTimeField(default=timezone.now, db_index=True, verbose_name="Ngày đặt")
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True)

    total_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0, verbose_name="Tổng tiền")
    shipping_fee = models.DecimalField(max_digits=14, decimal_places=2, default=0, verbose_name="Phí vận chuyển")
    discount = models.DecimalField(max_digits=14, decimal_places=2, default=0, verbose_name="Giảm giá")

    notes = models.TextField(blank=True, verbose_name="Ghi chú")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "orders"
        ordering = ['-order_date']

    def __str__(self):
        return f"#{self.pk} - {self.customer.name} - {self.total_amount:,.0f}"

    @property
    def items_subtotal(self):
        """Σ quantity × unit_price over the stored line items."""
        total = self.items.aggregate(
            total=Sum(F('quantity') * F('unit_price'))
        )['total']
        return total or Decimal('0')


# ------------------------
# OrderItem (chi tiết đơn)
# ------------------------
class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey('Product', on_delete=models.PROTECT, related_name='order_items')
    # first batch drawn for this line, kept for traceability only
    batch = models.ForeignKey(
        'InventoryBatch', on_delete=models.PROTECT, null=True, blank=True, related_name='order_items'
    )

    quantity = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="Số lượng")
    # price snapshot at order time
    unit_price = models.DecimalField(max_digits=14, decimal_places=2, verbose_name="Đơn giá")

    class Meta:
        db_table = "order_items"

    def __str__(self):
        return f"#{self.order_id} - {self.product.name} ({self.quantity})"

    @property
    def subtotal(self):
        return self.quantity * self.unit_price
