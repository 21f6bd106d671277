from django.db import models
import uuid


# ------------------------
# 1. Product (giống lúa)
# ------------------------
class Product(models.Model):
    code = models.CharField(max_length=50, unique=True, blank=True, verbose_name="Mã giống")
    name = models.CharField(max_length=200, db_index=True, verbose_name="Tên giống")
    unit = models.CharField(max_length=50, default="kg", verbose_name="Đơn vị tính")

    cost_price = models.DecimalField(max_digits=14, decimal_places=2, default=0, verbose_name="Giá vốn")
    sell_price = models.DecimalField(max_digits=14, decimal_places=2, default=0, verbose_name="Giá bán")

    description = models.TextField(blank=True, verbose_name="Mô tả")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "products"
        ordering = ['name']

    def save(self, *args, **kwargs):
        # empty code -> generated code (SP-XXXXXXXX)
        if not self.code:
            random_code = str(uuid.uuid4())[:8].upper()
            self.code = f"SP-{random_code}"
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.code} - {self.name}"


# ------------------------
# 2. Customer
# ------------------------
class Customer(models.Model):
    name = models.CharField(max_length=200, db_index=True, verbose_name="Tên khách hàng")
    phone = models.CharField(max_length=20, blank=True, verbose_name="Số điện thoại")
    address = models.TextField(blank=True, verbose_name="Địa chỉ")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "customers"
        ordering = ['name']

    def __str__(self):
        return self.name
