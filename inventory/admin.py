from django.contrib import admin
from .models import Customer, InventoryBatch, Order, OrderItem, Product, SystemSetting


# ------------------------
# Product Admin
# ------------------------
@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['id', 'code', 'name', 'unit', 'cost_price', 'sell_price', 'created_at']
    search_fields = ['code', 'name']
    list_filter = ['unit', 'created_at']


# ------------------------
# Customer Admin
# ------------------------
@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'phone', 'address', 'created_at']
    search_fields = ['name', 'phone']
    list_filter = ['created_at']


# ------------------------
# InventoryBatch Admin
# ------------------------
@admin.register(InventoryBatch)
class InventoryBatchAdmin(admin.ModelAdmin):
    list_display = [
        'id', 'batch_no', 'product', 'initial_quantity',
        'quantity', 'min_threshold', 'is_low_stock', 'created_at',
    ]
    list_filter = ['created_at', 'product']
    search_fields = ['batch_no', 'product__name', 'product__code']
    # quantities move through the stock operations only
    readonly_fields = ['initial_quantity', 'quantity']

    @admin.display(boolean=True, description='Low stock')
    def is_low_stock(self, obj):
        return obj.is_low_stock


# ------------------------
# OrderItem Inline
# ------------------------
class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ['product', 'batch', 'quantity', 'unit_price', 'subtotal']
    readonly_fields = ['product', 'batch', 'quantity', 'unit_price', 'subtotal']
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


# ------------------------
# Order Admin
# ------------------------
@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = [
        'id', 'customer', 'order_date', 'status',
        'shipping_fee', 'discount', 'total_amount', 'created_at',
    ]
    list_filter = ['status', 'order_date']
    search_fields = ['id', 'customer__name', 'customer__phone', 'notes']
    readonly_fields = ['total_amount', 'created_at']

    inlines = [OrderItemInline]


# ------------------------
# SystemSetting Admin
# ------------------------
@admin.register(SystemSetting)
class SystemSettingAdmin(admin.ModelAdmin):
    list_display = ['key', 'value']
    search_fields = ['key']
