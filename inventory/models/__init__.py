from .catalog import Product, Customer
from .inventory import InventoryBatch
from .order import Order, OrderItem
from .system_setting import SystemSetting

__all__ = [
    'Product',
    'Customer',
    'InventoryBatch',
    'Order',
    'OrderItem',
    'SystemSetting',
]
