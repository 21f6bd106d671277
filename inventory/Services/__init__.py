"""
Services Layer
Business logic kept out of views and models
"""

from .customer_service import CustomerService
from .order_service import (
    compute_order_total,
    get_order,
    list_orders,
    place_order,
    update_order_status,
)
from .product_service import ProductService
from .stock_service import (
    add_stock,
    allocate_fifo,
    create_batch,
    delete_batch,
    get_stock_ledger,
    remove_stock,
    update_batch,
)

__all__ = [
    'CustomerService',
    'ProductService',

    # stock
    'get_stock_ledger',
    'allocate_fifo',
    'create_batch',
    'update_batch',
    'delete_batch',
    'add_stock',
    'remove_stock',

    # orders
    'compute_order_total',
    'place_order',
    'update_order_status',
    'get_order',
    'list_orders',
]
