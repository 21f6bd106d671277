from . import batch_views, customer_views, dashboard, order_views, product_views

__all__ = [
    'batch_views',
    'customer_views',
    'dashboard',
    'order_views',
    'product_views',
]
