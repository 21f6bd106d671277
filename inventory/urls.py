"""
URLs for the inventory app (JSON API, mounted under /api/)
"""

from django.urls import path

from .views import batch_views, customer_views, dashboard, order_views, product_views

urlpatterns = [
    # ========== Products ==========
    path('products/', product_views.product_list, name='product_list'),
    path('products/<int:product_id>/', product_views.product_detail, name='product_detail'),
    path('products/<int:product_id>/delete/', product_views.product_delete, name='product_delete'),
    path('products/<int:product_id>/ledger/', product_views.product_ledger, name='product_ledger'),

    # ========== Customers ==========
    path('customers/', customer_views.customer_list, name='customer_list'),
    path('customers/<int:customer_id>/', customer_views.customer_detail, name='customer_detail'),
    path('customers/<int:customer_id>/delete/', customer_views.customer_delete, name='customer_delete'),

    # ========== Batches ==========
    path('batches/', batch_views.batch_list, name='batch_list'),
    path('batches/<int:batch_id>/', batch_views.batch_detail, name='batch_detail'),
    path('batches/<int:batch_id>/delete/', batch_views.batch_delete, name='batch_delete'),
    path('batches/<int:batch_id>/add-stock/', batch_views.batch_add_stock, name='batch_add_stock'),
    path('batches/<int:batch_id>/remove-stock/', batch_views.batch_remove_stock, name='batch_remove_stock'),

    # ========== Orders ==========
    path('orders/', order_views.order_list, name='order_list'),
    path('orders/<int:order_id>/', order_views.order_detail, name='order_detail'),
    path('orders/<int:order_id>/status/', order_views.order_status, name='order_status'),

    # ========== Reports ==========
    path('dashboard/', dashboard.dashboard, name='dashboard'),
    path('reports/sales/', dashboard.sales_report, name='sales_report'),
]
