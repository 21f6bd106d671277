"""
Fill an empty database with sample seed varieties, customers, batches and orders

Usage:
    python manage.py seed_demo_data
    python manage.py seed_demo_data --orders 80 --clear
"""

import random
from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.utils import timezone

from inventory.exceptions import InsufficientStockError
from inventory.models import Customer, InventoryBatch, Order, OrderItem, Product, SystemSetting
from inventory.Services.order_service import place_order


# code, name, cost price, sell price (VND / kg)
PRODUCTS = [
    ('ST25', 'Lúa giống ST25', '28000', '35000'),
    ('OM5451', 'Lúa giống OM5451', '16000', '21000'),
    ('DT8', 'Lúa giống Đài Thơm 8', '18000', '24000'),
    ('OM18', 'Lúa giống OM18', '15000', '20000'),
    ('IR504', 'Lúa giống IR 50404', '12000', '16000'),
    ('JM85', 'Lúa giống Jasmine 85', '17000', '23000'),
]

CUSTOMERS = [
    ('HTX Nông nghiệp Tân Phú', '0907123456', 'Tân Phú, Đồng Tháp'),
    ('Đại lý Hai Lúa', '0918234567', 'Châu Thành, An Giang'),
    ('Nguyễn Văn Ba', '0939345678', 'Long Mỹ, Hậu Giang'),
    ('Trần Thị Tư', '0945456789', 'Cai Lậy, Tiền Giang'),
    ('Cửa hàng VTNN Phước Lộc', '0276567890', 'Phước Long, Bạc Liêu'),
]

STATUSES = [
    Order.Status.COMPLETED, Order.Status.COMPLETED, Order.Status.COMPLETED,
    Order.Status.SHIPPED, Order.Status.PACKING, Order.Status.PENDING,
    Order.Status.CANCELLED,
]


class Command(BaseCommand):
    help = 'Seed sample catalog, stock and orders'

    def add_arguments(self, parser):
        parser.add_argument('--orders', type=int, default=40, help='Number of orders to create')
        parser.add_argument('--clear', action='store_true', help='Clear existing data first')
        parser.add_argument('--seed', type=int, default=None, help='Random seed for repeatable data')

    def handle(self, *args, **options):
        rng = random.Random(options['seed'])

        if options['clear']:
            OrderItem.objects.all().delete()
            Order.objects.all().delete()
            InventoryBatch.objects.all().delete()
            Product.objects.all().delete()
            Customer.objects.all().delete()
            self.stdout.write(self.style.WARNING('Cleared existing data.'))

        SystemSetting.seed_defaults()

        # ----- Products -----
        products = []
        for code, name, cost, sell in PRODUCTS:
            product, _ = Product.objects.get_or_create(
                code=code,
                defaults={
                    'name': name,
                    'unit': 'kg',
                    'cost_price': Decimal(cost),
                    'sell_price': Decimal(sell),
                },
            )
            products.append(product)
        self.stdout.write(f'Products ready: {len(products)}')

        # ----- Customers -----
        customers = []
        for name, phone, address in CUSTOMERS:
            customer, _ = Customer.objects.get_or_create(
                name=name,
                defaults={'phone': phone, 'address': address},
            )
            customers.append(customer)
        self.stdout.write(f'Customers ready: {len(customers)}')

        # ----- Batches: two per product, the older one received ~45 days ago -----
        now = timezone.now()
        batch_count = 0
        for product in products:
            for n, days_ago in enumerate((45, 20), 1):
                qty = Decimal(rng.choice([500, 800, 1000, 1500]))
                _, created = InventoryBatch.objects.get_or_create(
                    product=product,
                    batch_no=f'{product.code}-L{n:02d}',
                    defaults={
                        'initial_quantity': qty,
                        'quantity': qty,
                        'min_threshold': Decimal('100'),
                        'created_at': now - timedelta(days=days_ago),
                    },
                )
                batch_count += created
        self.stdout.write(f'Batches created: {batch_count}')

        # ----- Orders spread across the last 30 days -----
        created_count = 0
        skipped_count = 0
        for _ in range(options['orders']):
            lines = [
                {
                    'product_id': product.pk,
                    'quantity': rng.choice([10, 20, 25, 50, 100]),
                }
                for product in rng.sample(products, rng.randint(1, 3))
            ]

            try:
                place_order(
                    customer_id=rng.choice(customers).pk,
                    items=lines,
                    order_date=now - timedelta(days=rng.randint(0, 29), hours=rng.randint(0, 10)),
                    status=rng.choice(STATUSES),
                    shipping_fee=rng.choice([0, 30000, 50000]),
                    discount=rng.choice([0, 0, 10000]),
                )
                created_count += 1
            except InsufficientStockError as e:
                skipped_count += 1
                self.stdout.write(self.style.WARNING(f'Skipped order: {e}'))

        self.stdout.write('')
        self.stdout.write(self.style.SUCCESS(
            f'Done: {created_count} orders created, {skipped_count} skipped for lack of stock'
        ))
