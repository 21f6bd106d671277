import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Customer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(db_index=True, max_length=200, verbose_name='Tên khách hàng')),
                ('phone', models.CharField(blank=True, max_length=20, verbose_name='Số điện thoại')),
                ('address', models.TextField(blank=True, verbose_name='Địa chỉ')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'customers',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(blank=True, max_length=50, unique=True, verbose_name='Mã giống')),
                ('name', models.CharField(db_index=True, max_length=200, verbose_name='Tên giống')),
                ('unit', models.CharField(default='kg', max_length=50, verbose_name='Đơn vị tính')),
                ('cost_price', models.DecimalField(decimal_places=2, default=0, max_digits=14, verbose_name='Giá vốn')),
                ('sell_price', models.DecimalField(decimal_places=2, default=0, max_digits=14, verbose_name='Giá bán')),
                ('description', models.TextField(blank=True, verbose_name='Mô tả')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'products',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='SystemSetting',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.CharField(db_index=True, max_length=100, unique=True)),
                ('value', models.TextField(blank=True, default='')),
            ],
            options={
                'db_table': 'system_settings',
                'ordering': ['key'],
            },
        ),
        migrations.CreateModel(
            name='InventoryBatch',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('batch_no', models.CharField(max_length=50, verbose_name='Số lô')),
                ('initial_quantity', models.DecimalField(decimal_places=2, default=0, max_digits=12, verbose_name='Số lượng ban đầu')),
                ('quantity', models.DecimalField(decimal_places=2, default=0, max_digits=12, verbose_name='Tồn kho hiện tại')),
                ('min_threshold', models.DecimalField(decimal_places=2, default=0, max_digits=12, verbose_name='Ngưỡng tối thiểu')),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='batches', to='inventory.product')),
            ],
            options={
                'db_table': 'inventory_batches',
                'ordering': ['-created_at'],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(quantity__gte=0),
                        name='inventory_batch_quantity_non_negative',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('order_date', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Ngày đặt')),
                ('status', models.CharField(
                    choices=[
                        ('pending', 'Chờ xử lý'),
                        ('processing', 'Đang xử lý'),
                        ('packing', 'Đóng gói'),
                        ('shipped', 'Đang giao'),
                        ('completed', 'Hoàn thành'),
                        ('cancelled', 'Đã hủy'),
                    ],
                    db_index=True, default='pending', max_length=20,
                )),
                ('total_amount', models.DecimalField(decimal_places=2, default=0, max_digits=14, verbose_name='Tổng tiền')),
                ('shipping_fee', models.DecimalField(decimal_places=2, default=0, max_digits=14, verbose_name='Phí vận chuyển')),
                ('discount', models.DecimalField(decimal_places=2, default=0, max_digits=14, verbose_name='Giảm giá')),
                ('notes', models.TextField(blank=True, verbose_name='Ghi chú')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='inventory.customer')),
            ],
            options={
                'db_table': 'orders',
                'ordering': ['-order_date'],
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='Số lượng')),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=14, verbose_name='Đơn giá')),
                ('batch', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='order_items', to='inventory.inventorybatch')),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='inventory.order')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='order_items', to='inventory.product')),
            ],
            options={
                'db_table': 'order_items',
            },
        ),
    ]
