from django.conf import settings
from django.db import migrations


DEFAULT_KEYS = {
    'store_name': 'Quản lý Lúa Giống',
    'currency': 'VND',
    'order_status_mode': 'permissive',
    'order_commit_mode': 'atomic',
}


def seed_settings(apps, schema_editor):
    SystemSetting = apps.get_model('inventory', 'SystemSetting')
    for key, fallback in DEFAULT_KEYS.items():
        value = getattr(settings, f'INVENTORY_{key.upper()}', fallback)
        SystemSetting.objects.get_or_create(key=key, defaults={'value': value})


def unseed_settings(apps, schema_editor):
    SystemSetting = apps.get_model('inventory', 'SystemSetting')
    SystemSetting.objects.filter(key__in=DEFAULT_KEYS).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('inventory', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_settings, unseed_settings),
    ]
