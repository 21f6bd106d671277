from django.apps import AppConfig


class InventoryConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'inventory'
    verbose_name = 'Quản lý kho lúa giống'

    def ready(self):
        # connect the logging receivers for change events
        from inventory import receivers  # noqa: F401
