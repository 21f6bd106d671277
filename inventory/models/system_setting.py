"""
models/system_setting.py
- key/value configuration for the running system
- editable from the admin without a redeploy; falls back to Django settings
"""

from django.conf import settings
from django.db import models


# ===================================================
# Built-in defaults (last resort after Django settings)
# ===================================================
SYSTEM_SETTINGS_DEFAULTS = {
    "store_name":           "Quản lý Lúa Giống",
    "currency":             "VND",
    "order_status_mode":    "permissive",
    "order_commit_mode":    "atomic",
}

# allowed values for the keys that switch behavior
SYSTEM_SETTINGS_CHOICES = {
    "order_status_mode": ("permissive", "strict"),
    "order_commit_mode": ("atomic", "best_effort"),
}


class SystemSetting(models.Model):
    key   = models.CharField(max_length=100, unique=True, db_index=True)
    value = models.TextField(blank=True, default="")

    class Meta:
        db_table = "system_settings"
        ordering = ["key"]

    def __str__(self):
        return f"{self.key} = {self.value}"

    # ─── Helper class methods ───────────────────────────
    @classmethod
    def default_for(cls, key):
        """INVENTORY_<KEY> from Django settings, then the built-in default."""
        return getattr(settings, f"INVENTORY_{key.upper()}", SYSTEM_SETTINGS_DEFAULTS.get(key, ""))

    @classmethod
    def get(cls, key, default=None):
        try:
            return cls.objects.get(key=key).value
        except cls.DoesNotExist:
            return default if default is not None else cls.default_for(key)

    @classmethod
    def set(cls, key, value):
        """Upsert; rejects values outside SYSTEM_SETTINGS_CHOICES."""
        value = str(value)
        allowed = SYSTEM_SETTINGS_CHOICES.get(key)
        if allowed and value not in allowed:
            raise ValueError(f"Invalid value for {key}: {value!r} (expected one of {', '.join(allowed)})")
        obj, _ = cls.objects.update_or_create(key=key, defaults={"value": value})
        return obj

    @classmethod
    def get_all(cls):
        rows = {row.key: row.value for row in cls.objects.all()}
        result = {key: cls.default_for(key) for key in SYSTEM_SETTINGS_DEFAULTS}
        result.update(rows)
        return result

    @classmethod
    def seed_defaults(cls):
        for key in SYSTEM_SETTINGS_DEFAULTS:
            cls.objects.get_or_create(key=key, defaults={"value": cls.default_for(key)})
