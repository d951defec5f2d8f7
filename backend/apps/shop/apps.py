# apps/shop/apps.py

from django.apps import AppConfig


class ShopConfig(AppConfig):
    """Storefront app configuration"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.shop'
    verbose_name = 'Storefront'

    def ready(self):
        """Initialize app signals"""
        import apps.shop.signals  # noqa: F401
