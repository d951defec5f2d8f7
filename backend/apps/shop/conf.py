# apps/shop/conf.py

"""
Store rules read from settings.STOREFRONT, with built-in defaults
"""

from decimal import Decimal

from django.conf import settings

from .constants import (
    DEFAULT_CURRENCY, DEFAULT_FREE_SHIPPING_THRESHOLD, DEFAULT_LOW_STOCK_THRESHOLD,
    DEFAULT_SHIPPING_FEE,
)

DEFAULTS = {
    'FREE_SHIPPING_THRESHOLD': DEFAULT_FREE_SHIPPING_THRESHOLD,
    'SHIPPING_FEE': DEFAULT_SHIPPING_FEE,
    'LOW_STOCK_THRESHOLD': DEFAULT_LOW_STOCK_THRESHOLD,
    'CURRENCY': DEFAULT_CURRENCY,
    'PRODUCT_IMAGE_DIR': 'products',
    'ALERT_EMAILS': [],
}


def store_setting(name):
    overrides = getattr(settings, 'STOREFRONT', {}) or {}
    return overrides.get(name, DEFAULTS[name])


def free_shipping_threshold() -> Decimal:
    return Decimal(str(store_setting('FREE_SHIPPING_THRESHOLD')))


def shipping_fee() -> Decimal:
    return Decimal(str(store_setting('SHIPPING_FEE')))


def low_stock_threshold() -> int:
    return int(store_setting('LOW_STOCK_THRESHOLD'))


def currency() -> str:
    return store_setting('CURRENCY')
