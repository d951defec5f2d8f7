# apps/shop/signals.py

"""
Storefront signals: change feed publishing and guest state merge on login
"""

import logging

from django.contrib.auth.signals import user_logged_in
from django.db.models.signals import post_save
from django.dispatch import receiver

from .infrastructure.realtime import ORDERS_TABLE, RETURNS_TABLE, publish_change
from .models import Order, Return
from .services.cart import CartService
from .services.wishlist import WishlistService

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Order)
def order_post_save(sender, instance, created, **kwargs):
    """Push order inserts and updates to change feed subscribers"""
    publish_change(instance, ORDERS_TABLE, created, user_id=instance.user_id)


@receiver(post_save, sender=Return)
def return_post_save(sender, instance, created, **kwargs):
    """Push return inserts and updates to change feed subscribers"""
    publish_change(instance, RETURNS_TABLE, created, user_id=instance.user_id)


@receiver(user_logged_in)
def merge_guest_state(sender, request, user, **kwargs):
    """Fold the guest cart and wishlist into the account that just signed in"""
    session = getattr(request, 'session', None)
    if session is None:
        return
    CartService.merge_guest_cart(session, user)
    added = WishlistService.merge_guest_wishlist(session, user)
    logger.debug('Merged guest state for user %s (%s wishlist entries)', user.pk, added)
