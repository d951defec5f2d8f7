"""
Wishlist service: guest list in the session, account list in WishlistItem
"""

from typing import List

from django.db import IntegrityError, transaction

from ..constants import GUEST_WISHLIST_SESSION_KEY
from ..models import Product, WishlistItem
from .base import BaseShopService


class WishlistService(BaseShopService):
    """Wishlist operations for either a signed-in user or a guest session"""

    def __init__(self, user=None, session=None, clock=None):
        super().__init__(clock)
        self.user = user if user is not None and user.is_authenticated else None
        self.session = session

    @classmethod
    def for_request(cls, request) -> 'WishlistService':
        return cls(user=getattr(request, 'user', None), session=request.session)

    def guest_ids(self) -> List[str]:
        return [str(pk) for pk in self.session.get(GUEST_WISHLIST_SESSION_KEY, [])]

    def product_ids(self) -> List[str]:
        if self.user is not None:
            return [
                str(pk) for pk in
                WishlistItem.objects.filter(user=self.user).values_list('product_id', flat=True)
            ]
        return self.guest_ids()

    def list_products(self) -> List[Product]:
        ids = self.product_ids()
        products = {str(p.pk): p for p in Product.objects.filter(pk__in=ids)}
        return [products[pk] for pk in ids if pk in products]

    def contains(self, product_id) -> bool:
        return str(product_id) in self.product_ids()

    def add(self, product_id) -> bool:
        """Idempotent add; returns True when the product was not there before"""
        product = self.get_object(Product.objects.all(), 'Product', pk=product_id)
        if self.user is not None:
            try:
                with transaction.atomic():
                    _, created = WishlistItem.objects.get_or_create(user=self.user, product=product)
            except IntegrityError:
                created = False
            return created

        ids = self.guest_ids()
        if str(product.pk) in ids:
            return False
        self.session[GUEST_WISHLIST_SESSION_KEY] = ids + [str(product.pk)]
        return True

    def remove(self, product_id) -> bool:
        if self.user is not None:
            deleted, _ = WishlistItem.objects.filter(user=self.user, product_id=product_id).delete()
            return bool(deleted)

        ids = self.guest_ids()
        remaining = [pk for pk in ids if pk != str(product_id)]
        self.session[GUEST_WISHLIST_SESSION_KEY] = remaining
        return len(remaining) != len(ids)

    def toggle(self, product_id) -> bool:
        """Returns whether the product is in the wishlist afterwards"""
        if self.contains(product_id):
            self.remove(product_id)
            return False
        self.add(product_id)
        return True

    @classmethod
    def merge_guest_wishlist(cls, session, user) -> int:
        """Copy guest entries into the account list, keeping existing ones untouched"""
        guest = cls(session=session)
        ids = guest.guest_ids()
        added = 0
        if ids:
            existing = set(
                str(pk) for pk in WishlistItem.objects.filter(user=user).values_list('product_id', flat=True)
            )
            new_ids = [pk for pk in ids if pk not in existing]
            products = Product.objects.filter(pk__in=new_ids)
            WishlistItem.objects.bulk_create(
                [WishlistItem(user=user, product=product) for product in products],
                ignore_conflicts=True,
            )
            added = len(products)
        session.pop(GUEST_WISHLIST_SESSION_KEY, None)
        return added
