"""
Coupon validation and discount computation
"""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from ..entities.coupon import Coupon, normalize_code
from ..exceptions import (
    CouponBelowMinimum, CouponExpired, CouponInactive, CouponNotFound,
    CouponUsageLimitReached,
)
from ..value_objects.money import Number, to_decimal
from .base import Clock, PolicyService

CouponLookup = Callable[[str], Optional[Coupon]]


class CouponValidator(PolicyService):
    """
    Decides whether a coupon applies to an order amount.

    Checks run in a fixed order and stop at the first failure:
    existence, active flag, expiry, usage cap, minimum purchase.
    """

    def __init__(self, lookup: Optional[CouponLookup] = None, clock: Optional[Clock] = None):
        super().__init__(clock)
        self.lookup = lookup

    def validate(self, code: str, order_amount: Number) -> Coupon:
        """Resolve `code` and check it against `order_amount`"""
        normalized = normalize_code(code)
        coupon = self.lookup(normalized) if (self.lookup and normalized) else None
        if coupon is None:
            raise CouponNotFound(normalized)
        return self.check(coupon, order_amount)

    def check(self, coupon: Coupon, order_amount: Number, now: Optional[datetime] = None) -> Coupon:
        """Run checks 2-5 on an already resolved coupon"""
        now = now or self.now()
        amount = to_decimal(order_amount)

        if not coupon.is_active:
            raise CouponInactive(coupon.code)
        if coupon.valid_from is not None and coupon.valid_from > now:
            # not yet started
            raise CouponInactive(coupon.code)
        if coupon.valid_until is not None and coupon.valid_until < now:
            raise CouponExpired(coupon.code)
        if coupon.is_exhausted():
            raise CouponUsageLimitReached(coupon.code)
        if coupon.min_purchase_amount is not None and amount < coupon.min_purchase_amount:
            raise CouponBelowMinimum(coupon.code, coupon.min_purchase_amount)
        return coupon

    @staticmethod
    def discount_for(coupon: Coupon, order_amount: Number) -> Decimal:
        """Discount granted by `coupon` on `order_amount`, never above the amount"""
        amount = to_decimal(order_amount)
        if amount <= 0:
            return Decimal('0')

        if coupon.is_percentage:
            discount = amount * coupon.value / Decimal('100')
            if coupon.max_discount_amount is not None:
                discount = min(discount, coupon.max_discount_amount)
        else:
            discount = coupon.value

        return max(Decimal('0'), min(discount, amount))

    def apply(self, code: str, order_amount: Number) -> dict:
        """Validate and price a code in one step, without redeeming it"""
        coupon = self.validate(code, order_amount)
        discount = self.discount_for(coupon, order_amount)
        return {
            'coupon': coupon,
            'discount_amount': discount,
            'final_amount': to_decimal(order_amount) - discount,
        }
