"""
Discount code service: lookup, validation, preview and atomic redemption
"""

from decimal import Decimal
from typing import Dict, Optional

from django.db.models import F

from ..domain.entities import Coupon, normalize_code
from ..domain.exceptions import CouponNotFound, CouponUsageLimitReached
from ..domain.services import CouponValidator
from ..models import Discount
from .base import BaseShopService


class DiscountService(BaseShopService):
    """Service for discount code operations"""

    def __init__(self, clock=None):
        super().__init__(clock)
        self.validator = CouponValidator(lookup=self.lookup, clock=self.clock)

    @staticmethod
    def lookup(code: str) -> Optional[Coupon]:
        discount = Discount.objects.by_code(code).first()
        return discount.to_coupon() if discount else None

    def get_by_code(self, code: str) -> Discount:
        discount = Discount.objects.by_code(code).first()
        if discount is None:
            raise CouponNotFound(normalize_code(code))
        return discount

    def validate(self, code: str, order_amount) -> Coupon:
        """Check a code against an order amount; never touches usage_count"""
        return self.validator.validate(code, order_amount)

    def preview(self, code: str, order_amount) -> Dict:
        """Discount a code would grant on `order_amount`, without redeeming it"""
        result = self.validator.apply(code, order_amount)
        coupon = result['coupon']
        return {
            'code': coupon.code,
            'discount_type': coupon.kind,
            'discount_value': coupon.value,
            'discount_amount': result['discount_amount'],
            'final_amount': result['final_amount'],
        }

    def discount_for(self, coupon: Coupon, order_amount) -> Decimal:
        return self.validator.discount_for(coupon, order_amount)

    def redeem(self, coupon: Coupon) -> None:
        """
        Count one use of `coupon`.

        The increment is a single conditional UPDATE so two concurrent
        checkouts can never push usage_count past usage_limit.
        Must run inside the checkout transaction.
        """
        queryset = Discount.objects.filter(pk=coupon.id)
        if coupon.usage_limit is not None:
            queryset = queryset.filter(usage_count__lt=F('usage_limit'))
        updated = queryset.update(usage_count=F('usage_count') + 1)
        if updated == 0:
            self.log_info('Coupon redemption refused', {'code': coupon.code})
            raise CouponUsageLimitReached(coupon.code)
