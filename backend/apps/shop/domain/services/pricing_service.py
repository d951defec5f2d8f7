"""
Order pricing: subtotal, shipping, coupon discount and grand total
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, Optional

from ..entities.cart import LineItem
from ..entities.coupon import Coupon
from ..exceptions import ValidationError
from ..value_objects.money import Money, Number, to_decimal
from .base import Clock, DomainService
from .coupon_service import CouponValidator


@dataclass(frozen=True)
class OrderTotals:
    """Totals at full precision; round with `as_display`"""

    subtotal: Decimal
    shipping: Decimal
    discount: Decimal
    total: Decimal
    coupon_code: Optional[str] = None

    def as_display(self, currency: str = 'INR') -> Dict[str, str]:
        return {
            'subtotal': str(Money(self.subtotal, currency)),
            'shipping': str(Money(self.shipping, currency)),
            'discount': str(Money(self.discount, currency)),
            'total': str(Money(self.total, currency)),
        }

    def rounded(self) -> Dict[str, Decimal]:
        return {
            'subtotal': Money(self.subtotal).rounded(),
            'shipping': Money(self.shipping).rounded(),
            'discount': Money(self.discount).rounded(),
            'total': Money(self.total).rounded(),
        }


class PricingService(DomainService):
    """Pure price aggregation over cart line items"""

    def __init__(self, coupon_validator: Optional[CouponValidator] = None, clock: Optional[Clock] = None):
        super().__init__(clock)
        self.coupon_validator = coupon_validator or CouponValidator(clock=self.clock)

    @staticmethod
    def subtotal(line_items: Iterable[LineItem]) -> Decimal:
        total = Decimal('0')
        for item in line_items:
            if item.quantity < 1:
                raise ValidationError(
                    'Quantity must be at least 1',
                    details={'product_id': item.product_id, 'quantity': item.quantity},
                )
            total += item.effective_price * item.quantity
        return total

    @staticmethod
    def shipping_for(subtotal: Decimal, shipping_threshold: Number, shipping_fee: Number) -> Decimal:
        if subtotal >= to_decimal(shipping_threshold):
            return Decimal('0')
        return to_decimal(shipping_fee)

    def compute_totals(self, line_items: Iterable[LineItem], shipping_threshold: Number,
                       shipping_fee: Number, coupon: Optional[Coupon] = None,
                       now: Optional[datetime] = None) -> OrderTotals:
        """
        subtotal = sum((discounted_price or unit_price) * quantity)
        shipping = 0 at or above the threshold, else the flat fee
        discount = coupon discount on the subtotal (0 without coupon)
        total    = subtotal - discount + shipping, never below 0
        """
        subtotal = self.subtotal(line_items)
        shipping = self.shipping_for(subtotal, shipping_threshold, shipping_fee)

        discount = Decimal('0')
        if coupon is not None:
            self.coupon_validator.check(coupon, subtotal, now=now)
            discount = self.coupon_validator.discount_for(coupon, subtotal)

        total = max(Decimal('0'), subtotal - discount + shipping)
        return OrderTotals(
            subtotal=subtotal,
            shipping=shipping,
            discount=discount,
            total=total,
            coupon_code=coupon.code if coupon else None,
        )
