from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ...constants import DiscountType
from ..value_objects.money import to_decimal


def normalize_code(code: str) -> str:
    return (code or '').strip().upper()


@dataclass(frozen=True)
class Coupon:
    """Discount rule resolved from a user-entered code"""

    code: str
    kind: str
    value: Decimal
    min_purchase_amount: Optional[Decimal] = None
    max_discount_amount: Optional[Decimal] = None
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    usage_limit: Optional[int] = None
    usage_count: int = 0
    is_active: bool = True
    id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'code', normalize_code(self.code))
        object.__setattr__(self, 'value', to_decimal(self.value))
        for name in ('min_purchase_amount', 'max_discount_amount'):
            amount = getattr(self, name)
            if amount is not None:
                object.__setattr__(self, name, to_decimal(amount))

    @property
    def is_percentage(self) -> bool:
        return self.kind == DiscountType.PERCENTAGE

    def matches(self, code: str) -> bool:
        return self.code == normalize_code(code)

    def is_exhausted(self) -> bool:
        return self.usage_limit is not None and self.usage_count >= self.usage_limit
