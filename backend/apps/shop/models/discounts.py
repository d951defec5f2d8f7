# apps/shop/models/discounts.py

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from apps.core.models import BaseModel

from ..constants import DiscountType
from ..domain.entities import Coupon, normalize_code
from .managers import DiscountQuerySet


class Discount(BaseModel):
    """Coupon code with its eligibility rules and redemption counter"""

    code = models.CharField(max_length=50, unique=True)
    description = models.TextField(blank=True)
    discount_type = models.CharField(max_length=20, choices=DiscountType.choices)
    discount_value = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    min_purchase_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    max_discount_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    valid_from = models.DateTimeField(default=timezone.now)
    valid_until = models.DateTimeField(null=True, blank=True)
    usage_limit = models.PositiveIntegerField(null=True, blank=True)
    usage_count = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)

    objects = DiscountQuerySet.as_manager()

    class Meta:
        db_table = 'shop_discount'
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(usage_limit__isnull=True) | models.Q(usage_count__lte=models.F('usage_limit')),
                name='discount_usage_within_limit',
            ),
        ]

    def __str__(self):
        return self.code

    def save(self, *args, **kwargs):
        self.code = normalize_code(self.code)
        super().save(*args, **kwargs)

    def to_coupon(self) -> Coupon:
        return Coupon(
            id=str(self.pk),
            code=self.code,
            kind=self.discount_type,
            value=self.discount_value,
            min_purchase_amount=self.min_purchase_amount,
            max_discount_amount=self.max_discount_amount,
            valid_from=self.valid_from,
            valid_until=self.valid_until,
            usage_limit=self.usage_limit,
            usage_count=self.usage_count,
            is_active=self.is_active,
        )
