# apps/shop/models/reviews.py

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.core.models import BaseModel

from ..constants import ReviewStatus
from .catalog import Product
from .managers import ReviewQuerySet


class Review(BaseModel):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='reviews')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reviews')
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    title = models.CharField(max_length=255, blank=True)
    content = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=ReviewStatus.choices, default=ReviewStatus.PENDING)
    is_verified_purchase = models.BooleanField(default=False)

    objects = ReviewQuerySet.as_manager()

    class Meta:
        db_table = 'shop_review'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['product', 'user'], name='one_review_per_product'),
        ]

    def __str__(self):
        return f"{self.product_id} - {self.rating}/5"


class ReviewModerationLog(BaseModel):
    review = models.ForeignKey(Review, on_delete=models.CASCADE, related_name='moderation_logs')
    moderator = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='review_moderations'
    )
    action = models.CharField(max_length=20)
    previous_status = models.CharField(max_length=20, choices=ReviewStatus.choices)
    new_status = models.CharField(max_length=20, choices=ReviewStatus.choices)
    reason = models.TextField(blank=True)

    class Meta:
        db_table = 'shop_review_moderation_log'
        ordering = ['-created_at']
