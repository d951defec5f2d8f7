# apps/shop/models/returns.py

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import BaseModel

from ..constants import ReturnReason, ReturnStatus
from .managers import ReturnQuerySet
from .orders import Order, OrderItem


class Return(BaseModel):
    """
    Return request against a delivered order.

    refund_amount is fixed when the request is created; the state
    machine only decides whether it is released.
    """

    return_number = models.CharField(max_length=50, unique=True)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='returns')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='returns'
    )
    customer_name = models.CharField(max_length=255)
    customer_email = models.EmailField()
    reason = models.CharField(max_length=30, choices=ReturnReason.choices)
    reason_details = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=ReturnStatus.choices, default=ReturnStatus.PENDING)
    refund_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    refund_processed_at = models.DateTimeField(null=True, blank=True)
    processed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='processed_returns'
    )
    admin_notes = models.TextField(blank=True)

    objects = ReturnQuerySet.as_manager()

    class Meta:
        db_table = 'shop_return'
        ordering = ['-created_at']

    def __str__(self):
        return self.return_number


class ReturnItem(BaseModel):
    return_request = models.ForeignKey(Return, on_delete=models.CASCADE, related_name='items')
    order_item = models.ForeignKey(
        OrderItem, on_delete=models.SET_NULL, null=True, blank=True, related_name='return_items'
    )
    product_name = models.CharField(max_length=255)
    product_image = models.URLField(max_length=500, blank=True)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    refund_amount = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        db_table = 'shop_return_item'
        ordering = ['created_at']

    def __str__(self):
        return f"{self.quantity} x {self.product_name}"
