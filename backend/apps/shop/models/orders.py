# apps/shop/models/orders.py

"""
Orders, their frozen line items and the status audit trail
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import BaseModel

from ..constants import OrderStatus, PaymentMethod
from .catalog import Product
from .customers import Customer
from .managers import OrderQuerySet


class Order(BaseModel):
    """
    Order placed at checkout.

    Amounts are computed server-side when the order is created and are
    never recomputed afterwards; only `status` moves.
    """

    order_number = models.CharField(max_length=50, unique=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='orders'
    )
    customer = models.ForeignKey(
        Customer, on_delete=models.SET_NULL, null=True, blank=True, related_name='orders'
    )
    customer_name = models.CharField(max_length=255)
    customer_email = models.EmailField()
    customer_phone = models.CharField(max_length=20)
    shipping_address = models.JSONField(default=dict)
    billing_address = models.JSONField(default=dict, blank=True)

    # total_amount holds the subtotal before discount and shipping
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    shipping_cost = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    final_amount = models.DecimalField(max_digits=12, decimal_places=2)
    discount_code = models.CharField(max_length=50, blank=True)

    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices, default=PaymentMethod.COD)
    status = models.CharField(max_length=20, choices=OrderStatus.choices, default=OrderStatus.PENDING)
    items_count = models.PositiveIntegerField(default=0)
    notes = models.TextField(blank=True)

    objects = OrderQuerySet.as_manager()

    class Meta:
        db_table = 'shop_order'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at']),
            models.Index(fields=['customer_email']),
        ]

    def __str__(self):
        return self.order_number

    @property
    def subtotal(self):
        return self.total_amount


class OrderItem(BaseModel):
    """Line item frozen at submission: name, image and prices are copies"""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(
        Product, on_delete=models.SET_NULL, null=True, blank=True, related_name='order_items'
    )
    product_name = models.CharField(max_length=255)
    product_image = models.URLField(max_length=500, blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    discounted_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    color = models.CharField(max_length=50, blank=True)
    size = models.CharField(max_length=50, blank=True)
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        db_table = 'shop_order_item'
        ordering = ['created_at']

    def __str__(self):
        return f"{self.quantity} x {self.product_name}"

    @property
    def effective_price(self):
        return self.discounted_price if self.discounted_price is not None else self.price


class OrderStatusHistory(BaseModel):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='status_history')
    previous_status = models.CharField(max_length=20, choices=OrderStatus.choices)
    new_status = models.CharField(max_length=20, choices=OrderStatus.choices)
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='order_status_changes'
    )

    class Meta:
        db_table = 'shop_order_status_history'
        ordering = ['created_at']
        verbose_name_plural = 'Order status history'

    def __str__(self):
        return f"{self.order.order_number}: {self.previous_status} -> {self.new_status}"
