# apps/shop/models/customers.py

from decimal import Decimal

from django.conf import settings
from django.db import models

from apps.core.models import BaseModel


class Customer(BaseModel):
    """Buyer record keyed by email; guests and accounts alike"""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='customer_records'
    )
    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=255)
    phone = models.CharField(max_length=20, blank=True)
    address = models.TextField(blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    postal_code = models.CharField(max_length=20, blank=True)
    country = models.CharField(max_length=100, default='India')

    # Aggregates refreshed after each checkout
    total_orders = models.PositiveIntegerField(default=0)
    total_spent = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0'))

    class Meta:
        db_table = 'shop_customer'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.full_name} <{self.email}>"
