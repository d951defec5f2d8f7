# apps/shop/models/cart.py

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import BaseModel

from .catalog import Product


class CartItem(BaseModel):
    """Account cart line, one per (user, product, color, size)"""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='cart_items')
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='cart_items')
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    color = models.CharField(max_length=50, blank=True, default='')
    size = models.CharField(max_length=50, blank=True, default='')

    class Meta:
        db_table = 'shop_cart_item'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'product', 'color', 'size'], name='unique_cart_line'
            ),
        ]

    def __str__(self):
        return f"{self.quantity} x {self.product_id} ({self.color}/{self.size})"


class WishlistItem(BaseModel):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='wishlist_items')
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='wishlisted_by')

    class Meta:
        db_table = 'shop_wishlist_item'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'product'], name='unique_wishlist_entry'),
        ]

    def __str__(self):
        return f"{self.user_id} -> {self.product_id}"
