# apps/shop/models/catalog.py

"""
Catalog: categories, products, product images, showcase designs and
the inventory audit log
"""

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.text import slugify

from apps.core.models import BaseModel

from ..conf import low_stock_threshold
from ..constants import InventoryChangeType, StockStatus, derive_stock_status
from ..domain.entities import LineItem
from .managers import ProductQuerySet


class Category(BaseModel):
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    description = models.TextField(blank=True)
    image_url = models.URLField(blank=True)

    class Meta:
        db_table = 'shop_category'
        ordering = ['name']
        verbose_name_plural = 'Categories'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)


class Product(BaseModel):
    """Sellable product; stock_status always follows stock_quantity"""

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    discounted_price = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(0)]
    )
    category = models.ForeignKey(
        Category, on_delete=models.SET_NULL, null=True, blank=True, related_name='products'
    )
    image_url = models.URLField(blank=True)
    image_alt = models.CharField(max_length=255, blank=True)

    # Variant options offered on the product page
    colors = models.JSONField(default=list, blank=True)
    sizes = models.JSONField(default=list, blank=True)

    badge = models.CharField(max_length=50, blank=True)
    stock_quantity = models.IntegerField(default=0)
    stock_status = models.CharField(
        max_length=20, choices=StockStatus.choices, default=StockStatus.OUT_OF_STOCK
    )

    objects = ProductQuerySet.as_manager()

    class Meta:
        db_table = 'shop_product'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['stock_status']),
            models.Index(fields=['category', 'price']),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        self.stock_status = derive_stock_status(self.stock_quantity, low_stock_threshold())
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'stock_quantity' in update_fields:
            kwargs['update_fields'] = set(update_fields) | {'stock_status'}
        super().save(*args, **kwargs)

    @property
    def effective_price(self):
        return self.discounted_price if self.discounted_price is not None else self.price

    def to_line_item(self, quantity, color='', size='', line_id=None) -> LineItem:
        """Live line item for pricing; discounts not below price are ignored"""
        discounted = self.discounted_price
        if discounted is not None and discounted >= self.price:
            discounted = None
        return LineItem(
            product_id=str(self.pk),
            unit_price=self.price,
            discounted_price=discounted,
            quantity=quantity,
            available_stock=self.stock_quantity,
            color=color,
            size=size,
            name=self.name,
            image=self.image_url,
            line_id=line_id,
        )


class ProductImage(BaseModel):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='images')
    image_url = models.URLField(max_length=500)
    image_alt = models.CharField(max_length=255, blank=True)
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'shop_product_image'
        ordering = ['display_order', 'created_at']

    def __str__(self):
        return f"{self.product.name} image #{self.display_order}"


class Design(BaseModel):
    """Homepage showcase entry"""

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    image_url = models.URLField(max_length=500)
    image_alt = models.CharField(max_length=255, blank=True)
    link = models.CharField(max_length=500, blank=True)
    badge = models.CharField(max_length=50, blank=True)
    is_active = models.BooleanField(default=True)
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'shop_design'
        ordering = ['display_order']

    def __str__(self):
        return self.title


class InventoryLog(BaseModel):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='inventory_logs')
    change_type = models.CharField(max_length=20, choices=InventoryChangeType.choices)
    quantity_change = models.IntegerField()
    previous_quantity = models.IntegerField()
    new_quantity = models.IntegerField()
    reason = models.TextField(blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='inventory_logs'
    )

    class Meta:
        db_table = 'shop_inventory_log'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.product.name}: {self.previous_quantity} -> {self.new_quantity}"
