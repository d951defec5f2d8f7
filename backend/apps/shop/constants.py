# apps/shop/constants.py

"""
Constants for the storefront module
"""

from decimal import Decimal

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PROCESSING = 'processing', 'Processing'
    SHIPPED = 'shipped', 'Shipped'
    DELIVERED = 'delivered', 'Delivered'
    CANCELLED = 'cancelled', 'Cancelled'


class ReturnStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'
    REFUNDED = 'refunded', 'Refunded'
    CANCELLED = 'cancelled', 'Cancelled'


class ReturnReason(models.TextChoices):
    DEFECTIVE = 'defective', 'Defective product'
    WRONG_ITEM = 'wrong_item', 'Wrong item received'
    SIZE_ISSUE = 'size_issue', 'Size issue'
    QUALITY_ISSUE = 'quality_issue', 'Quality issue'
    NOT_AS_DESCRIBED = 'not_as_described', 'Not as described'
    CHANGED_MIND = 'changed_mind', 'Changed mind'
    DAMAGED_IN_TRANSIT = 'damaged_in_transit', 'Damaged in transit'
    OTHER = 'other', 'Other'


class ReviewStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


class DiscountType(models.TextChoices):
    PERCENTAGE = 'percentage', 'Percentage'
    FIXED = 'fixed', 'Fixed Amount'


class PaymentMethod(models.TextChoices):
    COD = 'cod', 'Cash on Delivery'
    ONLINE = 'online', 'Online'


class StockStatus(models.TextChoices):
    IN_STOCK = 'in-stock', 'In Stock'
    LOW_STOCK = 'low-stock', 'Low Stock'
    OUT_OF_STOCK = 'out-of-stock', 'Out of Stock'


class InventoryChangeType(models.TextChoices):
    RESTOCK = 'restock', 'Restock'
    ADJUSTMENT = 'adjustment', 'Adjustment'
    SALE = 'sale', 'Sale'
    RETURN = 'return', 'Return'


# Store defaults, overridable through settings.STOREFRONT
DEFAULT_FREE_SHIPPING_THRESHOLD = Decimal('999')
DEFAULT_SHIPPING_FEE = Decimal('50')
DEFAULT_LOW_STOCK_THRESHOLD = 10
DEFAULT_CURRENCY = 'INR'

# Session keys for guest state
GUEST_CART_SESSION_KEY = 'guest_cart'
GUEST_WISHLIST_SESSION_KEY = 'guest_wishlist'

ORDER_NUMBER_PREFIX = 'ORD'
RETURN_NUMBER_PREFIX = 'RET'

REQUIRED_CHECKOUT_FIELDS = [
    'customer_name',
    'customer_email',
    'customer_phone',
    'address',
    'city',
    'state',
    'pincode',
]


def derive_stock_status(quantity: int, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> str:
    """Map a stock quantity onto in-stock / low-stock / out-of-stock"""
    if quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if quantity < low_stock_threshold:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK
