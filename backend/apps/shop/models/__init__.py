from .cart import CartItem, WishlistItem
from .catalog import Category, Design, InventoryLog, Product, ProductImage
from .customers import Customer
from .discounts import Discount
from .orders import Order, OrderItem, OrderStatusHistory
from .returns import Return, ReturnItem
from .reviews import Review, ReviewModerationLog

__all__ = [
    'Category', 'Product', 'ProductImage', 'Design', 'InventoryLog',
    'CartItem', 'WishlistItem',
    'Discount',
    'Customer',
    'Order', 'OrderItem', 'OrderStatusHistory',
    'Return', 'ReturnItem',
    'Review', 'ReviewModerationLog',
]
