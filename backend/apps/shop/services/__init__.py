from .analytics import AnalyticsService
from .base import BaseShopService
from .cart import CartService, DatabaseCartStore, SessionCartStore
from .catalog import CatalogService
from .customers import CustomerService
from .discounts import DiscountService
from .orders import OrderService
from .returns import ReturnService
from .reviews import ReviewService
from .wishlist import WishlistService

__all__ = [
    'BaseShopService',
    'AnalyticsService',
    'CartService',
    'SessionCartStore',
    'DatabaseCartStore',
    'CatalogService',
    'CustomerService',
    'DiscountService',
    'OrderService',
    'ReturnService',
    'ReviewService',
    'WishlistService',
]
