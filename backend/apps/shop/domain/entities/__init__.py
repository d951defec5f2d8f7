from .cart import Cart, LineItem, make_line_key
from .coupon import Coupon, normalize_code

__all__ = ['Cart', 'LineItem', 'make_line_key', 'Coupon', 'normalize_code']
