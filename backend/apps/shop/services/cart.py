"""
Cart service: guest carts in the session, account carts in CartItem rows.

Both stores hold only (product, quantity, color, size); prices and stock
are always read from live Product rows when the cart is loaded.
"""

from typing import Dict, List, Optional

from django.db import transaction

from .. import conf
from ..constants import GUEST_CART_SESSION_KEY
from ..domain.entities import Cart, make_line_key
from ..domain.services import OrderTotals, PricingService
from ..models import CartItem, Product
from .base import BaseShopService
from .discounts import DiscountService


class SessionCartStore:
    """Guest cart kept under a session key as a list of plain dicts"""

    def __init__(self, session, key: str = GUEST_CART_SESSION_KEY):
        self.session = session
        self.key = key

    def rows(self) -> List[Dict]:
        return list(self.session.get(self.key, []))

    def save(self, cart: Cart):
        # reassign so the session backend notices the change
        self.session[self.key] = [
            {
                'product_id': line.product_id,
                'quantity': line.quantity,
                'color': line.color,
                'size': line.size,
            }
            for line in cart
        ]

    def clear(self):
        if self.key in self.session:
            del self.session[self.key]


class DatabaseCartStore:
    """Account cart kept in CartItem rows"""

    def __init__(self, user):
        self.user = user

    def rows(self) -> List[Dict]:
        return [
            {
                'product_id': str(item.product_id),
                'quantity': item.quantity,
                'color': item.color,
                'size': item.size,
            }
            for item in CartItem.objects.filter(user=self.user).order_by('created_at')
        ]

    @transaction.atomic
    def save(self, cart: Cart):
        existing = {
            make_line_key(item.product_id, item.color, item.size): item
            for item in CartItem.objects.select_for_update().filter(user=self.user)
        }
        for line in cart:
            item = existing.pop(line.key, None)
            if item is None:
                CartItem.objects.create(
                    user=self.user,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    color=line.color,
                    size=line.size,
                )
            elif item.quantity != line.quantity:
                item.quantity = line.quantity
                item.save(update_fields=['quantity', 'updated_at'])
        if existing:
            CartItem.objects.filter(pk__in=[item.pk for item in existing.values()]).delete()

    def clear(self):
        CartItem.objects.filter(user=self.user).delete()


class CartService(BaseShopService):
    """Cart operations over either store"""

    def __init__(self, store, pricing: Optional[PricingService] = None, clock=None):
        super().__init__(clock)
        self.store = store
        self.pricing = pricing or PricingService(clock=self.clock)

    @classmethod
    def for_request(cls, request) -> 'CartService':
        user = getattr(request, 'user', None)
        if user is not None and user.is_authenticated:
            return cls(DatabaseCartStore(user))
        return cls(SessionCartStore(request.session))

    def load(self) -> Cart:
        """Build the cart from stored rows and live product data"""
        rows = [row for row in self.store.rows() if int(row.get('quantity') or 0) >= 1]
        products = {
            str(pk): product
            for pk, product in Product.objects.in_bulk({row['product_id'] for row in rows}).items()
        }

        lines = []
        for row in rows:
            product = products.get(str(row['product_id']))
            if product is None:
                self.log_warning('Dropping cart line for missing product', {'product_id': row['product_id']})
                continue
            lines.append(product.to_line_item(
                int(row['quantity']), color=row.get('color', ''), size=row.get('size', '')
            ))
        return Cart(lines)

    def add_item(self, product_id, quantity: int = 1, color: str = '', size: str = '') -> Cart:
        product = self.get_object(Product.objects.all(), 'Product', pk=product_id)
        cart = self.load().add_or_merge(product.to_line_item(quantity, color=color, size=size))
        self.store.save(cart)
        self.log_info('Added product to cart', {'product_id': str(product.pk), 'quantity': quantity})
        return cart

    def update_item(self, line_id: str, quantity: int) -> Cart:
        cart = self.load().update_quantity(line_id, quantity)
        self.store.save(cart)
        return cart

    def remove_item(self, line_id: str) -> Cart:
        cart = self.load().remove_line(line_id)
        self.store.save(cart)
        return cart

    def clear(self):
        self.store.clear()

    def quote(self, coupon_code: Optional[str] = None, cart: Optional[Cart] = None) -> OrderTotals:
        """Price the current cart, optionally with a coupon"""
        cart = cart if cart is not None else self.load()
        coupon = None
        if coupon_code:
            coupon = DiscountService(clock=self.clock).validate(coupon_code, cart.subtotal)
        return self.pricing.compute_totals(
            cart.lines,
            shipping_threshold=conf.free_shipping_threshold(),
            shipping_fee=conf.shipping_fee(),
            coupon=coupon,
        )

    @classmethod
    def merge_guest_cart(cls, session, user) -> Cart:
        """Fold the session cart into the account cart, then empty the session cart"""
        guest = cls(SessionCartStore(session))
        guest_cart = guest.load()
        account = cls(DatabaseCartStore(user))
        if guest_cart.is_empty:
            guest.clear()
            return account.load()

        with transaction.atomic():
            merged = account.load().merge(guest_cart)
            account.store.save(merged)
        guest.clear()
        account.log_info('Merged guest cart into account', {
            'user_id': user.pk, 'guest_lines': len(guest_cart), 'lines': len(merged),
        })
        return merged
