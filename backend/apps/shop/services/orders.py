"""
Order service: checkout submission, order lookup and admin status changes
"""

from typing import Dict, Optional

from django.db import transaction

from apps.core.permissions import user_is_admin
from apps.core.utils import generate_number

from .. import conf
from ..constants import ORDER_NUMBER_PREFIX, REQUIRED_CHECKOUT_FIELDS, PaymentMethod
from ..domain.entities import Cart
from ..domain.exceptions import PermissionDenied, ValidationError
from ..domain.services import OrderTotals, OrderWorkflow, PricingService
from ..models import Order, OrderItem, OrderStatusHistory
from .base import BaseShopService
from .cart import CartService
from .customers import CustomerService
from .discounts import DiscountService


class OrderService(BaseShopService):
    """Service for managing order operations"""

    def __init__(self, clock=None):
        super().__init__(clock)
        self.pricing = PricingService(clock=self.clock)
        self.discounts = DiscountService(clock=self.clock)
        self.customers = CustomerService(clock=self.clock)

    def create_from_cart(self, cart_service: CartService, checkout_data: Dict, user=None,
                         coupon_code: Optional[str] = None) -> Order:
        """
        Turn the current cart into an order.

        Totals are recomputed from live product rows; nothing the client
        sends about prices is trusted. The order, its items, the coupon
        redemption, the customer upsert and the cart wipe commit together.
        """
        self.validate_required_fields(checkout_data, REQUIRED_CHECKOUT_FIELDS)

        cart = cart_service.load()
        self.validate_cart(cart)

        coupon = None
        if coupon_code:
            coupon = self.discounts.validate(coupon_code, cart.subtotal)
        totals = self.pricing.compute_totals(
            cart.lines,
            shipping_threshold=conf.free_shipping_threshold(),
            shipping_fee=conf.shipping_fee(),
            coupon=coupon,
        )

        with transaction.atomic():
            customer = self.customers.upsert_from_checkout(checkout_data, user)
            order = self.create_order_record(checkout_data, totals, cart, user, customer)
            self.create_order_items(order, cart)
            if coupon is not None:
                self.discounts.redeem(coupon)
            cart_service.clear()

            transaction.on_commit(lambda: self.schedule_customer_sync(customer.pk))

        self.log_info(f"Order {order.order_number} created", {
            'order_id': str(order.id),
            'customer_id': str(customer.id),
            'final_amount': str(order.final_amount),
            'discount_code': order.discount_code,
        })
        return order

    def validate_cart(self, cart: Cart):
        """Validate cart can be converted to order"""
        if cart.is_empty:
            raise ValidationError('Cart is empty')

        violations = cart.stock_violations()
        if violations:
            raise ValidationError(
                'Some items exceed available stock',
                details={'items': [
                    {
                        'product_id': line.product_id,
                        'name': line.name,
                        'requested': line.quantity,
                        'available': line.available_stock,
                    }
                    for line in violations
                ]},
            )

    def create_order_record(self, data: Dict, totals: OrderTotals, cart: Cart, user, customer) -> Order:
        rounded = totals.rounded()
        shipping_address = {
            'address': data['address'],
            'city': data['city'],
            'state': data['state'],
            'pincode': data['pincode'],
            'country': data.get('country') or 'India',
        }
        return Order.objects.create(
            order_number=generate_number(ORDER_NUMBER_PREFIX),
            user=user if user is not None and user.is_authenticated else None,
            customer=customer,
            customer_name=data['customer_name'],
            customer_email=data['customer_email'].strip().lower(),
            customer_phone=data['customer_phone'],
            shipping_address=shipping_address,
            billing_address=data.get('billing_address') or shipping_address,
            total_amount=rounded['subtotal'],
            discount_amount=rounded['discount'],
            shipping_cost=rounded['shipping'],
            final_amount=rounded['total'],
            discount_code=totals.coupon_code or '',
            payment_method=data.get('payment_method') or PaymentMethod.COD,
            items_count=cart.item_count,
            notes=data.get('notes', ''),
        )

    def create_order_items(self, order: Order, cart: Cart):
        """Create order items frozen from the cart's live lines"""
        OrderItem.objects.bulk_create([
            OrderItem(
                order=order,
                product_id=line.product_id,
                product_name=line.name,
                product_image=line.image,
                price=line.unit_price,
                discounted_price=line.discounted_price,
                quantity=line.quantity,
                color=line.color,
                size=line.size,
                subtotal=line.line_total,
            )
            for line in cart
        ])

    def schedule_customer_sync(self, customer_id):
        from ..tasks import sync_customer_totals
        sync_customer_totals.delay(str(customer_id))

    def list_for_user(self, user):
        return Order.objects.for_user(user).prefetch_related('items').order_by('-created_at')

    def list_all(self):
        return Order.objects.select_related('user', 'customer').prefetch_related('items')

    def get_for_user(self, order_id, user) -> Order:
        order = self.get_object(Order.objects.prefetch_related('items'), 'Order', pk=order_id)
        if not self.can_view(order, user):
            raise PermissionDenied('You do not have access to this order')
        return order

    def get_by_number(self, order_number: str) -> Order:
        return self.get_object(Order.objects.prefetch_related('items'), 'Order', order_number=order_number)

    @staticmethod
    def can_view(order: Order, user) -> bool:
        if user_is_admin(user):
            return True
        return user is not None and user.is_authenticated and order.user_id == user.pk

    def update_status(self, order: Order, new_status: str, actor=None) -> Order:
        """Admin status change through the order state machine"""
        workflow = OrderWorkflow(clock=self.clock)
        with transaction.atomic():
            order = Order.objects.select_for_update().get(pk=order.pk)
            previous = order.status
            workflow.transition(order, new_status, actor=actor)
            order.save(update_fields=['status', 'updated_at'])
            OrderStatusHistory.objects.create(
                order=order,
                previous_status=previous,
                new_status=new_status,
                changed_by=actor if actor is not None and actor.is_authenticated else None,
            )

        self.log_info(f"Order {order.order_number} moved to {new_status}", {
            'order_id': str(order.id), 'previous_status': previous,
        })
        return order
