# apps/shop/tests/factories/orders.py
from datetime import timedelta
from decimal import Decimal

import factory
from django.utils import timezone
from factory.django import DjangoModelFactory

from ...constants import DiscountType, OrderStatus, ReturnReason, ReviewStatus
from ...models import Customer, Discount, Order, OrderItem, Return, ReturnItem, Review
from .accounts import UserFactory
from .catalog import ProductFactory


class DiscountFactory(DjangoModelFactory):
    class Meta:
        model = Discount

    code = factory.Sequence(lambda n: f"SAVE{n}")
    discount_type = DiscountType.PERCENTAGE
    discount_value = Decimal('20')
    valid_from = factory.LazyFunction(lambda: timezone.now() - timedelta(days=1))
    valid_until = None
    usage_limit = None
    usage_count = 0
    is_active = True


class CustomerFactory(DjangoModelFactory):
    class Meta:
        model = Customer

    email = factory.Sequence(lambda n: f"buyer{n}@example.com")
    full_name = factory.Faker('name')
    phone = '9876543210'


class OrderFactory(DjangoModelFactory):
    class Meta:
        model = Order

    order_number = factory.Sequence(lambda n: f"ORD-1700000000000-{n:04d}")
    user = factory.SubFactory(UserFactory)
    customer_name = factory.Faker('name')
    customer_email = factory.LazyAttribute(lambda obj: obj.user.email if obj.user else 'guest@example.com')
    customer_phone = '9876543210'
    shipping_address = factory.LazyFunction(lambda: {
        'address': '12 MG Road', 'city': 'Pune', 'state': 'MH', 'pincode': '411001', 'country': 'India',
    })
    total_amount = Decimal('800.00')
    discount_amount = Decimal('0.00')
    shipping_cost = Decimal('50.00')
    final_amount = Decimal('850.00')
    status = OrderStatus.PENDING
    items_count = 2


class OrderItemFactory(DjangoModelFactory):
    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    product = factory.SubFactory(ProductFactory)
    product_name = factory.LazyAttribute(lambda obj: obj.product.name)
    price = Decimal('500.00')
    discounted_price = Decimal('400.00')
    quantity = 2
    subtotal = factory.LazyAttribute(lambda obj: (obj.discounted_price or obj.price) * obj.quantity)


class ReturnFactory(DjangoModelFactory):
    class Meta:
        model = Return

    return_number = factory.Sequence(lambda n: f"RET-1700000000000-{n:04d}")
    order = factory.SubFactory(OrderFactory, status=OrderStatus.DELIVERED)
    user = factory.LazyAttribute(lambda obj: obj.order.user)
    customer_name = factory.LazyAttribute(lambda obj: obj.order.customer_name)
    customer_email = factory.LazyAttribute(lambda obj: obj.order.customer_email)
    reason = ReturnReason.DEFECTIVE
    refund_amount = Decimal('400.00')


class ReturnItemFactory(DjangoModelFactory):
    class Meta:
        model = ReturnItem

    return_request = factory.SubFactory(ReturnFactory)
    order_item = factory.SubFactory(OrderItemFactory)
    product_name = factory.LazyAttribute(lambda obj: obj.order_item.product_name)
    quantity = 1
    refund_amount = Decimal('400.00')


class ReviewFactory(DjangoModelFactory):
    class Meta:
        model = Review

    product = factory.SubFactory(ProductFactory)
    user = factory.SubFactory(UserFactory)
    rating = 4
    title = factory.Faker('sentence', nb_words=4)
    content = factory.Faker('paragraph')
    status = ReviewStatus.PENDING
