"""
Order serializers: checkout input, order detail and admin status changes
"""

from rest_framework import serializers

from ..constants import OrderStatus, PaymentMethod
from ..models import Order, OrderItem, OrderStatusHistory
from .base import MoneyField


class OrderItemSerializer(serializers.ModelSerializer):
    price = MoneyField()
    discounted_price = MoneyField()
    subtotal = MoneyField()

    class Meta:
        model = OrderItem
        fields = [
            'id', 'product', 'product_name', 'product_image', 'price',
            'discounted_price', 'quantity', 'color', 'size', 'subtotal'
        ]


class OrderStatusHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderStatusHistory
        fields = ['previous_status', 'new_status', 'changed_by', 'created_at']


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    subtotal = MoneyField(source='total_amount')
    discount_amount = MoneyField()
    shipping_cost = MoneyField()
    final_amount = MoneyField()

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'status', 'customer_name', 'customer_email',
            'customer_phone', 'shipping_address', 'billing_address',
            'subtotal', 'discount_amount', 'shipping_cost', 'final_amount',
            'discount_code', 'payment_method', 'items_count', 'notes',
            'items', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class AdminOrderSerializer(OrderSerializer):
    status_history = OrderStatusHistorySerializer(many=True, read_only=True)
    allowed_transitions = serializers.SerializerMethodField()

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ['user', 'customer', 'status_history', 'allowed_transitions']
        read_only_fields = fields

    def get_allowed_transitions(self, obj):
        from ..domain.services import OrderWorkflow
        return OrderWorkflow.allowed_transitions(obj.status)


class CheckoutSerializer(serializers.Serializer):
    """
    Shape-only checkout input.

    Presence of the contact and address fields is enforced by the order
    service so that every missing field is reported at once.
    """
    customer_name = serializers.CharField(required=False, allow_blank=True, default='')
    customer_email = serializers.EmailField(required=False, allow_blank=True, default='')
    customer_phone = serializers.CharField(required=False, allow_blank=True, default='')
    address = serializers.CharField(required=False, allow_blank=True, default='')
    city = serializers.CharField(required=False, allow_blank=True, default='')
    state = serializers.CharField(required=False, allow_blank=True, default='')
    pincode = serializers.CharField(required=False, allow_blank=True, default='')
    country = serializers.CharField(required=False, allow_blank=True, default='India')
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, default=PaymentMethod.COD)
    coupon_code = serializers.CharField(required=False, allow_blank=True, default='')


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)
