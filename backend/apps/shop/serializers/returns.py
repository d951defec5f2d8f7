"""
Return serializers
"""

from rest_framework import serializers

from ..constants import ReturnReason, ReturnStatus
from ..models import Return, ReturnItem
from .base import MoneyField


class ReturnItemSerializer(serializers.ModelSerializer):
    refund_amount = MoneyField()

    class Meta:
        model = ReturnItem
        fields = ['id', 'order_item', 'product_name', 'product_image', 'quantity', 'refund_amount']


class ReturnSerializer(serializers.ModelSerializer):
    items = ReturnItemSerializer(many=True, read_only=True)
    order_number = serializers.CharField(source='order.order_number', read_only=True)
    refund_amount = MoneyField()

    class Meta:
        model = Return
        fields = [
            'id', 'return_number', 'order', 'order_number', 'customer_name',
            'customer_email', 'reason', 'reason_details', 'status',
            'refund_amount', 'refund_processed_at', 'admin_notes', 'items',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields


class ReturnItemInputSerializer(serializers.Serializer):
    order_item_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class ReturnCreateSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
    reason = serializers.ChoiceField(choices=ReturnReason.choices)
    reason_details = serializers.CharField(required=False, allow_blank=True, default='')
    items = ReturnItemInputSerializer(many=True)


class ReturnStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ReturnStatus.choices)
    admin_notes = serializers.CharField(required=False, allow_blank=True)


class RefundSerializer(serializers.Serializer):
    admin_notes = serializers.CharField(required=False, allow_blank=True)
