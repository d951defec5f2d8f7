"""
Admin customer directory serializers
"""

from rest_framework import serializers

from .base import MoneyField
from .orders import OrderSerializer


class CustomerSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField(source='profile.user_id')
    email = serializers.EmailField(source='profile.user.email')
    full_name = serializers.CharField(source='profile.full_name')
    phone = serializers.CharField(source='profile.phone')
    customer_notes = serializers.CharField(source='profile.customer_notes')
    joined_at = serializers.DateTimeField(source='profile.created_at')
    total_spent = MoneyField()
    order_count = serializers.IntegerField()
    last_order_date = serializers.DateTimeField(allow_null=True)


class CustomerDetailSerializer(CustomerSummarySerializer):
    last_order_date = None
    orders = OrderSerializer(many=True)


class CustomerNotesSerializer(serializers.Serializer):
    customer_notes = serializers.CharField(allow_blank=True)
