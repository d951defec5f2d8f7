"""
Discount serializers
"""

from decimal import Decimal

from rest_framework import serializers

from ..constants import DiscountType
from ..domain.entities import normalize_code
from ..models import Discount


class DiscountSerializer(serializers.ModelSerializer):
    class Meta:
        model = Discount
        fields = [
            'id', 'code', 'description', 'discount_type', 'discount_value',
            'min_purchase_amount', 'max_discount_amount', 'valid_from',
            'valid_until', 'usage_limit', 'usage_count', 'is_active',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'usage_count', 'created_at', 'updated_at']

    def validate_code(self, value):
        code = normalize_code(value)
        queryset = Discount.objects.by_code(code)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError('A discount with this code already exists.')
        return code

    def validate(self, attrs):
        kind = attrs.get('discount_type', getattr(self.instance, 'discount_type', None))
        value = attrs.get('discount_value', getattr(self.instance, 'discount_value', None))
        if kind == DiscountType.PERCENTAGE and value is not None and value > Decimal('100'):
            raise serializers.ValidationError({'discount_value': 'Percentage cannot exceed 100.'})
        valid_from = attrs.get('valid_from', getattr(self.instance, 'valid_from', None))
        valid_until = attrs.get('valid_until', getattr(self.instance, 'valid_until', None))
        if valid_from and valid_until and valid_until < valid_from:
            raise serializers.ValidationError({'valid_until': 'Must be after valid_from.'})
        return attrs


class DiscountValidateSerializer(serializers.Serializer):
    code = serializers.CharField()
    # defaults to the current cart subtotal
    order_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
