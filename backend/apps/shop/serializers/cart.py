"""
Cart serializers; carts are domain objects, not model instances
"""

from rest_framework import serializers

from .. import conf
from .base import MoneyField


class CartLineSerializer(serializers.Serializer):
    line_id = serializers.CharField()
    product_id = serializers.CharField()
    name = serializers.CharField()
    image = serializers.CharField()
    color = serializers.CharField()
    size = serializers.CharField()
    quantity = serializers.IntegerField()
    available_stock = serializers.IntegerField()
    unit_price = MoneyField()
    discounted_price = MoneyField()
    effective_price = MoneyField()
    line_total = MoneyField()


class TotalsSerializer(serializers.Serializer):
    subtotal = MoneyField()
    shipping = MoneyField()
    discount = MoneyField()
    total = MoneyField()
    coupon_code = serializers.CharField(allow_null=True)
    display = serializers.SerializerMethodField()

    def get_display(self, obj):
        return obj.as_display(conf.currency())


class CartItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=999, default=1)
    color = serializers.CharField(required=False, allow_blank=True, default='')
    size = serializers.CharField(required=False, allow_blank=True, default='')


class CartQuantitySerializer(serializers.Serializer):
    # below 1 is accepted and ignored by the cart
    quantity = serializers.IntegerField()


class QuoteSerializer(serializers.Serializer):
    coupon_code = serializers.CharField(required=False, allow_blank=True, default='')


def cart_payload(cart, totals) -> dict:
    return {
        'items': CartLineSerializer(cart.lines, many=True).data,
        'item_count': cart.item_count,
        'totals': TotalsSerializer(totals).data,
    }
