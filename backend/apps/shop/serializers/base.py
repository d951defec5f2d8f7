"""
Shared serializer fields for the storefront API
"""

from rest_framework import serializers

from ..domain.value_objects import round_money


class MoneyField(serializers.Field):
    """Read-only amount rendered as a 2-decimal string, rounded half-up"""

    def __init__(self, **kwargs):
        kwargs.setdefault('read_only', True)
        super().__init__(**kwargs)

    def to_representation(self, value):
        if value is None:
            return None
        return str(round_money(value))
