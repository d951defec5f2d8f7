"""
Review serializers
"""

from rest_framework import serializers

from ..constants import ReviewStatus
from ..models import Review


class ReviewSerializer(serializers.ModelSerializer):
    user_name = serializers.SerializerMethodField()

    class Meta:
        model = Review
        fields = [
            'id', 'product', 'user_name', 'rating', 'title', 'content',
            'status', 'is_verified_purchase', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_user_name(self, obj):
        profile = getattr(obj.user, 'profile', None)
        return (profile.full_name if profile else '') or obj.user.get_username()


class ReviewCreateSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    rating = serializers.IntegerField(min_value=1, max_value=5)
    title = serializers.CharField(required=False, allow_blank=True, default='')
    content = serializers.CharField(required=False, allow_blank=True, default='')


class ReviewUpdateSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5, required=False)
    title = serializers.CharField(required=False, allow_blank=True)
    content = serializers.CharField(required=False, allow_blank=True)


class ModerationSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[ReviewStatus.APPROVED, ReviewStatus.REJECTED])
    reason = serializers.CharField(required=False, allow_blank=True, default='')
