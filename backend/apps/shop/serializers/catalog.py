"""
Catalog serializers: products, categories, images and designs
"""

from rest_framework import serializers

from ..models import Category, Design, Product, ProductImage


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name', 'slug', 'description', 'image_url']
        extra_kwargs = {'slug': {'required': False}}


class ProductImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductImage
        fields = ['id', 'image_url', 'image_alt', 'display_order']


class ProductSerializer(serializers.ModelSerializer):
    """Product with derived stock status and gallery"""

    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    images = ProductImageSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'description', 'price', 'discounted_price',
            'category', 'category_name', 'image_url', 'image_alt',
            'colors', 'sizes', 'badge', 'stock_quantity', 'stock_status',
            'images', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'stock_status', 'created_at', 'updated_at']

    def validate(self, attrs):
        price = attrs.get('price', getattr(self.instance, 'price', None))
        discounted = attrs.get('discounted_price', getattr(self.instance, 'discounted_price', None))
        if price is not None and discounted is not None and discounted >= price:
            raise serializers.ValidationError({
                'discounted_price': 'Discounted price must be lower than the price.'
            })
        for name in ('colors', 'sizes'):
            value = attrs.get(name)
            if value is not None and not all(isinstance(v, str) for v in value):
                raise serializers.ValidationError({name: 'Must be a list of strings.'})
        return attrs


class ProductUpdateSerializer(ProductSerializer):
    """Stock is changed through the stock endpoint only"""

    class Meta(ProductSerializer.Meta):
        read_only_fields = ProductSerializer.Meta.read_only_fields + ['stock_quantity']


class StockUpdateSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=0)
    reason = serializers.CharField(required=False, allow_blank=True, default='')


class ImageUploadSerializer(serializers.Serializer):
    image = serializers.FileField()
    image_alt = serializers.CharField(required=False, allow_blank=True, default='')


class DesignSerializer(serializers.ModelSerializer):
    class Meta:
        model = Design
        fields = [
            'id', 'title', 'description', 'image_url', 'image_alt',
            'link', 'badge', 'is_active', 'display_order'
        ]
