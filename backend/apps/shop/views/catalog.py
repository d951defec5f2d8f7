# apps/shop/views/catalog.py

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import filters, permissions, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from ..filters import ProductFilter
from ..serializers import (
    CategorySerializer, DesignSerializer, ProductSerializer, ReviewSerializer,
)
from ..services import CatalogService, ReviewService


@extend_schema_view(
    list=extend_schema(summary="List products", tags=['Catalog']),
    retrieve=extend_schema(summary="Product detail", tags=['Catalog']),
)
class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    """Storefront product browsing"""

    serializer_class = ProductSerializer
    permission_classes = [permissions.AllowAny]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = ProductFilter
    ordering_fields = ['price', 'name', 'created_at']

    def get_queryset(self):
        return CatalogService().list_products()

    @extend_schema(summary="Approved reviews for a product", tags=['Reviews'])
    @action(detail=True, methods=['get'])
    def reviews(self, request, pk=None):
        product = self.get_object()
        queryset = ReviewService().list_for_product(product.pk)
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(ReviewSerializer(page, many=True).data)
        return Response(ReviewSerializer(queryset, many=True).data)

    @extend_schema(summary="Average approved rating", tags=['Reviews'])
    @action(detail=True, methods=['get'])
    def rating(self, request, pk=None):
        product = self.get_object()
        summary = ReviewService().average_rating(product.pk)
        return Response({
            'product_id': str(product.pk),
            'average': str(summary['average']),
            'count': summary['count'],
        })


class CategoryViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = CategorySerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = None

    def get_queryset(self):
        return CatalogService().list_categories()


class DesignViewSet(viewsets.ReadOnlyModelViewSet):
    """Active showcase designs in display order"""

    serializer_class = DesignSerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = None

    def get_queryset(self):
        return CatalogService().active_designs()
