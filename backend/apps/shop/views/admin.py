# apps/shop/views/admin.py

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.permissions import IsAdmin

from .. import conf
from ..constants import OrderStatus
from ..domain.exceptions import NotFoundError, ValidationError
from ..models import Order
from ..serializers import (
    CustomerDetailSerializer, CustomerNotesSerializer, CustomerSummarySerializer,
    ImageUploadSerializer, ProductImageSerializer, ProductSerializer, ProductUpdateSerializer,
    StockUpdateSerializer,
)
from ..services import (
    AnalyticsService, CatalogService, CustomerService, ReturnService, ReviewService,
)
from ..services.analytics import REPORTS


@extend_schema(tags=['Admin'])
class ProductAdminViewSet(viewsets.ModelViewSet):
    """Product CRUD plus stock and image endpoints"""

    permission_classes = [IsAdmin]

    def get_queryset(self):
        return CatalogService().list_products()

    def get_serializer_class(self):
        if self.action in ('update', 'partial_update'):
            return ProductUpdateSerializer
        return ProductSerializer

    def perform_destroy(self, instance):
        CatalogService().delete_product(instance)

    @extend_schema(request=StockUpdateSerializer, responses={200: ProductSerializer})
    @action(detail=True, methods=['post'])
    def stock(self, request, pk=None):
        serializer = StockUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = CatalogService().update_stock(
            self.get_object(),
            serializer.validated_data['quantity'],
            reason=serializer.validated_data['reason'],
            actor=request.user,
        )
        return Response(ProductSerializer(product).data)

    @extend_schema(request=ImageUploadSerializer, responses={201: ProductImageSerializer})
    @action(detail=True, methods=['post'], parser_classes=[MultiPartParser, FormParser])
    def image(self, request, pk=None):
        serializer = ImageUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        image = CatalogService().add_image(
            self.get_object(),
            serializer.validated_data['image'],
            image_alt=serializer.validated_data['image_alt'],
        )
        return Response(ProductImageSerializer(image).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=['Admin'])
class CustomerAdminViewSet(viewsets.ViewSet):
    """Customer directory with spend aggregates and private notes"""

    permission_classes = [IsAdmin]

    def list(self, request):
        rows = CustomerService().list_customers(request.query_params.get('search'))
        return Response(CustomerSummarySerializer(rows, many=True).data)

    def retrieve(self, request, pk=None):
        return Response(CustomerDetailSerializer(CustomerService().get_customer(pk)).data)

    @extend_schema(request=CustomerNotesSerializer)
    def partial_update(self, request, pk=None):
        serializer = CustomerNotesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        service = CustomerService()
        service.update_notes(pk, serializer.validated_data['customer_notes'])
        return Response(CustomerDetailSerializer(service.get_customer(pk)).data)


@extend_schema(tags=['Admin'])
class AnalyticsView(APIView):
    """Named dashboard reports; `low-stock` lists products at or under the threshold"""

    permission_classes = [IsAdmin]

    def get(self, request, report):
        service = AnalyticsService()
        params = request.query_params
        if report == 'low-stock':
            threshold = self.int_param(params, 'threshold', conf.low_stock_threshold())
            products = service.low_stock_products(threshold)
            return Response(ProductSerializer(products, many=True).data)
        if report not in REPORTS:
            raise NotFoundError(f"Unknown report '{report}'", details={'available': list(REPORTS) + ['low-stock']})

        for name in ('days', 'months', 'limit'):
            if name in params:
                self.int_param(params, name, None)
        return Response({'report': report, 'data': service.report(report, params)})

    @staticmethod
    def int_param(params, name, default):
        value = params.get(name)
        if value in (None, ''):
            return default
        try:
            number = int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"'{name}' must be an integer", details={name: value})
        if number < 0:
            raise ValidationError(f"'{name}' cannot be negative", details={name: value})
        return number


@extend_schema(tags=['Admin'])
class DashboardView(APIView):
    """Badge counts for the back-office navigation"""

    permission_classes = [IsAdmin]

    def get(self, request):
        return Response({
            'pending_orders': Order.objects.with_status(OrderStatus.PENDING).count(),
            'pending_returns': ReturnService().pending_count(),
            'pending_reviews': ReviewService().pending_count(),
            'low_stock_products': AnalyticsService().low_stock_products().count(),
        })
