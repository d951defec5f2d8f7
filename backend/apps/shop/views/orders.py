# apps/shop/views/orders.py

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.permissions import IsAdmin, user_is_admin

from ..filters import OrderFilter
from ..serializers import (
    AdminOrderSerializer, CheckoutSerializer, OrderSerializer, OrderStatusUpdateSerializer,
)
from ..services import CartService, OrderService


@extend_schema(tags=['Checkout'], request=CheckoutSerializer, responses={201: OrderSerializer})
class CheckoutView(APIView):
    """Place an order from the current cart; guests may check out"""

    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        coupon_code = data.pop('coupon_code', '') or None

        order = OrderService().create_from_cart(
            CartService.for_request(request),
            data,
            user=request.user,
            coupon_code=coupon_code,
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=['Orders'])
class OrderViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Customers see their own orders; admins see every order and may move
    an order through its status lifecycle.
    """

    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = OrderFilter

    def get_queryset(self):
        service = OrderService()
        if user_is_admin(self.request.user):
            return service.list_all().prefetch_related('status_history')
        return service.list_for_user(self.request.user)

    def get_serializer_class(self):
        if user_is_admin(self.request.user):
            return AdminOrderSerializer
        return OrderSerializer

    def retrieve(self, request, pk=None):
        order = OrderService().get_for_user(pk, request.user)
        return Response(self.get_serializer(order).data)

    @extend_schema(request=OrderStatusUpdateSerializer, responses={200: AdminOrderSerializer})
    @action(detail=True, methods=['post', 'patch'], permission_classes=[IsAdmin], url_path='status')
    def update_status(self, request, pk=None):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        service = OrderService()
        order = service.get_object(service.list_all(), 'Order', pk=pk)
        order = service.update_status(order, serializer.validated_data['status'], actor=request.user)
        return Response(AdminOrderSerializer(order).data)
