# apps/shop/views/returns.py

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.core.permissions import IsAdmin, user_is_admin

from ..domain.exceptions import AlreadyRefunded
from ..filters import ReturnFilter
from ..serializers import (
    RefundSerializer, ReturnCreateSerializer, ReturnSerializer, ReturnStatusUpdateSerializer,
)
from ..services import OrderService, ReturnService


@extend_schema(tags=['Returns'])
class ReturnViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """Return requests: customer intake and cancellation, admin decisions and refunds"""

    serializer_class = ReturnSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ReturnFilter

    def get_queryset(self):
        service = ReturnService()
        if user_is_admin(self.request.user):
            return service.list_all()
        return service.list_for_user(self.request.user)

    def get_return(self, pk):
        return ReturnService().get_for_user(pk, self.request.user)

    def retrieve(self, request, pk=None):
        return Response(self.get_serializer(self.get_return(pk)).data)

    @extend_schema(request=ReturnCreateSerializer, responses={201: ReturnSerializer})
    def create(self, request):
        serializer = ReturnCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        order = OrderService().get_for_user(data['order_id'], request.user)
        ret = ReturnService().create(
            order,
            request.user,
            reason=data['reason'],
            items=data['items'],
            reason_details=data['reason_details'],
        )
        return Response(ReturnSerializer(ret).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None)
    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        ret = ReturnService().cancel(self.get_return(pk), request.user)
        return Response(ReturnSerializer(ret).data)

    @extend_schema(request=ReturnStatusUpdateSerializer)
    @action(detail=True, methods=['post', 'patch'], permission_classes=[IsAdmin], url_path='status')
    def update_status(self, request, pk=None):
        serializer = ReturnStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ret = self.get_return(pk)
        try:
            ret = ReturnService().update_status(
                ret,
                serializer.validated_data['status'],
                actor=request.user,
                notes=serializer.validated_data.get('admin_notes'),
            )
        except AlreadyRefunded:
            return refund_response(ret, already_refunded=True)
        return Response(ReturnSerializer(ret).data)

    @extend_schema(request=RefundSerializer)
    @action(detail=True, methods=['post'], permission_classes=[IsAdmin])
    def refund(self, request, pk=None):
        """Release the refund; repeating the call is acknowledged without paying twice"""
        serializer = RefundSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ret = self.get_return(pk)
        try:
            ret = ReturnService().process_refund(
                ret, actor=request.user, notes=serializer.validated_data.get('admin_notes')
            )
        except AlreadyRefunded:
            return refund_response(ret, already_refunded=True)
        return refund_response(ret, already_refunded=False)


def refund_response(ret, already_refunded):
    if already_refunded:
        ret.refresh_from_db()
    return Response({
        'detail': 'Refund already processed' if already_refunded else 'Refund processed',
        'already_refunded': already_refunded,
        'return': ReturnSerializer(ret).data,
    })
