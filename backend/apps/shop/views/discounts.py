# apps/shop/views/discounts.py

from drf_spectacular.utils import extend_schema
from rest_framework import permissions, viewsets
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.permissions import IsAdmin

from ..domain.value_objects import round_money
from ..models import Discount
from ..serializers import DiscountSerializer, DiscountValidateSerializer
from ..services import CartService, DiscountService


@extend_schema(tags=['Discounts'], request=DiscountValidateSerializer)
class DiscountValidateView(APIView):
    """Preview a code against an amount or the current cart; never redeems"""

    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = DiscountValidateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        amount = serializer.validated_data.get('order_amount')
        if amount is None:
            amount = CartService.for_request(request).load().subtotal

        preview = DiscountService().preview(serializer.validated_data['code'], amount)
        return Response({
            'valid': True,
            'code': preview['code'],
            'discount_type': preview['discount_type'],
            'discount_value': str(preview['discount_value']),
            'order_amount': str(round_money(amount)),
            'discount_amount': str(round_money(preview['discount_amount'])),
            'final_amount': str(round_money(preview['final_amount'])),
        })


@extend_schema(tags=['Admin'])
class DiscountAdminViewSet(viewsets.ModelViewSet):
    """Discount code CRUD for the back office"""

    serializer_class = DiscountSerializer
    permission_classes = [IsAdmin]
    queryset = Discount.objects.all()

    def perform_create(self, serializer):
        discount = serializer.save()
        DiscountService().log_info('Discount created', {'code': discount.code})
