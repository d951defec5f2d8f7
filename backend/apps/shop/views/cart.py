# apps/shop/views/cart.py

from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from ..serializers import (
    CartItemInputSerializer, CartQuantitySerializer, QuoteSerializer, cart_payload,
)
from ..services import CartService


class CartMixin:
    """Resolves the cart for the signed-in user or the guest session"""

    permission_classes = [permissions.AllowAny]

    def get_cart_service(self) -> CartService:
        return CartService.for_request(self.request)

    def cart_response(self, service, cart, coupon_code=None, status_code=status.HTTP_200_OK):
        totals = service.quote(coupon_code=coupon_code, cart=cart)
        return Response(cart_payload(cart, totals), status=status_code)


@extend_schema(tags=['Cart'])
class CartView(CartMixin, APIView):

    def get(self, request):
        service = self.get_cart_service()
        return self.cart_response(service, service.load())

    def delete(self, request):
        self.get_cart_service().clear()
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=['Cart'], request=CartItemInputSerializer)
class CartItemsView(CartMixin, APIView):

    def post(self, request):
        serializer = CartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        service = self.get_cart_service()
        cart = service.add_item(**serializer.validated_data)
        return self.cart_response(service, cart, status_code=status.HTTP_201_CREATED)


@extend_schema(tags=['Cart'])
class CartItemDetailView(CartMixin, APIView):

    @extend_schema(request=CartQuantitySerializer)
    def patch(self, request, line_id):
        serializer = CartQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        service = self.get_cart_service()
        cart = service.update_item(line_id, serializer.validated_data['quantity'])
        return self.cart_response(service, cart)

    def delete(self, request, line_id):
        service = self.get_cart_service()
        cart = service.remove_item(line_id)
        return self.cart_response(service, cart)


@extend_schema(tags=['Cart'], request=QuoteSerializer)
class CartQuoteView(CartMixin, APIView):
    """Cart totals with an optional coupon applied; nothing is redeemed"""

    def post(self, request):
        serializer = QuoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        service = self.get_cart_service()
        coupon_code = serializer.validated_data['coupon_code'] or None
        return self.cart_response(service, service.load(), coupon_code=coupon_code)
