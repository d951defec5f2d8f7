# apps/shop/views/wishlist.py

from drf_spectacular.utils import extend_schema
from rest_framework import permissions, serializers, status
from rest_framework.response import Response
from rest_framework.views import APIView

from ..serializers import ProductSerializer
from ..services import WishlistService


class WishlistAddSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()


@extend_schema(tags=['Wishlist'])
class WishlistView(APIView):
    """Saved products for the signed-in user or the guest session"""

    permission_classes = [permissions.AllowAny]

    def get(self, request):
        products = WishlistService.for_request(request).list_products()
        return Response({
            'items': ProductSerializer(products, many=True).data,
            'count': len(products),
        })

    @extend_schema(request=WishlistAddSerializer)
    def post(self, request):
        serializer = WishlistAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product_id = serializer.validated_data['product_id']
        created = WishlistService.for_request(request).add(product_id)
        return Response(
            {'product_id': str(product_id), 'added': created},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


@extend_schema(tags=['Wishlist'])
class WishlistItemView(APIView):
    permission_classes = [permissions.AllowAny]

    def delete(self, request, product_id):
        WishlistService.for_request(request).remove(product_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
