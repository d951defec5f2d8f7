# apps/shop/views/reviews.py

from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.core.permissions import IsAdmin

from ..models import Review
from ..serializers import (
    ModerationSerializer, ReviewCreateSerializer, ReviewSerializer, ReviewUpdateSerializer,
)
from ..services import ReviewService


@extend_schema(tags=['Reviews'])
class ReviewViewSet(viewsets.ViewSet):
    """A customer's own reviews; edits are allowed while pending"""

    permission_classes = [permissions.IsAuthenticated]

    def get_review(self, pk):
        return ReviewService().get_object(Review.objects.select_related('user'), 'Review', pk=pk)

    @extend_schema(request=ReviewCreateSerializer, responses={201: ReviewSerializer})
    def create(self, request):
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        review = ReviewService().create(
            data['product_id'], request.user, data['rating'],
            title=data['title'], content=data['content'],
        )
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ReviewUpdateSerializer, responses={200: ReviewSerializer})
    def partial_update(self, request, pk=None):
        serializer = ReviewUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = ReviewService().update(self.get_review(pk), request.user, **serializer.validated_data)
        return Response(ReviewSerializer(review).data)

    def destroy(self, request, pk=None):
        ReviewService().delete(self.get_review(pk), request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=['Admin'])
class ReviewModerationViewSet(viewsets.GenericViewSet):
    """Back-office review queue"""

    serializer_class = ReviewSerializer
    permission_classes = [IsAdmin]

    def get_queryset(self):
        return ReviewService().list_for_moderation(self.request.query_params.get('status'))

    def list(self, request):
        queryset = self.get_queryset()
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(queryset, many=True).data)

    @extend_schema(request=ModerationSerializer)
    @action(detail=True, methods=['post'])
    def moderate(self, request, pk=None):
        serializer = ModerationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        service = ReviewService()
        review = service.get_object(Review.objects.all(), 'Review', pk=pk)
        review = service.moderate(
            review,
            serializer.validated_data['status'],
            moderator=request.user,
            reason=serializer.validated_data['reason'],
        )
        return Response(ReviewSerializer(review).data)
