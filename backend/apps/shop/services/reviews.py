"""
Review service: customer reviews, moderation and rating summaries
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional

from django.db import IntegrityError, transaction
from django.db.models import Avg, Count

from ..constants import OrderStatus, ReviewStatus
from ..domain.exceptions import PermissionDenied, ValidationError
from ..models import OrderItem, Product, Review, ReviewModerationLog
from .base import BaseShopService

EDITABLE_FIELDS = ('rating', 'title', 'content')


class ReviewService(BaseShopService):
    """Service for product reviews"""

    def list_for_product(self, product_id):
        """Approved reviews only, newest first"""
        return Review.objects.approved().filter(product_id=product_id).select_related('user__profile')

    def get_user_review(self, product_id, user) -> Optional[Review]:
        return Review.objects.filter(product_id=product_id, user=user).first()

    def has_purchased(self, product_id, user) -> bool:
        return OrderItem.objects.filter(
            product_id=product_id,
            order__user=user,
            order__status=OrderStatus.DELIVERED,
        ).exists()

    def create(self, product_id, user, rating: int, title: str = '', content: str = '') -> Review:
        product = self.get_object(Product.objects.all(), 'Product', pk=product_id)
        self.validate_rating(rating)
        try:
            with transaction.atomic():
                review = Review.objects.create(
                    product=product,
                    user=user,
                    rating=rating,
                    title=title,
                    content=content,
                    is_verified_purchase=self.has_purchased(product.pk, user),
                )
        except IntegrityError:
            raise ValidationError('You have already reviewed this product', details={'product_id': str(product.pk)})
        self.log_info('Review submitted', {'review_id': str(review.pk), 'product_id': str(product.pk)})
        return review

    def update(self, review: Review, user, **changes) -> Review:
        self.check_editable(review, user)
        if 'rating' in changes:
            self.validate_rating(changes['rating'])
        fields = [name for name in EDITABLE_FIELDS if name in changes]
        for name in fields:
            setattr(review, name, changes[name])
        if fields:
            review.save(update_fields=fields + ['updated_at'])
        return review

    def delete(self, review: Review, user):
        self.check_editable(review, user)
        review.delete()

    def list_for_moderation(self, status: Optional[str] = None):
        queryset = Review.objects.select_related('product', 'user')
        if status:
            queryset = queryset.filter(status=status)
        return queryset

    def pending_count(self) -> int:
        return Review.objects.pending().count()

    @transaction.atomic
    def moderate(self, review: Review, new_status: str, moderator, reason: str = '') -> Review:
        if new_status not in (ReviewStatus.APPROVED, ReviewStatus.REJECTED):
            raise ValidationError('Reviews can only be approved or rejected', details={'status': new_status})

        previous = review.status
        review.status = new_status
        review.save(update_fields=['status', 'updated_at'])
        ReviewModerationLog.objects.create(
            review=review,
            moderator=moderator,
            action=new_status,
            previous_status=previous,
            new_status=new_status,
            reason=reason or '',
        )
        self.log_info(f"Review {review.pk} {new_status}", {'previous_status': previous})
        return review

    def average_rating(self, product_id) -> Dict:
        """Mean approved rating rounded to one decimal, 0 when unrated"""
        summary = Review.objects.approved().filter(product_id=product_id).aggregate(
            average=Avg('rating'), count=Count('id')
        )
        if not summary['count']:
            return {'average': Decimal('0'), 'count': 0}
        average = Decimal(str(summary['average'])).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)
        return {'average': average, 'count': summary['count']}

    @staticmethod
    def validate_rating(rating):
        if not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError('Rating must be between 1 and 5', details={'rating': rating})

    @staticmethod
    def check_editable(review: Review, user):
        if review.user_id != getattr(user, 'pk', None):
            raise PermissionDenied('You can only change your own review')
        if review.status != ReviewStatus.PENDING:
            raise ValidationError('Only pending reviews can be changed', details={'status': review.status})
