# apps/shop/tests/integration/test_reviews.py
import pytest
from decimal import Decimal

from ...constants import ReviewStatus
from ...domain.exceptions import PermissionDenied, ValidationError
from ...models import ReviewModerationLog
from ...services import ReviewService
from ..factories import ReviewFactory, UserFactory


@pytest.mark.django_db
class TestReviewService:

    def test_verified_purchase_flag(self, customer, delivered_order):
        product = delivered_order.items.get().product
        review = ReviewService().create(product.pk, customer, 5, 'Lovely', 'Fits well')

        assert review.status == ReviewStatus.PENDING
        assert review.is_verified_purchase is True

    def test_unverified_without_delivery(self, customer, product):
        review = ReviewService().create(product.pk, customer, 3)
        assert review.is_verified_purchase is False

    def test_one_review_per_product(self, customer, product):
        ReviewService().create(product.pk, customer, 4)
        with pytest.raises(ValidationError):
            ReviewService().create(product.pk, customer, 2)

    @pytest.mark.parametrize('rating', [0, 6])
    def test_rating_range(self, customer, product, rating):
        with pytest.raises(ValidationError):
            ReviewService().create(product.pk, customer, rating)

    def test_only_pending_reviews_editable(self, customer):
        review = ReviewFactory(user=customer, status=ReviewStatus.APPROVED)
        with pytest.raises(ValidationError):
            ReviewService().update(review, customer, rating=1)

    def test_only_author_edits(self, customer):
        review = ReviewFactory(user=customer)
        with pytest.raises(PermissionDenied):
            ReviewService().update(review, UserFactory(), rating=1)

    def test_moderation_logged(self, admin):
        review = ReviewFactory()
        ReviewService().moderate(review, ReviewStatus.APPROVED, admin, reason='fine')

        log = ReviewModerationLog.objects.get(review=review)
        assert (log.previous_status, log.new_status, log.moderator) == (
            ReviewStatus.PENDING, ReviewStatus.APPROVED, admin
        )

    def test_moderation_rejects_pending(self, admin):
        with pytest.raises(ValidationError):
            ReviewService().moderate(ReviewFactory(), ReviewStatus.PENDING, admin)

    def test_average_counts_approved_only(self, product):
        ReviewFactory(product=product, rating=5, status=ReviewStatus.APPROVED)
        ReviewFactory(product=product, rating=4, status=ReviewStatus.APPROVED)
        ReviewFactory(product=product, rating=4, status=ReviewStatus.APPROVED)
        ReviewFactory(product=product, rating=1, status=ReviewStatus.PENDING)

        summary = ReviewService().average_rating(product.pk)
        assert summary == {'average': Decimal('4.3'), 'count': 3}

    def test_average_of_unrated_product(self, product):
        assert ReviewService().average_rating(product.pk) == {'average': Decimal('0'), 'count': 0}
