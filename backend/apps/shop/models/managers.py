# apps/shop/models/managers.py

"""
Custom managers and querysets for storefront models
"""

from django.db import models
from django.db.models import Q
from django.utils import timezone

from ..constants import OrderStatus, ReturnStatus, ReviewStatus, StockStatus


class ProductQuerySet(models.QuerySet):

    def in_stock(self):
        return self.filter(stock_quantity__gt=0)

    def out_of_stock(self):
        return self.filter(stock_quantity__lte=0)

    def low_stock(self, threshold=10):
        """Products at or below the threshold, out-of-stock included"""
        return self.filter(stock_quantity__lte=threshold)

    def by_category(self, slug):
        return self.filter(category__slug=slug)

    def by_price_range(self, min_price=None, max_price=None):
        queryset = self
        if min_price is not None:
            queryset = queryset.filter(price__gte=min_price)
        if max_price is not None:
            queryset = queryset.filter(price__lte=max_price)
        return queryset

    def search(self, term):
        return self.filter(Q(name__icontains=term) | Q(description__icontains=term))

    def available(self):
        return self.exclude(stock_status=StockStatus.OUT_OF_STOCK)


class DiscountQuerySet(models.QuerySet):

    def active(self):
        now = timezone.now()
        return self.filter(is_active=True, valid_from__lte=now).filter(
            Q(valid_until__isnull=True) | Q(valid_until__gte=now)
        )

    def by_code(self, code):
        return self.filter(code__iexact=(code or '').strip())


class OrderQuerySet(models.QuerySet):

    def for_user(self, user):
        return self.filter(user=user)

    def with_status(self, status):
        return self.filter(status=status)

    def delivered(self):
        return self.filter(status=OrderStatus.DELIVERED)

    def not_cancelled(self):
        return self.exclude(status=OrderStatus.CANCELLED)

    def in_period(self, start=None, end=None):
        queryset = self
        if start:
            queryset = queryset.filter(created_at__gte=start)
        if end:
            queryset = queryset.filter(created_at__lte=end)
        return queryset


class ReturnQuerySet(models.QuerySet):

    def pending(self):
        return self.filter(status=ReturnStatus.PENDING)

    def refunded(self):
        return self.filter(status=ReturnStatus.REFUNDED)


class ReviewQuerySet(models.QuerySet):

    def approved(self):
        return self.filter(status=ReviewStatus.APPROVED)

    def pending(self):
        return self.filter(status=ReviewStatus.PENDING)
