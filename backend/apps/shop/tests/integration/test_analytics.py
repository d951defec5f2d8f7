# apps/shop/tests/integration/test_analytics.py
import pytest
from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

from django.utils import timezone

from ...constants import OrderStatus
from ...services import AnalyticsService
from ...services.analytics import months_ago
from ..factories import CategoryFactory, OrderFactory, OrderItemFactory, ProductFactory


@pytest.fixture
def sales(db):
    sarees = CategoryFactory(name='Sarees')
    saree = ProductFactory(category=sarees, name='Silk Saree')
    kurta = ProductFactory(category=None, name='Cotton Kurta')

    first = OrderFactory(final_amount=Decimal('1000.00'))
    second = OrderFactory(final_amount=Decimal('300.00'), status=OrderStatus.CANCELLED)
    OrderItemFactory(order=first, product=saree, price=Decimal('500.00'), quantity=2)
    OrderItemFactory(order=second, product=saree, price=Decimal('500.00'), quantity=1)
    OrderItemFactory(order=second, product=kurta, price=Decimal('300.00'), quantity=1)
    return {'saree': saree, 'kurta': kurta}


@pytest.mark.django_db
class TestAnalyticsService:

    def test_status_breakdown(self, sales):
        rows = AnalyticsService().status_breakdown()
        assert {row['status']: row['count'] for row in rows} == {
            OrderStatus.CANCELLED: 1, OrderStatus.PENDING: 1,
        }

    def test_top_products_by_units(self, sales):
        top = AnalyticsService().top_products(limit=5)

        assert [row['name'] for row in top] == ['Silk Saree', 'Cotton Kurta']
        assert top[0]['total_sold'] == 3
        assert top[0]['revenue'] == Decimal('1500.00')

    def test_revenue_by_category(self, sales):
        rows = AnalyticsService().revenue_by_category()
        assert rows == [
            {'category': 'Sarees', 'revenue': Decimal('1500.00')},
            {'category': 'Uncategorized', 'revenue': Decimal('300.00')},
        ]

    def test_daily_stats_today(self, sales):
        rows = AnalyticsService().daily_stats(days=7)

        assert len(rows) == 1
        assert rows[0]['orders'] == 2
        assert rows[0]['cancelled'] == 1
        assert rows[0]['revenue'] == Decimal('1300.00')

    def test_order_analytics_window(self, sales):
        later = timezone.now() + timedelta(days=1)
        assert len(AnalyticsService().order_analytics()) == 2
        assert AnalyticsService().order_analytics(start=later) == []

    def test_report_dispatch(self, sales):
        service = AnalyticsService()
        assert service.report('status', {}) == service.status_breakdown()
        assert service.report('returns', {})['total'] == 0
        with pytest.raises(KeyError):
            service.report('weekly', {})


def test_months_ago_crosses_year():
    moment = datetime(2025, 2, 14, 9, 30, tzinfo=dt_timezone.utc)
    assert months_ago(moment, 3) == datetime(2024, 11, 1, tzinfo=dt_timezone.utc)
