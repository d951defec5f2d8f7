"""
Admin analytics over orders, order items, products and returns
"""

from datetime import timedelta
from decimal import Decimal
from typing import Dict, List, Optional

from django.db.models import Count, DecimalField, ExpressionWrapper, F, Q, Sum, Value
from django.db.models.functions import Coalesce, TruncDate, TruncMonth

from .. import conf
from ..constants import OrderStatus
from ..models import Order, OrderItem, Product
from .base import BaseShopService
from .returns import ReturnService

MONEY = DecimalField(max_digits=14, decimal_places=2)
ZERO = Value(Decimal('0'), output_field=MONEY)
LINE_REVENUE = ExpressionWrapper(F('price') * F('quantity'), output_field=MONEY)

REPORTS = ('orders', 'daily', 'monthly', 'status', 'top-products', 'revenue-by-category', 'returns')


def months_ago(moment, months: int):
    """First instant of the month `months` before `moment`'s month"""
    index = moment.year * 12 + (moment.month - 1) - months
    return moment.replace(year=index // 12, month=index % 12 + 1, day=1,
                          hour=0, minute=0, second=0, microsecond=0)


class AnalyticsService(BaseShopService):
    """Read-only reports for the back-office dashboard"""

    def order_analytics(self, start=None, end=None) -> List[Dict]:
        return list(
            Order.objects.in_period(start, end)
            .order_by('created_at')
            .values('id', 'order_number', 'created_at', 'final_amount', 'status', 'items_count')
        )

    def _period_stats(self, since, trunc, key: str) -> List[Dict]:
        rows = (
            Order.objects.filter(created_at__gte=since)
            .annotate(period=trunc)
            .values('period')
            .annotate(
                orders=Count('id'),
                revenue=Coalesce(Sum('final_amount'), ZERO),
                cancelled=Count('id', filter=Q(status=OrderStatus.CANCELLED)),
            )
            .order_by('period')
        )
        return [
            {
                key: row['period'],
                'orders': row['orders'],
                'revenue': row['revenue'],
                'cancelled': row['cancelled'],
            }
            for row in rows
        ]

    def daily_stats(self, days: int = 30) -> List[Dict]:
        since = self.get_current_timestamp() - timedelta(days=days)
        stats = self._period_stats(since, TruncDate('created_at'), 'date')
        for row in stats:
            row['date'] = row['date'].isoformat()
        return stats

    def monthly_stats(self, months: int = 12) -> List[Dict]:
        since = months_ago(self.get_current_timestamp(), months)
        stats = self._period_stats(since, TruncMonth('created_at'), 'month')
        for row in stats:
            row['month'] = row['month'].strftime('%Y-%m')
        return stats

    def status_breakdown(self) -> List[Dict]:
        return list(
            Order.objects.values('status').annotate(count=Count('id')).order_by('status')
        )

    def top_products(self, limit: int = 10) -> List[Dict]:
        """Best sellers by units sold; revenue uses the list price"""
        rows = (
            OrderItem.objects.filter(product__isnull=False)
            .values('product_id', 'product__name')
            .annotate(
                total_sold=Sum('quantity'),
                revenue=Coalesce(Sum(LINE_REVENUE), ZERO),
            )
            .order_by('-total_sold')[:limit]
        )
        return [
            {
                'id': str(row['product_id']),
                'name': row['product__name'],
                'total_sold': row['total_sold'],
                'revenue': row['revenue'],
            }
            for row in rows
        ]

    def low_stock_products(self, threshold: Optional[int] = None):
        if threshold is None:
            threshold = conf.low_stock_threshold()
        return Product.objects.low_stock(threshold).order_by('stock_quantity')

    def revenue_by_category(self) -> List[Dict]:
        rows = (
            OrderItem.objects.values(category=Coalesce(F('product__category__name'), Value('Uncategorized')))
            .annotate(revenue=Coalesce(Sum(LINE_REVENUE), ZERO))
            .order_by('-revenue')
        )
        return [{'category': row['category'], 'revenue': row['revenue']} for row in rows]

    def return_stats(self) -> Dict:
        return ReturnService(clock=self.clock).stats()

    def report(self, name: str, params: Dict):
        """Dispatch a named report with query parameters"""
        if name == 'orders':
            return self.order_analytics(params.get('start'), params.get('end'))
        if name == 'daily':
            return self.daily_stats(int(params.get('days', 30)))
        if name == 'monthly':
            return self.monthly_stats(int(params.get('months', 12)))
        if name == 'status':
            return self.status_breakdown()
        if name == 'top-products':
            return self.top_products(int(params.get('limit', 10)))
        if name == 'revenue-by-category':
            return self.revenue_by_category()
        if name == 'returns':
            return self.return_stats()
        raise KeyError(name)

