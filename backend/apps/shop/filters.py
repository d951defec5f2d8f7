import django_filters

from .constants import OrderStatus, ReturnReason, ReturnStatus, StockStatus
from .models import Order, Product, Return


class ProductFilter(django_filters.FilterSet):
    """Filter for storefront products"""

    category = django_filters.CharFilter(
        field_name='category__slug',
        label='Category slug'
    )

    category_id = django_filters.UUIDFilter(
        field_name='category_id',
        label='Category'
    )

    price_min = django_filters.NumberFilter(
        field_name='price',
        lookup_expr='gte',
        label='Min Price'
    )

    price_max = django_filters.NumberFilter(
        field_name='price',
        lookup_expr='lte',
        label='Max Price'
    )

    color = django_filters.CharFilter(
        method='filter_variant',
        label='Color'
    )

    size = django_filters.CharFilter(
        method='filter_variant',
        label='Size'
    )

    stock_status = django_filters.ChoiceFilter(
        choices=StockStatus.choices,
        label='Stock status'
    )

    in_stock = django_filters.BooleanFilter(
        method='filter_in_stock',
        label='In Stock'
    )

    search = django_filters.CharFilter(
        method='filter_search',
        label='Search'
    )

    class Meta:
        model = Product
        fields = ['badge']

    def filter_variant(self, queryset, name, value):
        # JSON containment is not portable across backends
        field = 'colors' if name == 'color' else 'sizes'
        wanted = value.strip().lower()
        matching = [
            pk for pk, options in queryset.values_list('pk', field)
            if any(str(option).lower() == wanted for option in options or [])
        ]
        return queryset.filter(pk__in=matching)

    def filter_in_stock(self, queryset, name, value):
        if value is True:
            return queryset.in_stock()
        if value is False:
            return queryset.out_of_stock()
        return queryset

    def filter_search(self, queryset, name, value):
        if not value:
            return queryset
        return queryset.search(value)


class OrderFilter(django_filters.FilterSet):
    """Filter for orders"""

    status = django_filters.ChoiceFilter(choices=OrderStatus.choices)

    date_from = django_filters.DateFilter(
        field_name='created_at',
        lookup_expr='date__gte',
        label='Date From'
    )

    date_to = django_filters.DateFilter(
        field_name='created_at',
        lookup_expr='date__lte',
        label='Date To'
    )

    customer_email = django_filters.CharFilter(
        field_name='customer_email',
        lookup_expr='icontains',
        label='Customer Email'
    )

    order_number = django_filters.CharFilter(
        field_name='order_number',
        lookup_expr='icontains',
        label='Order Number'
    )

    class Meta:
        model = Order
        fields = ['status', 'payment_method']


class ReturnFilter(django_filters.FilterSet):
    """Filter for return requests"""

    status = django_filters.ChoiceFilter(choices=ReturnStatus.choices)
    reason = django_filters.ChoiceFilter(choices=ReturnReason.choices)

    order_number = django_filters.CharFilter(
        field_name='order__order_number',
        lookup_expr='icontains',
        label='Order Number'
    )

    class Meta:
        model = Return
        fields = ['status', 'reason']
