"""
Customer records: checkout buyer upsert and the admin customer directory
"""

from decimal import Decimal
from typing import Dict, List, Optional

from django.contrib.auth import get_user_model
from django.db.models import Count, DecimalField, Max, Q, Sum, Value
from django.db.models.functions import Coalesce

from apps.accounts.models import UserProfile

from ..constants import OrderStatus
from ..models import Customer, Order
from .base import BaseShopService

User = get_user_model()

ZERO = Value(Decimal('0'), output_field=DecimalField(max_digits=14, decimal_places=2))


class CustomerService(BaseShopService):
    """Service for customer records and aggregates"""

    def upsert_from_checkout(self, data: Dict, user=None) -> Customer:
        """Create or refresh the buyer record keyed by email"""
        email = data['customer_email'].strip().lower()
        customer, created = Customer.objects.update_or_create(
            email=email,
            defaults={
                'user': user if user is not None and user.is_authenticated else None,
                'full_name': data['customer_name'],
                'phone': data.get('customer_phone', ''),
                'address': data.get('address', ''),
                'city': data.get('city', ''),
                'state': data.get('state', ''),
                'postal_code': data.get('pincode', ''),
                'country': data.get('country') or 'India',
            },
        )
        if created:
            self.log_info('Customer created', {'customer_id': str(customer.pk)})
        return customer

    def sync_totals(self, customer: Customer) -> Customer:
        """Recompute total_orders and total_spent from non-cancelled orders"""
        totals = customer.orders.exclude(status=OrderStatus.CANCELLED).aggregate(
            count=Count('id'),
            spent=Coalesce(Sum('final_amount'), ZERO),
        )
        customer.total_orders = totals['count']
        customer.total_spent = totals['spent']
        customer.save(update_fields=['total_orders', 'total_spent', 'updated_at'])
        return customer

    def list_customers(self, search: Optional[str] = None) -> List[Dict]:
        """Customer-role profiles with spend, order count and last order date"""
        profiles = UserProfile.objects.filter(role=UserProfile.Role.CUSTOMER).select_related('user')
        if search:
            profiles = profiles.filter(
                Q(full_name__icontains=search)
                | Q(user__email__icontains=search)
                | Q(phone__icontains=search)
            )

        stats = {
            row['user_id']: row
            for row in Order.objects.filter(user_id__in=profiles.values('user_id'))
            .values('user_id')
            .annotate(
                total_spent=Coalesce(Sum('final_amount'), ZERO),
                order_count=Count('id'),
                last_order_date=Max('created_at'),
            )
        }

        results = []
        for profile in profiles.order_by('-created_at'):
            row = stats.get(profile.user_id, {})
            results.append({
                'profile': profile,
                'total_spent': row.get('total_spent', Decimal('0')),
                'order_count': row.get('order_count', 0),
                'last_order_date': row.get('last_order_date'),
            })
        return results

    def get_customer(self, user_id) -> Dict:
        profile = self.get_object(
            UserProfile.objects.select_related('user'), 'Customer', user_id=user_id
        )
        orders = Order.objects.filter(user_id=user_id).order_by('-created_at')
        total_spent = sum((order.final_amount for order in orders), Decimal('0'))
        return {
            'profile': profile,
            'orders': list(orders),
            'total_spent': total_spent,
            'order_count': len(orders),
        }

    def update_notes(self, user_id, notes: str) -> UserProfile:
        profile = self.get_object(UserProfile.objects.all(), 'Customer', user_id=user_id)
        profile.customer_notes = notes
        profile.save(update_fields=['customer_notes', 'updated_at'])
        self.log_info('Customer notes updated', {'user_id': user_id})
        return profile
