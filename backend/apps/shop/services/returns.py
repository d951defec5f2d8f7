"""
Return service: intake against delivered orders, admin decisions and refunds
"""

from decimal import Decimal
from typing import Dict, List, Optional

from django.db import transaction
from django.db.models import Count, DecimalField, Sum, Value
from django.db.models.functions import Coalesce

from apps.core.permissions import user_is_admin
from apps.core.utils import generate_number

from ..constants import RETURN_NUMBER_PREFIX, OrderStatus, ReturnReason, ReturnStatus
from ..domain.exceptions import InvalidTransition, PermissionDenied, ValidationError
from ..domain.services import ReturnWorkflow
from ..models import Order, Return, ReturnItem
from .base import BaseShopService


CLOSED_RETURN_STATUSES = (ReturnStatus.REJECTED, ReturnStatus.CANCELLED)


class ReturnService(BaseShopService):
    """Service for return requests and refunds"""

    def create(self, order: Order, user, reason: str, items: List[Dict],
               reason_details: str = '') -> Return:
        """
        Open a return for some or all units of a delivered order.

        Units claimed by earlier returns that are still open or refunded
        cannot be claimed again. refund_amount is the sum of the returned
        units at the price the customer paid, capped so that all refunds on
        the order together never exceed its final amount.
        """
        if not user_is_admin(user) and order.user_id != getattr(user, 'pk', None):
            raise PermissionDenied('You can only return your own orders')
        if order.status != OrderStatus.DELIVERED:
            raise ValidationError(
                'Only delivered orders can be returned',
                details={'order_status': order.status},
            )
        if reason not in ReturnReason.values:
            raise ValidationError('Invalid return reason', details={'reason': reason})
        if not items:
            raise ValidationError('Select at least one item to return')

        with transaction.atomic():
            order = Order.objects.select_for_update().get(pk=order.pk)
            claimed = self.returned_quantities(order)
            order_items = {str(item.pk): item for item in order.items.all()}
            lines = []
            for entry in items:
                order_item = order_items.get(str(entry.get('order_item_id')))
                if order_item is None:
                    raise ValidationError(
                        'Item does not belong to this order',
                        details={'order_item_id': str(entry.get('order_item_id'))},
                    )
                available = order_item.quantity - claimed.get(order_item.pk, 0)
                quantity = int(entry.get('quantity') or 0)
                if available < 1:
                    raise ValidationError(
                        'All units of this item have already been returned',
                        details={'order_item_id': str(order_item.pk)},
                    )
                if quantity < 1 or quantity > available:
                    raise ValidationError(
                        f'Return quantity must be between 1 and {available}',
                        details={'order_item_id': str(order_item.pk), 'quantity': quantity},
                    )
                claimed[order_item.pk] = claimed.get(order_item.pk, 0) + quantity
                lines.append((order_item, quantity, order_item.effective_price * quantity))

            refundable = order.final_amount - self.committed_refunds(order)
            if refundable <= 0:
                raise ValidationError(
                    'This order has already been refunded in full',
                    details={'order_id': str(order.pk)},
                )
            refund_amount = min(sum((line[2] for line in lines), Decimal('0')), refundable)

            ret = Return.objects.create(
                return_number=generate_number(RETURN_NUMBER_PREFIX),
                order=order,
                user=order.user,
                customer_name=order.customer_name,
                customer_email=order.customer_email,
                reason=reason,
                reason_details=reason_details,
                refund_amount=refund_amount,
            )
            ReturnItem.objects.bulk_create([
                ReturnItem(
                    return_request=ret,
                    order_item=order_item,
                    product_name=order_item.product_name,
                    product_image=order_item.product_image,
                    quantity=quantity,
                    refund_amount=amount,
                )
                for order_item, quantity, amount in lines
            ])

        self.log_info(f"Return {ret.return_number} created", {
            'order_id': str(order.pk), 'refund_amount': str(refund_amount),
        })
        return ret

    def returned_quantities(self, order: Order) -> Dict:
        """Units per order item held by returns that are open or refunded"""
        rows = (
            ReturnItem.objects
            .filter(return_request__order=order, order_item__isnull=False)
            .exclude(return_request__status__in=CLOSED_RETURN_STATUSES)
            .values('order_item_id')
            .annotate(total=Sum('quantity'))
        )
        return {row['order_item_id']: row['total'] for row in rows}

    def committed_refunds(self, order: Order) -> Decimal:
        return order.returns.exclude(status__in=CLOSED_RETURN_STATUSES).aggregate(
            total=Coalesce(Sum('refund_amount'), Value(Decimal('0')), output_field=DecimalField())
        )['total']

    def list_for_user(self, user):
        return Return.objects.filter(user=user).select_related('order').prefetch_related('items')

    def list_all(self):
        return Return.objects.select_related('order', 'user', 'processed_by').prefetch_related('items')

    def get_for_user(self, return_id, user) -> Return:
        ret = self.get_object(self.list_all(), 'Return', pk=return_id)
        if not user_is_admin(user) and ret.user_id != getattr(user, 'pk', None):
            raise PermissionDenied('You do not have access to this return')
        return ret

    def update_status(self, ret: Return, new_status: str, actor=None,
                      notes: Optional[str] = None) -> Return:
        """Admin decision through the return state machine"""
        workflow = ReturnWorkflow(clock=self.clock)
        with transaction.atomic():
            ret = Return.objects.select_for_update().get(pk=ret.pk)
            previous = ret.status
            workflow.transition(ret, new_status, actor=actor, notes=notes)
            ret.save()

        self.log_info(f"Return {ret.return_number} moved to {new_status}", {
            'return_id': str(ret.pk), 'previous_status': previous,
        })
        return ret

    def process_refund(self, ret: Return, actor=None, notes: Optional[str] = None) -> Return:
        """Release the refund; a second call raises AlreadyRefunded"""
        return self.update_status(ret, ReturnStatus.REFUNDED, actor=actor, notes=notes)

    def cancel(self, ret: Return, user) -> Return:
        """Customer withdraws their own pending or approved request"""
        if ret.user_id != getattr(user, 'pk', None) and not user_is_admin(user):
            raise PermissionDenied('You can only cancel your own returns')
        try:
            return self.update_status(ret, ReturnStatus.CANCELLED)
        except InvalidTransition:
            raise ValidationError(
                'This return can no longer be cancelled',
                details={'status': ret.status},
            )

    def pending_count(self) -> int:
        return Return.objects.pending().count()

    def stats(self) -> Dict:
        """Counts per status plus the total amount refunded"""
        counts = {
            row['status']: row['count']
            for row in Return.objects.values('status').annotate(count=Count('id'))
        }
        refunded = Return.objects.refunded().aggregate(
            total=Coalesce(
                Sum('refund_amount'),
                Value(Decimal('0'), output_field=DecimalField(max_digits=12, decimal_places=2)),
            )
        )['total']
        result = {status: counts.get(status, 0) for status in ReturnStatus.values}
        result['total'] = sum(counts.values())
        result['total_refund_amount'] = refunded
        return result
