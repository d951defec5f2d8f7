# apps/shop/tests/integration/test_returns.py
import pytest
from decimal import Decimal

from ...constants import OrderStatus, ReturnReason, ReturnStatus
from ...domain.exceptions import AlreadyRefunded, InvalidTransition, PermissionDenied, ValidationError
from ...models import Return
from ...services import ReturnService
from ..factories import OrderFactory, OrderItemFactory, ReturnFactory, UserFactory


def items_of(order, quantity=1):
    return [{'order_item_id': item.pk, 'quantity': quantity} for item in order.items.all()]


@pytest.mark.django_db
class TestReturnIntake:

    def test_refund_amount_from_paid_price(self, customer, delivered_order):
        ret = ReturnService().create(delivered_order, customer, ReturnReason.DEFECTIVE, items_of(delivered_order))

        assert ret.status == ReturnStatus.PENDING
        assert ret.return_number.startswith('RET-')
        assert ret.refund_amount == Decimal('400.00')
        assert ret.customer_email == delivered_order.customer_email
        line = ret.items.get()
        assert (line.quantity, line.refund_amount) == (1, Decimal('400.00'))

    def test_refund_capped_at_final_amount(self, customer):
        order = OrderFactory(user=customer, status=OrderStatus.DELIVERED,
                             discount_amount=Decimal('500.00'), final_amount=Decimal('350.00'))
        OrderItemFactory(order=order, quantity=2)

        ret = ReturnService().create(order, customer, ReturnReason.OTHER, items_of(order, 2))
        assert ret.refund_amount == Decimal('350.00')

    @pytest.mark.parametrize('status', [OrderStatus.PENDING, OrderStatus.SHIPPED, OrderStatus.CANCELLED])
    def test_only_delivered_orders(self, customer, status):
        order = OrderFactory(user=customer, status=status)
        OrderItemFactory(order=order)

        with pytest.raises(ValidationError):
            ReturnService().create(order, customer, ReturnReason.DEFECTIVE, items_of(order))
        assert not Return.objects.exists()

    @pytest.mark.parametrize('quantity', [0, 3])
    def test_quantity_bounds(self, customer, delivered_order, quantity):
        with pytest.raises(ValidationError):
            ReturnService().create(delivered_order, customer, ReturnReason.DEFECTIVE,
                                   items_of(delivered_order, quantity))

    def test_foreign_item_rejected(self, customer, delivered_order):
        stranger_item = OrderItemFactory()
        with pytest.raises(ValidationError):
            ReturnService().create(delivered_order, customer, ReturnReason.DEFECTIVE,
                                   [{'order_item_id': stranger_item.pk, 'quantity': 1}])

    def test_other_users_order(self, delivered_order):
        with pytest.raises(PermissionDenied):
            ReturnService().create(delivered_order, UserFactory(), ReturnReason.DEFECTIVE,
                                   items_of(delivered_order))

    def test_unknown_reason(self, customer, delivered_order):
        with pytest.raises(ValidationError):
            ReturnService().create(delivered_order, customer, 'bored', items_of(delivered_order))

    def test_same_units_cannot_be_returned_twice(self, customer, delivered_order):
        service = ReturnService()
        service.create(delivered_order, customer, ReturnReason.DEFECTIVE, items_of(delivered_order, 2))

        with pytest.raises(ValidationError):
            service.create(delivered_order, customer, ReturnReason.DEFECTIVE, items_of(delivered_order, 2))
        with pytest.raises(ValidationError):
            service.create(delivered_order, customer, ReturnReason.DEFECTIVE, items_of(delivered_order, 1))
        assert delivered_order.returns.count() == 1

    def test_remaining_units_returnable(self, customer, delivered_order):
        service = ReturnService()
        first = service.create(delivered_order, customer, ReturnReason.DEFECTIVE, items_of(delivered_order, 1))
        second = service.create(delivered_order, customer, ReturnReason.DEFECTIVE, items_of(delivered_order, 1))

        assert (first.refund_amount, second.refund_amount) == (Decimal('400.00'), Decimal('400.00'))
        with pytest.raises(ValidationError):
            service.create(delivered_order, customer, ReturnReason.DEFECTIVE, items_of(delivered_order, 1))

    def test_duplicate_lines_in_one_request(self, customer, delivered_order):
        lines = items_of(delivered_order, 2) + items_of(delivered_order, 1)
        with pytest.raises(ValidationError):
            ReturnService().create(delivered_order, customer, ReturnReason.DEFECTIVE, lines)

    def test_refunds_never_exceed_final_amount(self, customer, admin):
        order = OrderFactory(user=customer, status=OrderStatus.DELIVERED,
                             discount_amount=Decimal('500.00'), final_amount=Decimal('350.00'))
        OrderItemFactory(order=order, quantity=2)
        service = ReturnService()

        ret = service.create(order, customer, ReturnReason.DEFECTIVE, items_of(order, 1))
        service.update_status(ret, ReturnStatus.APPROVED, actor=admin)
        service.process_refund(ret, actor=admin)

        assert ret.refund_amount == Decimal('350.00')
        with pytest.raises(ValidationError):
            service.create(order, customer, ReturnReason.DEFECTIVE, items_of(order, 1))
        refunded = sum(r.refund_amount for r in order.returns.filter(status=ReturnStatus.REFUNDED))
        assert refunded <= order.final_amount

    @pytest.mark.parametrize('closed', [ReturnStatus.REJECTED, ReturnStatus.CANCELLED])
    def test_closed_return_releases_units(self, customer, admin, delivered_order, closed):
        service = ReturnService()
        ret = service.create(delivered_order, customer, ReturnReason.DEFECTIVE, items_of(delivered_order, 2))
        service.update_status(ret, closed, actor=admin)

        again = service.create(delivered_order, customer, ReturnReason.DEFECTIVE, items_of(delivered_order, 2))
        assert again.refund_amount == Decimal('800.00')


@pytest.mark.django_db
class TestReturnDecisions:

    def test_approve_then_refund(self, admin):
        ret = ReturnFactory()
        service = ReturnService()

        service.update_status(ret, ReturnStatus.APPROVED, actor=admin, notes='ok')
        ret = service.process_refund(ret, actor=admin)

        ret.refresh_from_db()
        assert ret.status == ReturnStatus.REFUNDED
        assert ret.refund_processed_at is not None
        assert ret.processed_by == admin
        assert ret.admin_notes == 'ok'
        assert ret.refund_amount == Decimal('400.00')

    def test_second_refund_rejected(self, admin):
        ret = ReturnFactory(status=ReturnStatus.APPROVED)
        service = ReturnService()
        service.process_refund(ret, actor=admin)
        first = Return.objects.get(pk=ret.pk).refund_processed_at

        with pytest.raises(AlreadyRefunded):
            service.process_refund(ret, actor=admin)
        assert Return.objects.get(pk=ret.pk).refund_processed_at == first

    def test_pending_cannot_be_refunded(self, admin):
        ret = ReturnFactory()
        with pytest.raises(InvalidTransition):
            ReturnService().process_refund(ret, actor=admin)

    def test_customer_cancels_own_return(self, customer):
        ret = ReturnFactory(order=OrderFactory(user=customer, status=OrderStatus.DELIVERED))
        ReturnService().cancel(ret, customer)
        assert Return.objects.get(pk=ret.pk).status == ReturnStatus.CANCELLED

    def test_cancel_after_refund_is_validation_error(self, customer):
        ret = ReturnFactory(order=OrderFactory(user=customer, status=OrderStatus.DELIVERED),
                            status=ReturnStatus.REFUNDED)
        with pytest.raises(ValidationError):
            ReturnService().cancel(ret, customer)

    def test_cancel_someone_elses_return(self):
        with pytest.raises(PermissionDenied):
            ReturnService().cancel(ReturnFactory(), UserFactory())

    def test_stats(self):
        ReturnFactory()
        ReturnFactory(status=ReturnStatus.REFUNDED, refund_amount=Decimal('250.00'))
        ReturnFactory(status=ReturnStatus.REFUNDED, refund_amount=Decimal('100.00'))

        stats = ReturnService().stats()
        assert stats['pending'] == 1
        assert stats['refunded'] == 2
        assert stats['rejected'] == 0
        assert stats['total'] == 3
        assert stats['total_refund_amount'] == Decimal('350.00')
