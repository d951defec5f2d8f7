"""
Order lifecycle rules.

pending -> processing -> shipped -> delivered, with cancelled reachable
from every non-terminal state. Forward skips are allowed; backward,
same-state and out-of-terminal moves are not.
"""

from datetime import datetime
from typing import List, Optional

from ...constants import OrderStatus
from ..events import OrderStatusChangedEvent
from ..exceptions import InvalidTransition
from .base import Clock, PolicyService

ORDER_SEQUENCE = [
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
]
TERMINAL_ORDER_STATES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


def actor_id(actor) -> Optional[str]:
    if actor is None:
        return None
    return str(getattr(actor, 'pk', actor))


class OrderWorkflow(PolicyService):
    """Strict order status state machine"""

    def __init__(self, clock: Optional[Clock] = None):
        super().__init__(clock)
        self.events: List[OrderStatusChangedEvent] = []

    @staticmethod
    def can_transition(current: str, new_status: str) -> bool:
        if current in TERMINAL_ORDER_STATES or current == new_status:
            return False
        if new_status == OrderStatus.CANCELLED:
            return True
        if current not in ORDER_SEQUENCE or new_status not in ORDER_SEQUENCE:
            return False
        return ORDER_SEQUENCE.index(new_status) > ORDER_SEQUENCE.index(current)

    @classmethod
    def allowed_transitions(cls, current: str) -> List[str]:
        return [status for status in OrderStatus.values if cls.can_transition(current, status)]

    def transition(self, order, new_status: str, actor=None, now: Optional[datetime] = None):
        """Move `order` to `new_status` in place and return it"""
        current = order.status
        if not self.can_transition(current, new_status):
            raise InvalidTransition('order', current, new_status)

        order.status = new_status
        order.updated_at = now or self.now()

        event = OrderStatusChangedEvent(
            aggregate_id=getattr(order, 'pk', None) or getattr(order, 'id', ''),
            order_number=getattr(order, 'order_number', ''),
            previous_status=current,
            new_status=new_status,
            actor_id=actor_id(actor),
        )
        self.events.append(event)
        self.logger.debug('Order %s: %s -> %s', event.order_number, current, new_status)
        return order
