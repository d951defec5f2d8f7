"""
Return and refund lifecycle rules.

pending -> approved -> refunded, pending -> rejected and
pending|approved -> cancelled. refunded, rejected and cancelled are
terminal. refund_amount is never touched here.
"""

from datetime import datetime
from typing import Dict, FrozenSet, List, Optional

from ...constants import ReturnStatus
from ..events import RefundProcessedEvent, ReturnStatusChangedEvent
from ..exceptions import AlreadyRefunded, InvalidTransition
from .base import Clock, PolicyService
from .order_workflow import actor_id

RETURN_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    ReturnStatus.PENDING: frozenset({ReturnStatus.APPROVED, ReturnStatus.REJECTED, ReturnStatus.CANCELLED}),
    ReturnStatus.APPROVED: frozenset({ReturnStatus.REFUNDED, ReturnStatus.CANCELLED}),
}
TERMINAL_RETURN_STATES = frozenset({ReturnStatus.REFUNDED, ReturnStatus.REJECTED, ReturnStatus.CANCELLED})


class ReturnWorkflow(PolicyService):
    """Strict return state machine with an idempotent refund step"""

    def __init__(self, clock: Optional[Clock] = None):
        super().__init__(clock)
        self.events: List[ReturnStatusChangedEvent] = []

    @staticmethod
    def can_transition(current: str, new_status: str) -> bool:
        return new_status in RETURN_TRANSITIONS.get(current, frozenset())

    @staticmethod
    def allowed_transitions(current: str) -> List[str]:
        allowed = RETURN_TRANSITIONS.get(current, frozenset())
        return [status for status in ReturnStatus.values if status in allowed]

    def transition(self, ret, new_status: str, actor=None, notes: Optional[str] = None,
                   now: Optional[datetime] = None):
        """Move `ret` to `new_status` in place and return it"""
        current = ret.status
        if new_status == ReturnStatus.REFUNDED and (
            current == ReturnStatus.REFUNDED or getattr(ret, 'refund_processed_at', None)
        ):
            raise AlreadyRefunded(getattr(ret, 'return_number', ''))
        if not self.can_transition(current, new_status):
            raise InvalidTransition('return', current, new_status)

        now = now or self.now()
        ret.status = new_status
        ret.updated_at = now
        if actor is not None:
            ret.processed_by = actor
        if notes is not None:
            ret.admin_notes = notes

        aggregate_id = getattr(ret, 'pk', None) or getattr(ret, 'id', '')
        return_number = getattr(ret, 'return_number', '')
        if new_status == ReturnStatus.REFUNDED:
            ret.refund_processed_at = now
            event = RefundProcessedEvent(
                aggregate_id=aggregate_id,
                return_number=return_number,
                refund_amount=ret.refund_amount,
                actor_id=actor_id(actor),
            )
        else:
            event = ReturnStatusChangedEvent(
                aggregate_id=aggregate_id,
                return_number=return_number,
                previous_status=current,
                new_status=new_status,
                actor_id=actor_id(actor),
            )
        self.events.append(event)
        self.logger.debug('Return %s: %s -> %s', return_number, current, new_status)
        return ret

    def process_refund(self, ret, actor=None, notes: Optional[str] = None,
                       now: Optional[datetime] = None):
        return self.transition(ret, ReturnStatus.REFUNDED, actor=actor, notes=notes, now=now)
