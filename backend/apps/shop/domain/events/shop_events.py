from typing import Any, Dict, Optional

from .base import DomainEvent


class OrderStatusChangedEvent(DomainEvent):
    """Published when an admin moves an order to a new status"""

    def __init__(self, aggregate_id: str, order_number: str, previous_status: str,
                 new_status: str, actor_id: Optional[str] = None, **kwargs):
        super().__init__(aggregate_id, **kwargs)
        self.order_number = order_number
        self.previous_status = previous_status
        self.new_status = new_status
        self.actor_id = actor_id

        self.event_data.update({
            'order_number': order_number,
            'previous_status': previous_status,
            'new_status': new_status,
            'actor_id': actor_id,
        })


class ReturnStatusChangedEvent(DomainEvent):
    """Published when a return request moves to a new status"""

    def __init__(self, aggregate_id: str, return_number: str, previous_status: str,
                 new_status: str, actor_id: Optional[str] = None, **kwargs):
        super().__init__(aggregate_id, **kwargs)
        self.return_number = return_number
        self.previous_status = previous_status
        self.new_status = new_status
        self.actor_id = actor_id

        self.event_data.update({
            'return_number': return_number,
            'previous_status': previous_status,
            'new_status': new_status,
            'actor_id': actor_id,
        })


class RefundProcessedEvent(ReturnStatusChangedEvent):
    """Published once, when an approved return is refunded"""

    def __init__(self, aggregate_id: str, return_number: str, refund_amount,
                 actor_id: Optional[str] = None, **kwargs):
        super().__init__(aggregate_id, return_number, 'approved', 'refunded', actor_id, **kwargs)
        self.refund_amount = refund_amount
        self.event_data['refund_amount'] = str(refund_amount)


class RecordChangedEvent(DomainEvent):
    """Row-level change pushed to change feed subscribers"""

    INSERT = 'INSERT'
    UPDATE = 'UPDATE'

    def __init__(self, aggregate_id: str, table: str, change: str, record: Dict[str, Any],
                 user_id: Optional[str] = None, **kwargs):
        super().__init__(aggregate_id, **kwargs)
        self.table = table
        self.change = change
        self.record = record
        self.user_id = str(user_id) if user_id else None

        self.event_data.update({
            'table': table,
            'event_type': change,
            'record': record,
        })

    def to_payload(self) -> Dict[str, Any]:
        return {'table': self.table, 'event_type': self.change, 'record': self.record}
