from .base import DomainEvent
from .shop_events import (
    OrderStatusChangedEvent, RecordChangedEvent, RefundProcessedEvent,
    ReturnStatusChangedEvent,
)

__all__ = [
    'DomainEvent',
    'OrderStatusChangedEvent',
    'ReturnStatusChangedEvent',
    'RefundProcessedEvent',
    'RecordChangedEvent',
]
