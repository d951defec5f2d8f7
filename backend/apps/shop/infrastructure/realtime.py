# apps/shop/infrastructure/realtime.py

"""
Change feed for orders and returns over Redis pub/sub.

Model signals publish a RecordChangedEvent to the table's channel once
the surrounding transaction commits, so every web and worker process
sees every change. Each process keeps its own subscriptions and a
listener that hands incoming payloads to the matching callbacks.
Delivery is push-only: a subscriber that is dropped has to subscribe
again and reload, there is no replay.
"""

import json
import logging
import threading
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

import redis
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db import transaction
from django.utils.dateparse import parse_datetime

from ..domain.events import RecordChangedEvent

logger = logging.getLogger(__name__)

ORDERS_TABLE = 'orders'
RETURNS_TABLE = 'returns'
DEFAULT_CHANNEL_PREFIX = 'changes'
DEFAULT_REDIS_URL = 'redis://localhost:6379/2'

Callback = Callable[[Dict[str, Any]], None]


def serialize_record(instance) -> Dict[str, Any]:
    """Concrete field values of a model instance, JSON-safe"""
    data = {field.attname: field.value_from_object(instance) for field in instance._meta.concrete_fields}
    return json.loads(json.dumps(data, cls=DjangoJSONEncoder))


def get_redis_client(url: Optional[str] = None):
    """Get Redis client with proper configuration"""
    return redis.Redis.from_url(
        url or DEFAULT_REDIS_URL,
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
    )


@dataclass
class Subscription:
    """Represents one registered listener."""
    id: str
    table: str
    callback: Callback
    user_id: Optional[str] = None
    record_id: Optional[str] = None

    def matches(self, table: str, record: Dict[str, Any], user_id: Optional[str] = None) -> bool:
        if table != self.table:
            return False
        if self.user_id is not None and user_id != self.user_id:
            return False
        if self.record_id is not None and str(record.get('id')) != self.record_id:
            return False
        return True


class ChangeFeed:
    """
    Publishes change events to one Redis channel per table and fans
    incoming messages out to this process' subscriptions.

    The Redis client, channel prefix and listener mode come from the
    CHANGE_FEED setting unless given. With the listener thread off,
    call drain() to deliver whatever has arrived.
    """

    def __init__(self, client=None, channel_prefix: Optional[str] = None,
                 listen_in_thread: Optional[bool] = None):
        self._client = client
        self._channel_prefix = channel_prefix
        self._listen_in_thread = listen_in_thread
        self._lock = threading.RLock()
        self._subscriptions: Dict[str, Subscription] = {}
        self._pubsub = None
        self._listener: Optional[threading.Thread] = None
        self._stopped = threading.Event()

    @staticmethod
    def _options() -> Dict[str, Any]:
        return getattr(settings, 'CHANGE_FEED', {})

    @property
    def client(self):
        if self._client is None:
            self._client = get_redis_client(self._options().get('REDIS_URL'))
        return self._client

    @property
    def channel_prefix(self) -> str:
        return self._channel_prefix or self._options().get('CHANNEL_PREFIX') or DEFAULT_CHANNEL_PREFIX

    @property
    def listen_in_thread(self) -> bool:
        if self._listen_in_thread is not None:
            return self._listen_in_thread
        return self._options().get('LISTEN_IN_THREAD', True)

    def channel(self, table: str) -> str:
        return f"{self.channel_prefix}:{table}"

    def table_of(self, channel: str) -> str:
        return channel[len(self.channel_prefix) + 1:]

    def connect(self, client):
        """Use another Redis client, carrying current subscriptions over"""
        self.close()
        self._client = client
        with self._lock:
            if not self._subscriptions:
                return
            self._open_pubsub()
        self._ensure_listener()

    def _tables(self) -> set:
        return {s.table for s in self._subscriptions.values()}

    def _open_pubsub(self):
        self._pubsub = self.client.pubsub()
        channels = [self.channel(table) for table in sorted(self._tables())]
        if channels:
            self._pubsub.subscribe(*channels)

    def subscribe(self, table: str, callback: Callback, user_id=None, record_id=None) -> Subscription:
        subscription = Subscription(
            id=str(uuid.uuid4()),
            table=table,
            callback=callback,
            user_id=str(user_id) if user_id is not None else None,
            record_id=str(record_id) if record_id is not None else None,
        )
        with self._lock:
            new_table = table not in self._tables()
            self._subscriptions[subscription.id] = subscription
            if self._pubsub is None:
                self._open_pubsub()
            elif new_table:
                self._pubsub.subscribe(self.channel(table))
        self._ensure_listener()
        logger.debug('Subscribed %s to %s', subscription.id, self.channel(table))
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        with self._lock:
            if self._subscriptions.pop(subscription.id, None) is None:
                return False
            if self._pubsub is not None and subscription.table not in self._tables():
                self._pubsub.unsubscribe(self.channel(subscription.table))
        return True

    def subscribers(self, table: Optional[str] = None) -> List[Subscription]:
        with self._lock:
            subscriptions = list(self._subscriptions.values())
        if table is None:
            return subscriptions
        return [s for s in subscriptions if s.table == table]

    def publish(self, event: RecordChangedEvent) -> int:
        """Send the event to its table's channel; returns how many listeners Redis reached"""
        message = json.dumps({'user_id': event.user_id, 'payload': event.to_payload()}, cls=DjangoJSONEncoder)
        try:
            receivers = self.client.publish(self.channel(event.table), message)
        except redis.RedisError as e:
            logger.error('Failed to publish change', extra={'table': event.table, 'error': str(e)})
            return 0
        logger.debug('Published %s change to %s', event.change, self.channel(event.table))
        return receivers

    def dispatch(self, message: Dict[str, Any]) -> int:
        """Deliver one pub/sub message to matching subscriptions; returns how many succeeded"""
        table = self.table_of(message['channel'])
        body = json.loads(message['data'])
        payload = body['payload']
        delivered = 0
        for subscription in self.subscribers(table):
            if not subscription.matches(table, payload['record'], body.get('user_id')):
                continue
            try:
                subscription.callback(payload)
                delivered += 1
            except Exception:
                logger.exception(
                    'Change feed subscriber failed',
                    extra={'subscription_id': subscription.id, 'table': table},
                )
        return delivered

    def drain(self, timeout: float = 0.0) -> int:
        """Deliver every message already waiting on this process' channels"""
        delivered = 0
        while True:
            pubsub = self._pubsub
            if pubsub is None:
                return delivered
            message = pubsub.get_message(timeout=timeout)
            if message is None:
                return delivered
            if message['type'] == 'message':
                delivered += self.dispatch(message)

    def _listen(self):
        while not self._stopped.is_set():
            if self._pubsub is None:
                self._stopped.wait(1.0)
                continue
            try:
                self.drain(timeout=1.0)
            except redis.ConnectionError as e:
                logger.warning('Change feed listener lost Redis: %s', e)
                self._stopped.wait(1.0)

    def _ensure_listener(self):
        if not self.listen_in_thread:
            return
        with self._lock:
            if self._listener is not None and self._listener.is_alive():
                return
            self._stopped.clear()
            self._listener = threading.Thread(target=self._listen, name='change-feed-listener', daemon=True)
            self._listener.start()

    def close(self):
        """Stop the listener and release the pub/sub connection; subscriptions are kept"""
        self._stopped.set()
        listener, self._listener = self._listener, None
        if listener is not None and listener is not threading.current_thread():
            listener.join(timeout=2)
        with self._lock:
            if self._pubsub is not None:
                self._pubsub.close()
                self._pubsub = None

    def clear(self):
        with self._lock:
            self._subscriptions.clear()
        self.close()


change_feed = ChangeFeed()


def publish_change(instance, table: str, created: bool, user_id=None, feed: Optional[ChangeFeed] = None):
    """Queue a change event for delivery after the current transaction commits"""
    feed = feed or change_feed
    event = RecordChangedEvent(
        aggregate_id=instance.pk,
        table=table,
        change=RecordChangedEvent.INSERT if created else RecordChangedEvent.UPDATE,
        record=serialize_record(instance),
        user_id=user_id,
    )
    transaction.on_commit(lambda: feed.publish(event))
    return event


class LiveRecordSet:
    """
    Local view of a table kept current from change events.

    Records are keyed by id; an incoming record replaces the local one
    only if its updated_at is not older (last write wins).
    """

    def __init__(self, records: Optional[Iterable[Dict[str, Any]]] = None):
        self._records: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()
        for record in records or ():
            self._records[str(record['id'])] = record

    @staticmethod
    def _timestamp(record: Dict[str, Any]):
        value = record.get('updated_at')
        if isinstance(value, str):
            return parse_datetime(value)
        return value

    def apply(self, payload: Dict[str, Any]) -> bool:
        """Merge one change payload; returns whether the local view changed"""
        record = payload.get('record', payload)
        key = str(record['id'])
        with self._lock:
            current = self._records.get(key)
            if current is not None:
                incoming_at, current_at = self._timestamp(record), self._timestamp(current)
                if incoming_at and current_at and incoming_at < current_at:
                    return False
            self._records[key] = record
        return True

    def get(self, record_id) -> Optional[Dict[str, Any]]:
        return self._records.get(str(record_id))

    def records(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._records.values())

    def __len__(self):
        return len(self._records)

    def follow(self, table: str, feed: Optional[ChangeFeed] = None, **filters) -> Subscription:
        """Subscribe this view to a table's changes"""
        return (feed or change_feed).subscribe(table, self.apply, **filters)
