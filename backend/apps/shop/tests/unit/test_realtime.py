# apps/shop/tests/unit/test_realtime.py
import threading

import fakeredis
import pytest

from ...domain.events import RecordChangedEvent
from ...infrastructure.realtime import ChangeFeed, LiveRecordSet


def event(record, table='orders', user_id=None, change=RecordChangedEvent.UPDATE):
    return RecordChangedEvent(
        aggregate_id=record['id'], table=table, change=change, record=record, user_id=user_id
    )


@pytest.fixture
def feed(redis_client):
    return ChangeFeed(client=redis_client, listen_in_thread=False)


class TestChangeFeed:

    def test_delivers_to_matching_table(self, feed):
        received = []
        feed.subscribe('orders', received.append)
        feed.subscribe('returns', lambda payload: pytest.fail('wrong table'))

        assert feed.publish(event({'id': '1', 'status': 'pending'})) == 1
        assert feed.drain() == 1
        assert received == [{'table': 'orders', 'event_type': 'UPDATE', 'record': {'id': '1', 'status': 'pending'}}]

    def test_one_channel_per_table(self, feed, redis_client):
        feed.subscribe('orders', lambda payload: None)
        feed.subscribe('orders', lambda payload: None)
        feed.subscribe('returns', lambda payload: None)

        assert sorted(redis_client.pubsub_channels()) == ['changes:orders', 'changes:returns']

    def test_user_filter(self, feed):
        received = []
        feed.subscribe('orders', received.append, user_id=5)

        feed.publish(event({'id': '1'}, user_id=6))
        feed.publish(event({'id': '2'}, user_id=5))
        feed.drain()

        assert [p['record']['id'] for p in received] == ['2']

    def test_record_filter(self, feed):
        received = []
        feed.subscribe('returns', received.append, record_id='r-2')

        feed.publish(event({'id': 'r-1'}, table='returns'))
        feed.publish(event({'id': 'r-2'}, table='returns'))
        feed.drain()

        assert len(received) == 1

    def test_unsubscribe_stops_delivery(self, feed, redis_client):
        received = []
        subscription = feed.subscribe('orders', received.append)

        assert feed.unsubscribe(subscription) is True
        assert feed.unsubscribe(subscription) is False
        feed.publish(event({'id': '1'}))
        feed.drain()
        assert received == []
        assert redis_client.pubsub_channels() == []

    def test_failing_subscriber_does_not_block_others(self, feed):
        received = []

        def broken(payload):
            raise RuntimeError('boom')

        feed.subscribe('orders', broken)
        feed.subscribe('orders', received.append)
        feed.publish(event({'id': '1'}))

        assert feed.drain() == 1
        assert len(received) == 1

    def test_reaches_subscriber_in_another_process(self, redis_server):
        web = ChangeFeed(client=fakeredis.FakeRedis(server=redis_server, decode_responses=True),
                         listen_in_thread=False)
        dashboard = ChangeFeed(client=fakeredis.FakeRedis(server=redis_server, decode_responses=True),
                               listen_in_thread=False)
        received = []
        dashboard.subscribe('orders', received.append)

        assert web.publish(event({'id': '1', 'status': 'shipped'})) == 1
        dashboard.drain()

        assert received[0]['record'] == {'id': '1', 'status': 'shipped'}
        dashboard.clear()

    def test_listener_thread_delivers(self, redis_client):
        feed = ChangeFeed(client=redis_client, listen_in_thread=True)
        arrived = threading.Event()
        feed.subscribe('orders', lambda payload: arrived.set())
        try:
            feed.publish(event({'id': '1'}))
            assert arrived.wait(timeout=5)
        finally:
            feed.clear()

    def test_publish_survives_redis_outage(self):
        server = fakeredis.FakeServer()
        server.connected = False
        feed = ChangeFeed(client=fakeredis.FakeRedis(server=server), listen_in_thread=False)

        assert feed.publish(event({'id': '1'})) == 0

    def test_channel_prefix(self, redis_client):
        feed = ChangeFeed(client=redis_client, channel_prefix='shop-a', listen_in_thread=False)
        feed.subscribe('returns', lambda payload: None)

        assert redis_client.pubsub_channels() == ['shop-a:returns']
        feed.clear()

class TestLiveRecordSet:

    def test_newer_update_wins(self):
        view = LiveRecordSet([{'id': '1', 'status': 'pending', 'updated_at': '2025-06-15T10:00:00Z'}])
        changed = view.apply({'record': {'id': '1', 'status': 'shipped', 'updated_at': '2025-06-15T11:00:00Z'}})

        assert changed is True
        assert view.get('1')['status'] == 'shipped'

    def test_stale_update_ignored(self):
        view = LiveRecordSet([{'id': '1', 'status': 'shipped', 'updated_at': '2025-06-15T11:00:00Z'}])
        changed = view.apply({'record': {'id': '1', 'status': 'pending', 'updated_at': '2025-06-15T10:00:00Z'}})

        assert changed is False
        assert view.get('1')['status'] == 'shipped'

    def test_insert_adds_record(self):
        view = LiveRecordSet()
        view.apply({'table': 'orders', 'event_type': 'INSERT', 'record': {'id': 9, 'updated_at': None}})
        assert len(view) == 1
        assert view.get(9) is not None

    def test_follow_tracks_feed(self, feed):
        view = LiveRecordSet()
        view.follow('orders', feed=feed)

        feed.publish(event({'id': '1', 'status': 'processing', 'updated_at': '2025-06-15T10:00:00Z'}))
        feed.drain()
        assert view.records() == [{'id': '1', 'status': 'processing', 'updated_at': '2025-06-15T10:00:00Z'}]
