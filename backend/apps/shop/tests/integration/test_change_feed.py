# apps/shop/tests/integration/test_change_feed.py
import json

import pytest

from ...constants import OrderStatus
from ...infrastructure.realtime import ORDERS_TABLE, RETURNS_TABLE, LiveRecordSet, change_feed
from ...services import OrderService
from ..factories import OrderFactory, ReturnFactory


def next_message(pubsub):
    for _ in range(5):
        message = pubsub.get_message(timeout=1)
        if message and message['type'] == 'message':
            return message


@pytest.mark.django_db
class TestChangeFeedPublishing:

    def test_order_insert_published_after_commit(self, customer, django_capture_on_commit_callbacks):
        received = []
        change_feed.subscribe(ORDERS_TABLE, received.append, user_id=customer.pk)

        with django_capture_on_commit_callbacks(execute=True):
            order = OrderFactory(user=customer)
            change_feed.drain()
            assert received == []
        change_feed.drain()

        assert len(received) == 1
        assert received[0]['event_type'] == 'INSERT'
        assert received[0]['record']['id'] == str(order.pk)

    def test_change_lands_on_redis_channel(self, customer, redis_client, django_capture_on_commit_callbacks):
        pubsub = redis_client.pubsub()
        pubsub.subscribe('changes:orders')

        with django_capture_on_commit_callbacks(execute=True):
            order = OrderFactory(user=customer)

        body = json.loads(next_message(pubsub)['data'])
        assert body['user_id'] == str(customer.pk)
        assert body['payload']['record']['order_number'] == order.order_number
        pubsub.close()

    def test_other_users_changes_filtered(self, customer, django_capture_on_commit_callbacks):
        received = []
        change_feed.subscribe(ORDERS_TABLE, received.append, user_id=customer.pk)

        with django_capture_on_commit_callbacks(execute=True):
            OrderFactory()
        change_feed.drain()

        assert received == []

    def test_live_view_follows_status_changes(self, admin, customer, django_capture_on_commit_callbacks):
        order = OrderFactory(user=customer)
        view = LiveRecordSet()
        view.follow(ORDERS_TABLE, record_id=order.pk)

        with django_capture_on_commit_callbacks(execute=True):
            OrderService().update_status(order, OrderStatus.PROCESSING, actor=admin)
        change_feed.drain()

        assert view.get(order.pk)['status'] == OrderStatus.PROCESSING

    def test_returns_published_on_their_own_table(self, django_capture_on_commit_callbacks):
        orders, returns = [], []
        change_feed.subscribe(ORDERS_TABLE, orders.append)
        change_feed.subscribe(RETURNS_TABLE, returns.append)
        ret = ReturnFactory()

        with django_capture_on_commit_callbacks(execute=True):
            ret.admin_notes = 'checked'
            ret.save()
        change_feed.drain()

        assert orders == []
        assert [payload['event_type'] for payload in returns] == ['UPDATE']
