# apps/shop/tests/conftest.py
import fakeredis
import pytest
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from rest_framework.test import APIClient

from ..constants import OrderStatus
from ..infrastructure.realtime import change_feed
from .factories import *


@pytest.fixture
def fixed_now():
    """A fixed instant for clock-dependent rules."""
    return datetime(2025, 6, 15, 12, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def clock(fixed_now):
    return lambda: fixed_now


@pytest.fixture
def customer(db):
    """Create a customer-role user."""
    return UserFactory()


@pytest.fixture
def admin(db):
    """Create an admin-role user."""
    return AdminUserFactory()


@pytest.fixture
def api_client():
    """Create API client."""
    return APIClient()


@pytest.fixture
def customer_client(customer):
    """API client authenticated as a customer."""
    client = APIClient()
    client.force_authenticate(user=customer)
    return client


@pytest.fixture
def admin_client(admin):
    """API client authenticated as an admin."""
    client = APIClient()
    client.force_authenticate(user=admin)
    return client


@pytest.fixture
def product(db):
    return ProductFactory(price=Decimal('500.00'), discounted_price=Decimal('400.00'), stock_quantity=10)


@pytest.fixture
def delivered_order(customer):
    """A delivered order of 2 units at 400 (list 500), paid 850."""
    order = OrderFactory(user=customer, status=OrderStatus.DELIVERED)
    OrderItemFactory(order=order, price=Decimal('500.00'), discounted_price=Decimal('400.00'), quantity=2)
    return order


@pytest.fixture
def checkout_data():
    return {
        'customer_name': 'Asha Rao',
        'customer_email': 'Asha@Example.com',
        'customer_phone': '9876543210',
        'address': '12 MG Road',
        'city': 'Pune',
        'state': 'MH',
        'pincode': '411001',
    }


@pytest.fixture
def redis_server():
    """One in-memory Redis shared by every client in a test."""
    return fakeredis.FakeServer()


@pytest.fixture
def redis_client(redis_server):
    return fakeredis.FakeRedis(server=redis_server, decode_responses=True)


@pytest.fixture(autouse=True)
def reset_change_feed(redis_client):
    change_feed.connect(redis_client)
    yield
    change_feed.clear()
