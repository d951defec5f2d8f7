# apps/accounts/tests/test_auth.py
import pytest
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import UserProfile
from apps.shop.models import CartItem, WishlistItem
from apps.shop.tests.factories import AdminUserFactory, ProductFactory, UserFactory

PASSWORD = 'pass12345'


@pytest.fixture
def api_client():
    return APIClient()


@pytest.mark.django_db
class TestRegistration:

    def test_register_creates_customer_profile(self, api_client):
        response = api_client.post('/api/v1/auth/register/', {
            'email': 'New.User@Example.com',
            'password': 'Lotus-Garden-42',
            'full_name': 'New User',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user']['email'] == 'new.user@example.com'
        assert response.data['user']['role'] == UserProfile.Role.CUSTOMER
        assert response.data['user']['is_admin'] is False
        assert set(response.data['tokens']) == {'access', 'refresh'}

    def test_duplicate_email(self, api_client):
        UserFactory(username='taken@example.com', email='taken@example.com')
        response = api_client.post('/api/v1/auth/register/', {
            'email': 'TAKEN@example.com', 'password': 'Lotus-Garden-42',
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestLogin:

    def test_login_returns_tokens(self, api_client):
        user = UserFactory()
        response = api_client.post('/api/v1/auth/login/', {'email': user.email, 'password': PASSWORD}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['id'] == user.pk
        assert 'access' in response.data['tokens']

    def test_wrong_password(self, api_client):
        user = UserFactory()
        response = api_client.post('/api/v1/auth/login/', {'email': user.email, 'password': 'nope'}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_guest_state_merged_on_login(self, api_client):
        user = UserFactory()
        product = ProductFactory(stock_quantity=10)
        CartItem.objects.create(user=user, product=product, quantity=8)

        api_client.post('/api/v1/cart/items/', {'product_id': str(product.pk), 'quantity': 4}, format='json')
        api_client.post('/api/v1/wishlist/', {'product_id': str(product.pk)}, format='json')
        api_client.post('/api/v1/auth/login/', {'email': user.email, 'password': PASSWORD}, format='json')

        assert CartItem.objects.get(user=user, product=product).quantity == 10
        assert WishlistItem.objects.filter(user=user, product=product).exists()
        assert api_client.get('/api/v1/cart/').data['item_count'] == 10


@pytest.mark.django_db
class TestProfile:

    def test_me(self, api_client):
        admin = AdminUserFactory()
        api_client.force_authenticate(user=admin)

        response = api_client.get('/api/v1/auth/me/')
        assert response.data['is_admin'] is True
        assert response.data['role'] == UserProfile.Role.ADMIN

    def test_admin_factory_promotes_profile(self):
        admin = AdminUserFactory()
        customer = AdminUserFactory(role=UserProfile.Role.CUSTOMER)

        assert UserProfile.objects.get(user=admin).role == UserProfile.Role.ADMIN
        assert UserProfile.objects.get(user=customer).role == UserProfile.Role.CUSTOMER
        assert UserFactory(role=UserProfile.Role.ADMIN).profile.role == UserProfile.Role.ADMIN

    def test_update_profile_keeps_role(self, api_client):
        user = UserFactory()
        api_client.force_authenticate(user=user)

        response = api_client.patch('/api/v1/auth/me/', {'full_name': 'Renamed', 'role': 'admin'}, format='json')
        assert response.data['full_name'] == 'Renamed'
        assert response.data['role'] == UserProfile.Role.CUSTOMER

    def test_me_requires_auth(self, api_client, db):
        assert api_client.get('/api/v1/auth/me/').status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_blacklists_refresh(self, api_client):
        user = UserFactory()
        tokens = api_client.post('/api/v1/auth/login/', {'email': user.email, 'password': PASSWORD},
                             format='json').data['tokens']
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = api_client.post('/api/v1/auth/logout/', {'refresh_token': tokens['refresh']}, format='json')
        assert response.data['message'] == 'Successfully logged out'

        response = api_client.post('/api/v1/auth/token/refresh/', {'refresh': tokens['refresh']}, format='json')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
