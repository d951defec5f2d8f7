# apps/shop/tests/integration/test_wishlist.py
import pytest

from ...constants import GUEST_WISHLIST_SESSION_KEY
from ...models import WishlistItem
from ...services import WishlistService
from ..factories import ProductFactory


@pytest.mark.django_db
class TestWishlistService:

    def test_account_add_is_idempotent(self, customer, product):
        service = WishlistService(user=customer)

        assert service.add(product.pk) is True
        assert service.add(product.pk) is False
        assert WishlistItem.objects.filter(user=customer).count() == 1

    def test_guest_list_in_session(self, product):
        session = {}
        service = WishlistService(session=session)
        service.add(product.pk)
        service.add(product.pk)

        assert session[GUEST_WISHLIST_SESSION_KEY] == [str(product.pk)]
        assert service.list_products() == [product]

    def test_toggle(self, customer, product):
        service = WishlistService(user=customer)
        assert service.toggle(product.pk) is True
        assert service.toggle(product.pk) is False
        assert not service.contains(product.pk)

    def test_remove(self, customer, product):
        service = WishlistService(user=customer)
        service.add(product.pk)
        assert service.remove(product.pk) is True
        assert service.remove(product.pk) is False

    def test_merge_guest_wishlist(self, customer, product):
        other = ProductFactory()
        WishlistService(user=customer).add(product.pk)
        session = {GUEST_WISHLIST_SESSION_KEY: [str(product.pk), str(other.pk)]}

        added = WishlistService.merge_guest_wishlist(session, customer)

        assert added == 1
        assert set(WishlistService(user=customer).product_ids()) == {str(product.pk), str(other.pk)}
        assert GUEST_WISHLIST_SESSION_KEY not in session
