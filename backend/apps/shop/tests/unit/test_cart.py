# apps/shop/tests/unit/test_cart.py
import pytest
from decimal import Decimal

from ...domain.entities import Cart, LineItem, make_line_key
from ...domain.exceptions import ValidationError


def item(product_id='P', quantity=1, stock=10, color='Red', size='M', price='100'):
    return LineItem(
        product_id=product_id,
        unit_price=Decimal(price),
        quantity=quantity,
        available_stock=stock,
        color=color,
        size=size,
    )


class TestAddOrMerge:

    def test_same_identity_merges(self):
        cart = Cart([item(quantity=3, stock=10)]).add_or_merge(item(quantity=2, stock=10))
        assert len(cart) == 1
        assert cart.lines[0].quantity == 5

    def test_merge_clamped_to_stock(self):
        cart = Cart([item(quantity=3, stock=4)]).add_or_merge(item(quantity=2, stock=4))
        assert len(cart) == 1
        assert cart.lines[0].quantity == 4

    def test_different_variant_appends(self):
        cart = Cart([item(color='Red')]).add_or_merge(item(color='Blue'))
        assert len(cart) == 2
        assert cart.find('P', 'Blue', 'M') is not None

    def test_new_line_clamped_to_stock(self):
        cart = Cart().add_or_merge(item(quantity=50, stock=7))
        assert cart.lines[0].quantity == 7

    def test_missing_variant_matches_blank(self):
        cart = Cart([item(color=None, size=None)]).add_or_merge(item(color='', size=''))
        assert len(cart) == 1
        assert cart.lines[0].key == make_line_key('P')

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            Cart().add_or_merge(item(quantity=0))

    def test_out_of_stock_rejected(self):
        with pytest.raises(ValidationError):
            Cart().add_or_merge(item(stock=0))

    def test_original_cart_unchanged(self):
        original = Cart([item(quantity=1)])
        original.add_or_merge(item(quantity=2))
        assert original.lines[0].quantity == 1


class TestUpdateAndRemove:

    def test_update_clamps_to_stock(self):
        cart = Cart([item(quantity=1, stock=3)])
        line_id = cart.lines[0].line_id
        assert cart.update_quantity(line_id, 9).lines[0].quantity == 3

    def test_update_below_one_is_noop(self):
        cart = Cart([item(quantity=2)])
        assert cart.update_quantity(cart.lines[0].line_id, 0) == cart

    def test_update_unknown_line_is_noop(self):
        cart = Cart([item(quantity=2)])
        assert cart.update_quantity('nope', 5) == cart

    def test_remove_filters_line(self):
        cart = Cart([item(color='Red'), item(color='Blue')])
        remaining = cart.remove_line(cart.lines[0].line_id)
        assert [line.color for line in remaining] == ['Blue']

    def test_line_id_encodes_identity(self):
        assert item(product_id='abc', color='Red', size='M').line_id == 'abc:Red:M'


class TestGuestMerge:

    def test_quantities_summed_and_clamped(self):
        account = Cart([item(quantity=3, stock=5)])
        guest = Cart([item(quantity=4, stock=5), item(product_id='Q', quantity=1)])
        merged = account.merge(guest)

        assert len(merged) == 2
        assert merged.find('P', 'Red', 'M').quantity == 5
        assert merged.find('Q', 'Red', 'M').quantity == 1

    def test_out_of_stock_guest_lines_dropped(self):
        merged = Cart().merge(Cart([item(stock=0, quantity=1)]))
        assert merged.is_empty


class TestCartTotals:

    def test_subtotal_and_count(self):
        cart = Cart([
            item(product_id='A', quantity=2, price='100'),
            LineItem(product_id='B', unit_price=Decimal('500'), discounted_price=Decimal('400'),
                     quantity=1, available_stock=5),
        ])
        assert cart.subtotal == Decimal('600')
        assert cart.item_count == 3

    def test_discounted_price_must_be_lower(self):
        with pytest.raises(ValidationError):
            LineItem(product_id='A', unit_price=Decimal('100'), discounted_price=Decimal('100'),
                     quantity=1, available_stock=1)

    def test_stock_violations(self):
        cart = Cart([item(product_id='A', quantity=5, stock=2)])
        assert [line.product_id for line in cart.stock_violations()] == ['A']
