# apps/shop/tests/unit/test_coupons.py
import pytest
from datetime import timedelta
from decimal import Decimal

from ...constants import DiscountType
from ...domain.entities import Coupon
from ...domain.exceptions import (
    CouponBelowMinimum, CouponExpired, CouponInactive, CouponNotFound,
    CouponUsageLimitReached,
)
from ...domain.services import CouponValidator


@pytest.fixture
def make_coupon(fixed_now):
    def _make(**overrides):
        fields = {
            'code': 'SAVE20',
            'kind': DiscountType.PERCENTAGE,
            'value': Decimal('20'),
            'valid_from': fixed_now - timedelta(days=7),
        }
        fields.update(overrides)
        return Coupon(**fields)
    return _make


@pytest.fixture
def validator_for(clock):
    def _validator(*coupons):
        index = {coupon.code: coupon for coupon in coupons}
        return CouponValidator(lookup=index.get, clock=clock)
    return _validator


class TestCouponValidation:
    """Checks run in order and stop at the first failure."""

    def test_valid_coupon_returned(self, make_coupon, validator_for):
        coupon = make_coupon()
        assert validator_for(coupon).validate('SAVE20', 500) == coupon

    def test_code_is_case_insensitive(self, make_coupon, validator_for):
        coupon = make_coupon()
        assert validator_for(coupon).validate('  save20 ', 500) == coupon

    def test_unknown_code(self, validator_for):
        with pytest.raises(CouponNotFound) as exc:
            validator_for().validate('nope', 500)
        assert exc.value.coupon_code == 'NOPE'

    def test_blank_code_not_found(self, validator_for):
        with pytest.raises(CouponNotFound):
            validator_for().validate('   ', 500)

    def test_inactive(self, make_coupon, validator_for):
        with pytest.raises(CouponInactive):
            validator_for(make_coupon(is_active=False)).validate('SAVE20', 500)

    def test_not_started_yet_is_inactive(self, make_coupon, validator_for, fixed_now):
        coupon = make_coupon(valid_from=fixed_now + timedelta(hours=1))
        with pytest.raises(CouponInactive):
            validator_for(coupon).validate('SAVE20', 500)

    def test_expired_regardless_of_other_fields(self, make_coupon, validator_for, fixed_now):
        coupon = make_coupon(
            valid_until=fixed_now - timedelta(seconds=1),
            usage_limit=100, usage_count=0, min_purchase_amount=Decimal('10'),
        )
        with pytest.raises(CouponExpired):
            validator_for(coupon).validate('SAVE20', 500)

    def test_valid_until_in_future(self, make_coupon, validator_for, fixed_now):
        coupon = make_coupon(valid_until=fixed_now + timedelta(days=1))
        assert validator_for(coupon).validate('SAVE20', 500) == coupon

    def test_inactive_checked_before_expiry(self, make_coupon, validator_for, fixed_now):
        coupon = make_coupon(is_active=False, valid_until=fixed_now - timedelta(days=1))
        with pytest.raises(CouponInactive):
            validator_for(coupon).validate('SAVE20', 500)

    def test_usage_limit_reached(self, make_coupon, validator_for):
        coupon = make_coupon(usage_limit=5, usage_count=5)
        with pytest.raises(CouponUsageLimitReached):
            validator_for(coupon).validate('SAVE20', 500)

    def test_expiry_checked_before_usage(self, make_coupon, validator_for, fixed_now):
        coupon = make_coupon(usage_limit=1, usage_count=1, valid_until=fixed_now - timedelta(days=1))
        with pytest.raises(CouponExpired):
            validator_for(coupon).validate('SAVE20', 500)

    def test_below_minimum(self, make_coupon, validator_for):
        coupon = make_coupon(min_purchase_amount=Decimal('1000'))
        with pytest.raises(CouponBelowMinimum) as exc:
            validator_for(coupon).validate('SAVE20', Decimal('999.99'))
        assert exc.value.details == {'min_purchase_amount': '1000'}

    def test_exactly_minimum_passes(self, make_coupon, validator_for):
        coupon = make_coupon(min_purchase_amount=Decimal('1000'))
        assert validator_for(coupon).validate('SAVE20', Decimal('1000')) == coupon

    def test_validation_does_not_count_usage(self, make_coupon, validator_for):
        coupon = make_coupon(usage_limit=1)
        validator = validator_for(coupon)
        validator.validate('SAVE20', 500)
        validator.validate('SAVE20', 500)
        assert coupon.usage_count == 0


class TestDiscountComputation:

    def test_percentage_cap(self, make_coupon):
        coupon = make_coupon(value=Decimal('50'), max_discount_amount=Decimal('100'))
        assert CouponValidator.discount_for(coupon, Decimal('1000')) == Decimal('100')

    def test_percentage_under_cap(self, make_coupon):
        coupon = make_coupon(value=Decimal('10'), max_discount_amount=Decimal('100'))
        assert CouponValidator.discount_for(coupon, Decimal('500')) == Decimal('50')

    def test_fixed_clamped_to_amount(self, make_coupon):
        coupon = make_coupon(kind=DiscountType.FIXED, value=Decimal('500'))
        assert CouponValidator.discount_for(coupon, Decimal('300')) == Decimal('300')

    def test_fixed_ignores_max_discount(self, make_coupon):
        coupon = make_coupon(kind=DiscountType.FIXED, value=Decimal('150'), max_discount_amount=Decimal('100'))
        assert CouponValidator.discount_for(coupon, Decimal('300')) == Decimal('150')

    def test_zero_amount(self, make_coupon):
        assert CouponValidator.discount_for(make_coupon(), Decimal('0')) == Decimal('0')

    def test_apply_returns_final_amount(self, make_coupon, validator_for):
        result = validator_for(make_coupon()).apply('save20', Decimal('800'))
        assert result['discount_amount'] == Decimal('160')
        assert result['final_amount'] == Decimal('640')
