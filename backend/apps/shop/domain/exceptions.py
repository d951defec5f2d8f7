"""
Domain exceptions for the storefront core
"""

from typing import Any, Dict, Optional


class ShopError(Exception):
    """Base exception for storefront errors"""

    code = 'shop_error'

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ShopError):
    """Raised for invalid quantities, stock violations and missing checkout fields"""

    code = 'validation_error'


class NotFoundError(ShopError):
    """Raised when a requested record does not exist"""

    code = 'not_found'


class PermissionDenied(ShopError):
    """Raised when the actor may not perform the operation"""

    code = 'permission_denied'


class CouponError(ShopError):
    """Base class for coupon applicability failures"""

    code = 'coupon_error'

    def __init__(self, code_value: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.coupon_code = code_value
        super().__init__(message, details)


class CouponNotFound(CouponError):
    code = 'coupon_not_found'

    def __init__(self, code_value: str):
        super().__init__(code_value, 'Invalid discount code')


class CouponInactive(CouponError):
    code = 'coupon_inactive'

    def __init__(self, code_value: str):
        super().__init__(code_value, 'Discount code is not active')


class CouponExpired(CouponError):
    code = 'coupon_expired'

    def __init__(self, code_value: str):
        super().__init__(code_value, 'Discount code has expired')


class CouponUsageLimitReached(CouponError):
    code = 'coupon_usage_limit_reached'

    def __init__(self, code_value: str):
        super().__init__(code_value, 'Discount code usage limit reached')


class CouponBelowMinimum(CouponError):
    code = 'coupon_below_minimum'

    def __init__(self, code_value: str, minimum):
        self.minimum = minimum
        super().__init__(
            code_value,
            f'Minimum purchase amount of {minimum} required',
            details={'min_purchase_amount': str(minimum)},
        )


class InvalidTransition(ShopError):
    """Raised when a state machine rule is violated"""

    code = 'invalid_transition'

    def __init__(self, entity: str, current: str, requested: str):
        self.entity = entity
        self.current = current
        self.requested = requested
        super().__init__(
            f'Cannot move {entity} from {current} to {requested}',
            details={'current': current, 'requested': requested},
        )


class AlreadyRefunded(ShopError):
    """Raised when a refund is processed a second time"""

    code = 'already_refunded'

    def __init__(self, return_number: str = ''):
        self.return_number = return_number
        label = f'Return {return_number}' if return_number else 'Return'
        super().__init__(f'{label} has already been refunded')
