# apps/core/exceptions.py

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from apps.shop.domain.exceptions import (
    AlreadyRefunded, CouponError, InvalidTransition, NotFoundError,
    PermissionDenied, ShopError, ValidationError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    CouponError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    PermissionDenied: status.HTTP_403_FORBIDDEN,
    InvalidTransition: status.HTTP_409_CONFLICT,
    AlreadyRefunded: status.HTTP_409_CONFLICT,
}


def status_code_for(exc: ShopError) -> int:
    for klass in type(exc).__mro__:
        if klass in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[klass]
    return status.HTTP_400_BAD_REQUEST


def error_payload(exc: ShopError) -> dict:
    payload = {'detail': exc.message, 'code': exc.code}
    if exc.details:
        payload['details'] = exc.details
    return payload


def api_exception_handler(exc, context):
    """Map storefront errors onto HTTP responses, defer everything else to DRF"""
    if not isinstance(exc, ShopError):
        return exception_handler(exc, context)

    status_code = status_code_for(exc)
    view = context.get('view')
    view_name = view.__class__.__name__ if view else None

    if isinstance(exc, InvalidTransition):
        logger.warning(
            'Rejected state transition: %s', exc.message,
            extra={'view': view_name, 'entity': exc.entity,
                   'current': exc.current, 'requested': exc.requested},
        )
    elif isinstance(exc, CouponError):
        logger.info('Coupon rejected: %s', exc.code, extra={'coupon_code': exc.coupon_code})

    return Response(error_payload(exc), status=status_code)
