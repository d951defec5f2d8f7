from .base import DomainService, PolicyService
from .coupon_service import CouponValidator
from .order_workflow import OrderWorkflow
from .pricing_service import OrderTotals, PricingService
from .return_workflow import ReturnWorkflow

__all__ = [
    'DomainService',
    'PolicyService',
    'CouponValidator',
    'PricingService',
    'OrderTotals',
    'OrderWorkflow',
    'ReturnWorkflow',
]
