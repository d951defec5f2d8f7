"""
Base service class for storefront data-access services
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone

from .. import conf
from ..domain.exceptions import NotFoundError, ValidationError
from ..domain.value_objects import Money


class BaseShopService:
    """Base service class for all storefront services"""

    def __init__(self, clock=None):
        self.clock = clock or timezone.now
        self.logger = logging.getLogger(f"{__name__.rsplit('.', 1)[0]}.{self.__class__.__name__}")

    def log_info(self, message: str, context: Optional[Dict] = None):
        """Log informational message with context"""
        self.logger.info(message, extra={'context': context or {}})

    def log_warning(self, message: str, context: Optional[Dict] = None):
        """Log warning message with context"""
        self.logger.warning(message, extra={'context': context or {}})

    def log_error(self, message: str, error: Optional[Exception] = None, context: Optional[Dict] = None):
        """Log error message with context"""
        self.logger.error(
            message,
            extra={
                'context': context or {},
                'error': str(error) if error else None
            },
            exc_info=bool(error)
        )

    def get_current_timestamp(self):
        return self.clock()

    def format_currency(self, amount: Decimal) -> str:
        """Format currency amount for display"""
        return str(Money(amount, conf.currency()))

    def validate_required_fields(self, data: Dict, required_fields: List[str]) -> bool:
        """Validate that required fields are present in data"""
        missing_fields = [field for field in required_fields if not str(data.get(field) or '').strip()]
        if missing_fields:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing_fields)}",
                details={'missing_fields': missing_fields}
            )
        return True

    def get_object(self, queryset, label: str, **lookup):
        """Fetch one row or raise NotFoundError"""
        try:
            return queryset.get(**lookup)
        except (queryset.model.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError(f"{label} not found", details={k: str(v) for k, v in lookup.items()})
