import logging
from abc import ABC
from datetime import datetime
from typing import Callable, Optional

from django.utils import timezone

Clock = Callable[[], datetime]


class DomainService(ABC):
    """Base class for stateless domain services"""

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or timezone.now
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def now(self) -> datetime:
        return self.clock()


class PolicyService(DomainService):
    """Domain service that enforces a business rule set"""
