# apps/accounts/models.py

from django.conf import settings
from django.db import models

from apps.core.models import TimestampedModel


class UserProfile(TimestampedModel):
    """Storefront profile attached to every auth user"""

    class Role(models.TextChoices):
        ADMIN = 'admin', 'Admin'
        CUSTOMER = 'customer', 'Customer'

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='profile'
    )
    full_name = models.CharField(max_length=255, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.CUSTOMER)
    phone = models.CharField(max_length=20, blank=True)
    avatar_url = models.URLField(blank=True)

    # Back-office notes about the customer, edited by admins only
    customer_notes = models.TextField(blank=True)

    class Meta:
        db_table = 'accounts_user_profile'
        verbose_name = 'User Profile'

    def __str__(self):
        return f"{self.full_name or self.user.get_username()} ({self.role})"

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN
