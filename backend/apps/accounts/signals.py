# apps/accounts/signals.py

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import UserProfile


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_user_profile(sender, instance, created, **kwargs):
    """Every new user gets a customer profile"""
    if created:
        full_name = instance.get_full_name() if hasattr(instance, 'get_full_name') else ''
        UserProfile.objects.get_or_create(user=instance, defaults={'full_name': full_name})
