# apps/accounts/services.py

"""
Authentication collaborator: current user, admin check, sign up/in/out
"""

import logging
from typing import Dict, Optional

from django.contrib.auth import authenticate, get_user_model, login, logout
from django.db import transaction
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.core.permissions import user_is_admin
from apps.shop.domain.exceptions import NotFoundError, ValidationError

from .models import UserProfile

User = get_user_model()
logger = logging.getLogger(__name__)


def issue_tokens(user) -> Dict[str, str]:
    refresh = RefreshToken.for_user(user)
    refresh['email'] = user.email
    refresh['role'] = get_role(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


def get_role(user) -> str:
    profile = getattr(user, 'profile', None)
    return profile.role if profile else UserProfile.Role.CUSTOMER


def django_request(request):
    """Unwrap a DRF request so django.contrib.auth sees an HttpRequest"""
    return getattr(request, '_request', request)


class AuthService:
    """Thin wrapper over django.contrib.auth and SimpleJWT"""

    @staticmethod
    def get_current_user(request):
        user = getattr(request, 'user', None)
        if user is None or not user.is_authenticated:
            return None
        return user

    @staticmethod
    def is_admin(user_id) -> bool:
        try:
            user = User.objects.select_related('profile').get(pk=user_id)
        except User.DoesNotExist:
            return False
        return user_is_admin(user)

    @staticmethod
    @transaction.atomic
    def sign_up(email: str, password: str, full_name: str = '', phone: str = ''):
        email = (email or '').strip().lower()
        if not email or not password:
            raise ValidationError('Email and password are required')
        if User.objects.filter(email__iexact=email).exists():
            raise ValidationError('User with this email already exists', details={'email': email})

        user = User.objects.create_user(username=email, email=email, password=password)
        profile, _ = UserProfile.objects.get_or_create(user=user)
        profile.full_name = full_name
        profile.phone = phone
        profile.save(update_fields=['full_name', 'phone', 'updated_at'])

        logger.info('User registered', extra={'user_id': user.pk})
        return user

    @staticmethod
    def sign_in(request, email: str, password: str):
        """
        Authenticate and attach the user to the request session.

        Logging in through django.contrib.auth fires `user_logged_in`,
        which folds the guest cart and wishlist into the account.
        """
        email = (email or '').strip().lower()
        user = authenticate(django_request(request), username=email, password=password)
        if user is None:
            raise ValidationError('Invalid credentials')
        if not user.is_active:
            raise ValidationError('User account is disabled')

        login(django_request(request), user)
        logger.info('User signed in', extra={'user_id': user.pk})
        return user, issue_tokens(user)

    @staticmethod
    def sign_out(request, refresh_token: Optional[str] = None) -> bool:
        """Blacklist the refresh token, if any, and end the session"""
        blacklisted = False
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
                blacklisted = True
            except TokenError as e:
                logger.warning('Could not blacklist refresh token: %s', e)
        logout(django_request(request))
        return blacklisted

    @staticmethod
    def get_profile(user) -> UserProfile:
        try:
            return user.profile
        except UserProfile.DoesNotExist:
            raise NotFoundError('Profile not found', details={'user_id': user.pk})
