# apps/core/permissions.py

from rest_framework import permissions


def user_is_admin(user) -> bool:
    if not user or not user.is_authenticated:
        return False
    if user.is_superuser:
        return True
    profile = getattr(user, 'profile', None)
    return bool(profile and profile.role == 'admin')


class IsAdmin(permissions.BasePermission):
    """
    Allows access only to users whose profile role is admin.
    """
    message = 'Admin access required.'

    def has_permission(self, request, view):
        return user_is_admin(request.user)


class IsOwnerOrAdmin(permissions.BasePermission):
    """
    Object-level permission: the record's owner or an admin.
    """

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        if user_is_admin(request.user):
            return True
        owner_id = getattr(obj, 'user_id', None)
        return owner_id is not None and owner_id == request.user.pk
