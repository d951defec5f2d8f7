# apps/accounts/admin.py

from django.contrib import admin

from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'full_name', 'role', 'phone', 'created_at']
    list_filter = ['role']
    search_fields = ['full_name', 'user__email', 'phone']
