# rx_core/iam/admin.py
from __future__ import annotations

from django.contrib import admin

from rx_core.iam.models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "display_name", "created_at", "updated_at")
    search_fields = ("display_name", "user__username", "user__email")
    autocomplete_fields = ("user",)
    ordering = ("-created_at",)
