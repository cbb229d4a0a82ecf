from django.contrib import admin

from rx_core.catalog.models import Medicine


@admin.register(Medicine)
class MedicineAdmin(admin.ModelAdmin):
    list_display = ("name", "strength", "form", "is_active")
    list_filter = ("is_active", "form")
    search_fields = ("name",)
    ordering = ("name",)
