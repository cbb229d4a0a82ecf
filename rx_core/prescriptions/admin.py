# rx_core/prescriptions/admin.py
from django.contrib import admin

from rx_core.prescriptions.models import Prescription, PrescriptionItem


class PrescriptionItemInline(admin.TabularInline):
    model = PrescriptionItem
    extra = 0
    can_delete = False
    readonly_fields = ("position", "medicine", "dosage", "frequency", "duration", "remarks")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Prescription)
class PrescriptionAdmin(admin.ModelAdmin):
    """Read-only: lifecycle changes go through the API so they are audited."""
    list_display = ("id", "status", "doctor", "patient", "issued_on", "dispensed_at")
    list_filter = ("status",)
    search_fields = ("id", "patient__patient_code", "doctor__email")
    inlines = [PrescriptionItemInline]
    ordering = ("-issued_on",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
