# rx_core/patients/admin.py
from __future__ import annotations

from django.contrib import admin

from rx_core.patients.models import Patient, PatientCodeSequence, PatientPII


class PatientPIIInline(admin.StackedInline):
    model = PatientPII
    can_delete = False
    extra = 0


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ("patient_code", "age_band", "created_by", "created_at")
    search_fields = ("patient_code", "pii__full_name", "pii__phone", "pii__national_id")
    readonly_fields = ("patient_code", "created_by", "created_at", "updated_at")
    inlines = [PatientPIIInline]
    ordering = ("-created_at",)

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(PatientCodeSequence)
class PatientCodeSequenceAdmin(admin.ModelAdmin):
    list_display = ("year", "last_value")
    ordering = ("-year",)
