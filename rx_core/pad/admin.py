from django.contrib import admin

from rx_core.pad.models import RawPrescription, RawPrescriptionMedicine


class RawPrescriptionMedicineInline(admin.TabularInline):
    model = RawPrescriptionMedicine
    extra = 0


@admin.register(RawPrescription)
class RawPrescriptionAdmin(admin.ModelAdmin):
    list_display = ("id", "doctor", "patient_name", "created_at")
    search_fields = ("patient_name", "doctor__email")
    inlines = [RawPrescriptionMedicineInline]
    ordering = ("-created_at",)
