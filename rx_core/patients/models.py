# rx_core/patients/models.py
from django.conf import settings
from django.db import models

from rx_core.common.models import UUIDModel


class Patient(UUIDModel):
    """
    Registry entry. Identifying details live in PatientPII so that redacted
    reads never have to touch them.
    """
    patient_code = models.CharField(max_length=16, unique=True, editable=False)
    age_band = models.CharField(max_length=32)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="patients_created",
    )

    class Meta:
        db_table = "patients_patient"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.patient_code


class PatientPII(models.Model):
    patient = models.OneToOneField(
        Patient,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="pii",
    )
    full_name = models.CharField(max_length=255)
    phone = models.CharField(max_length=32)
    address = models.TextField()
    national_id = models.CharField(max_length=15)

    class Meta:
        db_table = "patients_patient_pii"

    def __str__(self) -> str:
        return f"PII<{self.patient_id}>"


class PatientCodeSequence(models.Model):
    """
    Per-year counter behind patient codes. Locked with SELECT ... FOR UPDATE.
    """
    year = models.PositiveIntegerField(primary_key=True)
    last_value = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "patients_code_sequence"

    def __str__(self) -> str:
        return f"{self.year}:{self.last_value}"
