# rx_core/pad/models.py
from django.conf import settings
from django.db import models

from rx_core.common.models import UUIDModel


class RawPrescription(UUIDModel):
    """
    Free-form transcription of a paper prescription pad.
    Not linked to the patient registry; every field is optional.
    """
    doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="raw_prescriptions",
    )

    patient_name = models.CharField(max_length=255, blank=True, default="")
    patient_age = models.CharField(max_length=32, blank=True, default="")
    patient_gender = models.CharField(max_length=32, blank=True, default="")
    patient_cnic = models.CharField(max_length=32, blank=True, default="")
    patient_phone = models.CharField(max_length=32, blank=True, default="")
    patient_address = models.TextField(blank=True, default="")

    diagnosis = models.TextField(blank=True, default="")
    tests = models.TextField(blank=True, default="")
    recommendations = models.TextField(blank=True, default="")

    class Meta:
        db_table = "pad_raw_prescription"
        indexes = [
            models.Index(fields=["doctor", "created_at"], name="pad_raw_doctor_created_idx"),
        ]

    def __str__(self) -> str:
        return f"RawPrescription {self.id}"


class RawPrescriptionMedicine(models.Model):
    raw_prescription = models.ForeignKey(RawPrescription, on_delete=models.CASCADE, related_name="medicines")
    medicine_order = models.PositiveSmallIntegerField()
    medicine_name = models.CharField(max_length=255)

    # morning / noon / night
    frequency1 = models.BooleanField(default=False)
    frequency2 = models.BooleanField(default=False)
    frequency3 = models.BooleanField(default=False)

    class Meta:
        db_table = "pad_raw_prescription_medicine"
        ordering = ["medicine_order"]
        constraints = [
            models.UniqueConstraint(fields=["raw_prescription", "medicine_order"], name="uq_pad_medicine_order"),
        ]

    def __str__(self) -> str:
        return self.medicine_name
