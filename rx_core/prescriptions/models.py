# rx_core/prescriptions/models.py
from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from rx_core.common.models import UUIDModel


class PrescriptionStatus(models.TextChoices):
    DRAFT = "DRAFT", "Draft"
    FINAL = "FINAL", "Final"


class Prescription(UUIDModel):
    """
    Lifecycle: DRAFT -> FINAL -> dispensed (dispensed_at set once).

    All transitions are conditional UPDATEs in PrescriptionService; nothing
    here should be mutated through save() outside of creation.
    """
    patient = models.ForeignKey(
        "patients.Patient",
        on_delete=models.PROTECT,
        related_name="prescriptions",
    )
    doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="prescriptions_authored",
    )

    diagnosis = models.TextField()
    recommendation = models.TextField()
    notes = models.TextField(blank=True, default="")

    status = models.CharField(
        max_length=16,
        choices=PrescriptionStatus.choices,
        default=PrescriptionStatus.DRAFT,
        db_index=True,
    )
    issued_on = models.DateTimeField(default=timezone.now, db_index=True)

    dispensed_at = models.DateTimeField(null=True, blank=True)
    dispensed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="prescriptions_dispensed",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "prescriptions_prescription"
        constraints = [
            models.CheckConstraint(
                condition=Q(dispensed_at__isnull=True) | Q(status=PrescriptionStatus.FINAL),
                name="ck_rx_dispensed_requires_final",
            ),
        ]
        indexes = [
            models.Index(fields=["doctor", "issued_on"], name="rx_doctor_issued_idx"),
            models.Index(fields=["status", "dispensed_at"], name="rx_status_dispensed_idx"),
        ]

    def __str__(self) -> str:
        return f"Prescription {self.id} ({self.status})"

    @property
    def is_dispensed(self) -> bool:
        return self.dispensed_at is not None


class PrescriptionItem(models.Model):
    prescription = models.ForeignKey(Prescription, on_delete=models.CASCADE, related_name="items")
    position = models.PositiveSmallIntegerField()

    medicine = models.ForeignKey("catalog.Medicine", on_delete=models.PROTECT, related_name="prescription_items")
    dosage = models.CharField(max_length=128)
    frequency = models.CharField(max_length=128)
    duration = models.CharField(max_length=128)
    remarks = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "prescriptions_prescription_item"
        ordering = ["position"]
        constraints = [
            models.UniqueConstraint(fields=["prescription", "position"], name="uq_rx_item_position"),
        ]

    def __str__(self) -> str:
        return f"{self.prescription_id}#{self.position}"
