# rx_core/catalog/models.py
from django.db import models

from rx_core.common.models import TimeStampedModel


class Medicine(TimeStampedModel):
    """
    Catalog entry, unique on (name, strength, form).
    Rows are created on demand the first time a prescription names them.
    """
    name = models.CharField(max_length=255, db_index=True)
    strength = models.CharField(max_length=64)
    form = models.CharField(max_length=64)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "catalog_medicine"
        constraints = [
            models.UniqueConstraint(fields=["name", "strength", "form"], name="uq_medicine_name_strength_form"),
        ]
        indexes = [
            models.Index(fields=["is_active", "name"], name="catalog_med_active_name_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} {self.strength} ({self.form})"
