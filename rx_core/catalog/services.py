# rx_core/catalog/services.py
from __future__ import annotations

from django.core.exceptions import ValidationError

from rx_core.catalog.models import Medicine


class MedicineCatalog:
    @staticmethod
    def resolve(*, name: str, strength: str, form: str) -> Medicine:
        """
        Find-or-create by (name, strength, form).

        INSERT ... ON CONFLICT DO NOTHING followed by a read of the natural key:
        concurrent callers for the same triple end up with the same row and
        neither sees an IntegrityError.
        """
        name = (name or "").strip()
        strength = (strength or "").strip()
        form = (form or "").strip()
        if not (name and strength and form):
            raise ValidationError("Medicine name, strength and form are required.")

        Medicine.objects.bulk_create(
            [Medicine(name=name, strength=strength, form=form)],
            ignore_conflicts=True,
        )
        return Medicine.objects.get(name=name, strength=strength, form=form)
