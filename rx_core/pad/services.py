# rx_core/pad/services.py
from __future__ import annotations

import logging
from typing import Iterable, Optional

from django.db import transaction

from rx_core.common.permissions import Role
from rx_core.iam.caller import Caller, require_roles
from rx_core.pad.models import RawPrescription, RawPrescriptionMedicine

logger = logging.getLogger(__name__)

PAD_TEXT_FIELDS = (
    "patient_name",
    "patient_age",
    "patient_gender",
    "patient_cnic",
    "patient_phone",
    "patient_address",
    "diagnosis",
    "tests",
    "recommendations",
)


class PadService:
    @staticmethod
    @transaction.atomic
    def create_raw_prescription(
        *,
        caller: Optional[Caller],
        medicines: Iterable[dict] = (),
        **fields,
    ) -> RawPrescription:
        """
        Save a pad transcription. Medicine rows with a blank name are dropped;
        the rest keep their relative order (1-based).
        """
        require_roles(caller, {Role.DOCTOR})

        values = {f: str(fields.get(f) or "").strip() for f in PAD_TEXT_FIELDS}
        raw = RawPrescription.objects.create(doctor_id=caller.user_id, **values)

        rows = []
        for med in medicines or ():
            name = str(med.get("name") or "").strip()
            if not name:
                continue
            f1, f2, f3 = (list(med.get("frequencies") or []) + [False, False, False])[:3]
            rows.append(
                RawPrescriptionMedicine(
                    raw_prescription=raw,
                    medicine_order=len(rows) + 1,
                    medicine_name=name,
                    frequency1=bool(f1),
                    frequency2=bool(f2),
                    frequency3=bool(f3),
                )
            )
        RawPrescriptionMedicine.objects.bulk_create(rows)

        logger.info("Pad prescription saved: id=%s doctor=%s medicines=%s", raw.id, caller.user_id, len(rows))
        return raw
