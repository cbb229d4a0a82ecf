# rx_core/pad/selectors.py
from __future__ import annotations

from typing import Any

from django.db.models import QuerySet

from rx_core.common.exceptions import NotFoundOrForbidden
from rx_core.common.ids import parse_uuid
from rx_core.pad.models import RawPrescription


def list_raw_prescriptions_for_doctor(*, doctor_id: int) -> QuerySet[RawPrescription]:
    return (
        RawPrescription.objects.filter(doctor_id=doctor_id)
        .prefetch_related("medicines")
        .order_by("-created_at")
    )


def get_raw_prescription_for_doctor(*, doctor_id: int, raw_prescription_id: Any) -> RawPrescription:
    raw = list_raw_prescriptions_for_doctor(doctor_id=doctor_id).filter(id=parse_uuid(raw_prescription_id)).first()
    if raw is None:
        raise NotFoundOrForbidden()
    return raw
