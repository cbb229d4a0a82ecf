# rx_core/patients/selectors.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from django.db.models import Max, QuerySet

from rx_core.common.exceptions import NotFoundOrForbidden
from rx_core.common.ids import parse_uuid
from rx_core.patients.models import Patient
from rx_core.prescriptions.models import Prescription


@dataclass(frozen=True)
class PatientDetail:
    patient: Patient
    prescriptions: QuerySet


def list_patients_for_doctor(*, doctor_id: int) -> QuerySet[Patient]:
    """
    Patients this doctor has prescribed for, most recently prescribed first.
    Annotated with `last_prescribed_on` (this doctor's prescriptions only).
    """
    return (
        Patient.objects.select_related("pii")
        .filter(prescriptions__doctor_id=doctor_id)
        .annotate(last_prescribed_on=Max("prescriptions__issued_on"))
        .order_by("-last_prescribed_on", "-created_at")
    )


def get_patient_for_doctor(*, doctor_id: int, patient_id: Any) -> PatientDetail:
    """
    Patient + PII + this doctor's prescriptions for them.
    Missing patient and "not treated by this doctor" look the same.
    """
    pid: UUID = parse_uuid(patient_id)

    patient = (
        Patient.objects.select_related("pii")
        .filter(id=pid, prescriptions__doctor_id=doctor_id)
        .distinct()
        .first()
    )
    if patient is None:
        raise NotFoundOrForbidden()

    prescriptions = (
        Prescription.objects.filter(patient_id=patient.id, doctor_id=doctor_id)
        .prefetch_related("items__medicine")
        .order_by("-issued_on")
    )
    return PatientDetail(patient=patient, prescriptions=prescriptions)

