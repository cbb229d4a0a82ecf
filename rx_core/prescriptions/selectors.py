# rx_core/prescriptions/selectors.py
from __future__ import annotations

from typing import Any

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db.models import CharField, Count, F, Prefetch, Q, QuerySet
from django.db.models.functions import Coalesce
from django.utils import timezone

from rx_core.common.exceptions import NotFoundOrForbidden
from rx_core.common.ids import parse_uuid
from rx_core.iam.models import display_name_of
from rx_core.prescriptions.models import Prescription, PrescriptionItem, PrescriptionStatus
from rx_core.prescriptions.pdf import PrescriptionDocument, PrescriptionDocumentItem


def _items_prefetch() -> Prefetch:
    return Prefetch("items", queryset=PrescriptionItem.objects.select_related("medicine").order_by("position"))


# ---------------------------------------------------------------------------
# Doctor surface (full PII projection, own prescriptions only)
# ---------------------------------------------------------------------------

def _doctor_queryset(doctor_id: int) -> QuerySet[Prescription]:
    return (
        Prescription.objects.filter(doctor_id=doctor_id)
        .select_related("patient", "patient__pii")
        .prefetch_related(_items_prefetch())
    )


def list_prescriptions_for_doctor(*, doctor_id: int, status: str | None = None) -> QuerySet[Prescription]:
    qs = _doctor_queryset(doctor_id)
    if status:
        if status not in PrescriptionStatus.values:
            raise ValidationError({"status": [f"Must be one of: {', '.join(PrescriptionStatus.values)}."]})
        qs = qs.filter(status=status)
    return qs.order_by("-issued_on")


def get_prescription_for_doctor(*, doctor_id: int, prescription_id: Any) -> Prescription:
    """Missing and "not yours" are the same answer."""
    rx = _doctor_queryset(doctor_id).filter(id=parse_uuid(prescription_id)).first()
    if rx is None:
        raise NotFoundOrForbidden()
    return rx


def get_prescription_document_for_doctor(*, doctor_id: int, prescription_id: Any) -> PrescriptionDocument:
    """
    FINAL prescription owned by the doctor, joined with patient, PII, items,
    medicines and doctor, in one filtered query (+ items prefetch).
    """
    rx = (
        Prescription.objects.filter(
            id=parse_uuid(prescription_id),
            doctor_id=doctor_id,
            status=PrescriptionStatus.FINAL,
        )
        .select_related("patient", "patient__pii", "doctor", "doctor__rx_profile")
        .prefetch_related(_items_prefetch())
        .first()
    )
    if rx is None:
        raise NotFoundOrForbidden()

    return PrescriptionDocument(
        prescription_id=str(rx.id),
        clinic_name=settings.RX_CLINIC_NAME,
        clinic_motto=settings.RX_CLINIC_MOTTO,
        issued_on=timezone.localtime(rx.issued_on),
        patient_code=rx.patient.patient_code,
        patient_name=rx.patient.pii.full_name,
        age_band=rx.patient.age_band,
        diagnosis=rx.diagnosis,
        recommendation=rx.recommendation,
        notes=rx.notes,
        doctor_name=display_name_of(rx.doctor),
        doctor_email=rx.doctor.email,
        items=tuple(
            PrescriptionDocumentItem(
                medicine_name=item.medicine.name,
                strength=item.medicine.strength,
                form=item.medicine.form,
                dosage=item.dosage,
                frequency=item.frequency,
                duration=item.duration,
                remarks=item.remarks,
            )
            for item in rx.items.all()
        ),
    )


# ---------------------------------------------------------------------------
# Dispensing gateway (redacted: never joins PatientPII)
# ---------------------------------------------------------------------------

class DispensingState:
    ALL = "all"
    PENDING = "pending"
    DISPENSED = "dispensed"

    values = (ALL, PENDING, DISPENSED)


REDACTED_FIELDS = (
    "id",
    "status",
    "issued_on",
    "dispensed_at",
    "dispensed_by",
    "diagnosis",
    "recommendation",
    "notes",
    "patient",
    "patient__patient_code",
    "patient__age_band",
    "doctor",
    "doctor__email",
)


def _dispensing_queryset() -> QuerySet[Prescription]:
    return (
        Prescription.objects.filter(status=PrescriptionStatus.FINAL)
        .select_related("patient", "doctor")
        .only(*REDACTED_FIELDS)
        .annotate(
            doctor_name=Coalesce(
                F("doctor__rx_profile__display_name"),
                F("doctor__email"),
                output_field=CharField(),
            )
        )
        .prefetch_related(_items_prefetch())
    )


def list_pending_for_dispensing() -> QuerySet[Prescription]:
    return _dispensing_queryset().filter(dispensed_at__isnull=True).order_by("-issued_on")


def list_final_for_dispensing(*, state: str = DispensingState.ALL, q: str | None = None) -> QuerySet[Prescription]:
    state = (state or DispensingState.ALL).lower()
    if state not in DispensingState.values:
        raise ValidationError({"state": [f"Must be one of: {', '.join(DispensingState.values)}."]})

    qs = _dispensing_queryset()
    if state == DispensingState.PENDING:
        qs = qs.filter(dispensed_at__isnull=True)
    elif state == DispensingState.DISPENSED:
        qs = qs.filter(dispensed_at__isnull=False)

    q = (q or "").strip()
    if q:
        qs = qs.filter(
            Q(patient__patient_code__icontains=q)
            | Q(id__istartswith=q)
            | Q(doctor_name__icontains=q)
        )
    return qs.order_by("-issued_on")


def get_prescription_for_dispensing(*, prescription_id: Any) -> Prescription:
    rx = _dispensing_queryset().filter(id=parse_uuid(prescription_id)).first()
    if rx is None:
        raise NotFoundOrForbidden()
    return rx


def dispensing_stats() -> dict[str, int]:
    start_of_day = timezone.localtime().replace(hour=0, minute=0, second=0, microsecond=0)
    return Prescription.objects.filter(status=PrescriptionStatus.FINAL).aggregate(
        total_final=Count("id"),
        total_dispensed=Count("id", filter=Q(dispensed_at__isnull=False)),
        today_dispensed=Count("id", filter=Q(dispensed_at__gte=start_of_day)),
    )
