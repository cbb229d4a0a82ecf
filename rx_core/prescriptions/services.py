# rx_core/prescriptions/services.py
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional
from uuid import UUID

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone
from django.utils.module_loading import import_string

from rx_core.audit.models import AuditAction, ResourceType
from rx_core.audit.services import AuditService
from rx_core.catalog.services import MedicineCatalog
from rx_core.common.exceptions import NotFoundOrForbidden
from rx_core.common.ids import parse_uuid
from rx_core.common.permissions import Role
from rx_core.iam.caller import Caller, require_roles
from rx_core.iam.models import display_name_of
from rx_core.patients.models import Patient
from rx_core.prescriptions.models import Prescription, PrescriptionItem, PrescriptionStatus
from rx_core.prescriptions.selectors import (
    get_prescription_document_for_doctor,
    get_prescription_for_dispensing,
    get_prescription_for_doctor,
)

logger = logging.getLogger(__name__)

REQUIRED_ITEM_FIELDS = ("medicine_name", "strength", "form", "dosage", "frequency", "duration")
ITEM_FIELDS = REQUIRED_ITEM_FIELDS + ("remarks",)


def _clean(value: Any) -> str:
    return str(value or "").strip()


def _validate_content(
    *,
    patient_id: Any,
    diagnosis: str,
    recommendation: str,
    items: Optional[Iterable[dict]],
) -> tuple[UUID, list[dict]]:
    """
    Input checks shared by create and update. Runs before any write.
    Returns the parsed patient id and normalized items.
    """
    errors: dict[str, list] = {}

    if not _clean(diagnosis):
        errors["diagnosis"] = ["This field is required."]
    if not _clean(recommendation):
        errors["recommendation"] = ["This field is required."]

    cleaned: list[dict] = []
    item_errors: list[str] = []
    for idx, raw in enumerate(items or [], start=1):
        item = {f: _clean((raw or {}).get(f)) for f in ITEM_FIELDS}
        missing = [f for f in REQUIRED_ITEM_FIELDS if not item[f]]
        if missing:
            item_errors.append(f"Item {idx}: missing {', '.join(missing)}.")
        cleaned.append(item)
    if not cleaned:
        errors["items"] = ["At least one item is required."]
    elif item_errors:
        errors["items"] = item_errors

    pid: UUID | None = None
    try:
        pid = parse_uuid(patient_id, "patient_id")
    except ValidationError as e:
        errors.update(e.message_dict)
    else:
        if not Patient.objects.filter(id=pid).exists():
            errors["patient_id"] = ["Patient not found."]

    if errors:
        raise ValidationError(errors)
    return pid, cleaned


def _write_items(prescription_id: UUID, items: list[dict]) -> list[str]:
    """Resolve medicines and insert items in order. Returns medicine names."""
    rows = []
    names = []
    for position, item in enumerate(items, start=1):
        medicine = MedicineCatalog.resolve(name=item["medicine_name"], strength=item["strength"], form=item["form"])
        rows.append(
            PrescriptionItem(
                prescription_id=prescription_id,
                position=position,
                medicine=medicine,
                dosage=item["dosage"],
                frequency=item["frequency"],
                duration=item["duration"],
                remarks=item["remarks"],
            )
        )
        names.append(medicine.name)
    PrescriptionItem.objects.bulk_create(rows)
    return names


class PrescriptionService:
    """
    Prescription lifecycle: create/update while DRAFT, finalize, dispense, PDF.

    Every transition is a single conditional UPDATE whose WHERE clause carries
    identity, ownership and state. Zero rows affected -> NotFoundOrForbidden,
    whatever the reason.
    """

    @staticmethod
    @transaction.atomic
    def create_prescription(
        *,
        caller: Optional[Caller],
        patient_id: Any,
        diagnosis: str,
        recommendation: str,
        notes: str = "",
        items: Optional[Iterable[dict]] = None,
    ) -> Prescription:
        require_roles(caller, {Role.DOCTOR})
        pid, cleaned = _validate_content(
            patient_id=patient_id,
            diagnosis=diagnosis,
            recommendation=recommendation,
            items=items,
        )

        rx = Prescription.objects.create(
            patient_id=pid,
            doctor_id=caller.user_id,
            diagnosis=_clean(diagnosis),
            recommendation=_clean(recommendation),
            notes=_clean(notes),
            status=PrescriptionStatus.DRAFT,
        )
        names = _write_items(rx.id, cleaned)

        AuditService.record(
            actor_user_id=caller.user_id,
            action=AuditAction.CREATE_PRESCRIPTION,
            resource_type=ResourceType.PRESCRIPTION,
            resource_id=rx.id,
            details={
                "patient_id": str(pid),
                "diagnosis": rx.diagnosis,
                "item_count": len(names),
                "medicines": names,
            },
        )
        logger.info("Prescription created: id=%s doctor=%s items=%s", rx.id, caller.user_id, len(names))
        return get_prescription_for_doctor(doctor_id=caller.user_id, prescription_id=rx.id)

    @staticmethod
    @transaction.atomic
    def update_prescription(
        *,
        caller: Optional[Caller],
        prescription_id: Any,
        patient_id: Any,
        diagnosis: str,
        recommendation: str,
        notes: str = "",
        items: Optional[Iterable[dict]] = None,
    ) -> Prescription:
        """
        Full replace of content and items. Owner + DRAFT only.
        Items are deleted and recreated in the same transaction.
        """
        require_roles(caller, {Role.DOCTOR})
        rx_id = parse_uuid(prescription_id)
        pid, cleaned = _validate_content(
            patient_id=patient_id,
            diagnosis=diagnosis,
            recommendation=recommendation,
            items=items,
        )

        updated = Prescription.objects.filter(
            id=rx_id,
            doctor_id=caller.user_id,
            status=PrescriptionStatus.DRAFT,
        ).update(
            patient_id=pid,
            diagnosis=_clean(diagnosis),
            recommendation=_clean(recommendation),
            notes=_clean(notes),
            updated_at=timezone.now(),
        )
        if updated == 0:
            raise NotFoundOrForbidden()

        PrescriptionItem.objects.filter(prescription_id=rx_id).delete()
        names = _write_items(rx_id, cleaned)

        AuditService.record(
            actor_user_id=caller.user_id,
            action=AuditAction.UPDATE_PRESCRIPTION,
            resource_type=ResourceType.PRESCRIPTION,
            resource_id=rx_id,
            details={
                "patient_id": str(pid),
                "diagnosis": _clean(diagnosis),
                "item_count": len(names),
                "medicines": names,
            },
        )
        logger.info("Prescription updated: id=%s items=%s", rx_id, len(names))
        return get_prescription_for_doctor(doctor_id=caller.user_id, prescription_id=rx_id)

    @staticmethod
    @transaction.atomic
    def finalize(*, caller: Optional[Caller], prescription_id: Any) -> Prescription:
        require_roles(caller, {Role.DOCTOR})
        rx_id = parse_uuid(prescription_id)

        updated = Prescription.objects.filter(
            id=rx_id,
            doctor_id=caller.user_id,
            status=PrescriptionStatus.DRAFT,
        ).update(status=PrescriptionStatus.FINAL, updated_at=timezone.now())
        if updated == 0:
            raise NotFoundOrForbidden()

        AuditService.record(
            actor_user_id=caller.user_id,
            action=AuditAction.FINALIZE_PRESCRIPTION,
            resource_type=ResourceType.PRESCRIPTION,
            resource_id=rx_id,
            details={
                "previous_status": PrescriptionStatus.DRAFT.value,
                "new_status": PrescriptionStatus.FINAL.value,
            },
        )
        logger.info("Prescription finalized: id=%s", rx_id)
        return get_prescription_for_doctor(doctor_id=caller.user_id, prescription_id=rx_id)

    @staticmethod
    @transaction.atomic
    def dispense(*, caller: Optional[Caller], prescription_id: Any) -> Prescription:
        """
        FINAL + not yet dispensed -> stamp dispensed_at / dispensed_by once.
        A second attempt (or a DRAFT / unknown id) is NotFoundOrForbidden.
        """
        require_roles(caller, {Role.DISPENSER, Role.ADMIN})
        rx_id = parse_uuid(prescription_id)
        now = timezone.now()

        updated = Prescription.objects.filter(
            id=rx_id,
            status=PrescriptionStatus.FINAL,
            dispensed_at__isnull=True,
        ).update(dispensed_at=now, dispensed_by_id=caller.user_id, updated_at=now)
        if updated == 0:
            raise NotFoundOrForbidden()

        dispenser = get_user_model().objects.select_related("rx_profile").get(pk=caller.user_id)
        AuditService.record(
            actor_user_id=caller.user_id,
            action=AuditAction.DISPENSE_PRESCRIPTION,
            resource_type=ResourceType.PRESCRIPTION,
            resource_id=rx_id,
            details={
                "dispensed_at": now.isoformat(),
                "dispenser_name": display_name_of(dispenser),
            },
        )
        logger.info("Prescription dispensed: id=%s by=%s", rx_id, caller.user_id)
        return get_prescription_for_dispensing(prescription_id=rx_id)

    @staticmethod
    @transaction.atomic
    def generate_pdf(*, caller: Optional[Caller], prescription_id: Any) -> bytes:
        """
        Render a FINAL prescription owned by the caller. Read-only for the
        prescription itself; the GENERATE_PDF audit row is the only write.
        """
        require_roles(caller, {Role.DOCTOR})
        document = get_prescription_document_for_doctor(doctor_id=caller.user_id, prescription_id=prescription_id)

        renderer = import_string(settings.PRESCRIPTION_PDF_RENDERER)
        content = renderer(document)

        AuditService.record(
            actor_user_id=caller.user_id,
            action=AuditAction.GENERATE_PDF,
            resource_type=ResourceType.PRESCRIPTION,
            resource_id=document.prescription_id,
            details={
                "patient_code": document.patient_code,
                "generated_at": timezone.now().isoformat(),
            },
        )
        logger.info("Prescription PDF generated: id=%s bytes=%s", document.prescription_id, len(content))
        return content
