# rx_core/patients/services.py
from __future__ import annotations

import logging
import re
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from rx_core.audit.models import AuditAction, ResourceType
from rx_core.audit.services import AuditService
from rx_core.common.permissions import Role
from rx_core.iam.caller import Caller, require_roles
from rx_core.patients.models import Patient, PatientCodeSequence, PatientPII

logger = logging.getLogger(__name__)

CNIC_RE = re.compile(r"^\d{5}-\d{7}-\d$")
MIN_PHONE_LENGTH = 10
MAX_AGE_BAND_LENGTH = 32


def _validate(*, full_name: str, phone: str, address: str, national_id: str, age_band: str) -> None:
    errors: dict[str, list[str]] = {}

    for field, value in (
        ("full_name", full_name),
        ("phone", phone),
        ("address", address),
        ("national_id", national_id),
        ("age_band", age_band),
    ):
        if not value:
            errors[field] = ["This field is required."]

    if phone and len(phone) < MIN_PHONE_LENGTH:
        errors["phone"] = [f"Phone must be at least {MIN_PHONE_LENGTH} characters."]
    if national_id and not CNIC_RE.match(national_id):
        errors["national_id"] = ["CNIC must be in the format 12345-1234567-1."]
    if age_band and len(age_band) > MAX_AGE_BAND_LENGTH:
        errors["age_band"] = [f"Age band must be at most {MAX_AGE_BAND_LENGTH} characters."]

    if errors:
        raise ValidationError(errors)


def next_patient_code(today=None) -> str:
    """
    P + 2-digit year + 4-digit sequence, e.g. P260001.

    Must run inside a transaction: the year's counter row stays locked until commit.
    The first code of a year continues after patients already registered that year.
    """
    year = (today or timezone.localdate()).year

    PatientCodeSequence.objects.get_or_create(
        year=year,
        defaults={"last_value": Patient.objects.filter(created_at__year=year).count()},
    )
    seq = PatientCodeSequence.objects.select_for_update().get(year=year)
    seq.last_value += 1
    seq.save(update_fields=["last_value"])

    return f"P{year % 100:02d}{seq.last_value:04d}"


class PatientService:
    @staticmethod
    @transaction.atomic
    def create_patient(
        *,
        caller: Optional[Caller],
        full_name: str,
        phone: str,
        address: str,
        national_id: str,
        age_band: str,
    ) -> Patient:
        require_roles(caller, {Role.DOCTOR})

        full_name = (full_name or "").strip()
        phone = (phone or "").strip()
        address = (address or "").strip()
        national_id = (national_id or "").strip()
        age_band = (age_band or "").strip()

        _validate(full_name=full_name, phone=phone, address=address, national_id=national_id, age_band=age_band)

        patient = Patient.objects.create(
            patient_code=next_patient_code(),
            age_band=age_band,
            created_by_id=caller.user_id,
        )
        patient.pii = PatientPII.objects.create(
            patient=patient,
            full_name=full_name,
            phone=phone,
            address=address,
            national_id=national_id,
        )

        AuditService.record(
            actor_user_id=caller.user_id,
            action=AuditAction.CREATE_PATIENT,
            resource_type=ResourceType.PATIENT,
            resource_id=patient.id,
            details={"patient_code": patient.patient_code, "age_band": age_band},
        )
        logger.info("Patient created: id=%s code=%s", patient.id, patient.patient_code)
        return patient
