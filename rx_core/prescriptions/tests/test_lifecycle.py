import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from rx_core.audit.models import AuditAction, AuditLog, ResourceType
from rx_core.catalog.models import Medicine
from rx_core.common.exceptions import NotFoundOrForbidden, RoleRequired
from rx_core.conftest import item_payload
from rx_core.prescriptions.models import Prescription, PrescriptionItem, PrescriptionStatus
from rx_core.prescriptions.services import PrescriptionService

pytestmark = pytest.mark.django_db


def _content(patient, **overrides):
    data = {
        "patient_id": patient.id,
        "diagnosis": "Flu",
        "recommendation": "Rest and fluids",
        "notes": "",
        "items": [item_payload()],
    }
    data.update(overrides)
    return data


def test_create_draft_resolves_medicines_and_audits(doctor_caller, patient):
    rx = PrescriptionService.create_prescription(caller=doctor_caller, **_content(patient))

    assert rx.status == PrescriptionStatus.DRAFT
    assert rx.doctor_id == doctor_caller.user_id
    assert Medicine.objects.filter(name="Paracetamol", strength="500mg", form="Tablet").count() == 1

    log = AuditLog.objects.get(action=AuditAction.CREATE_PRESCRIPTION)
    assert log.resource_type == ResourceType.PRESCRIPTION
    assert log.resource_id == str(rx.id)
    assert log.details == {
        "patient_id": str(patient.id),
        "diagnosis": "Flu",
        "item_count": 1,
        "medicines": ["Paracetamol"],
    }


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"diagnosis": "  "}, "diagnosis"),
        ({"recommendation": ""}, "recommendation"),
        ({"items": []}, "items"),
        ({"items": [item_payload(dosage="")]}, "items"),
        ({"patient_id": "6f1c1c2e-1111-4a4a-9b9b-000000000000"}, "patient_id"),
        ({"patient_id": "nope"}, "patient_id"),
    ],
)
def test_create_rejects_bad_input_before_writing(doctor_caller, patient, overrides, field):
    audit_before = AuditLog.objects.count()

    with pytest.raises(ValidationError) as exc_info:
        PrescriptionService.create_prescription(caller=doctor_caller, **_content(patient, **overrides))

    assert field in exc_info.value.message_dict
    assert not Prescription.objects.exists()
    assert AuditLog.objects.count() == audit_before


def test_create_requires_doctor(dispenser_caller, patient):
    with pytest.raises(RoleRequired):
        PrescriptionService.create_prescription(caller=dispenser_caller, **_content(patient))


def test_update_replaces_items_while_draft(doctor_caller, draft_prescription, patient):
    rx = PrescriptionService.update_prescription(
        caller=doctor_caller,
        prescription_id=draft_prescription.id,
        **_content(
            patient,
            diagnosis="Viral fever",
            notes="Review in a week",
            items=[
                item_payload(medicine_name="Ibuprofen", strength="400mg"),
                item_payload(),
            ],
        ),
    )

    assert rx.diagnosis == "Viral fever"
    assert rx.notes == "Review in a week"
    assert [(i.position, i.medicine.name) for i in rx.items.all()] == [(1, "Ibuprofen"), (2, "Paracetamol")]
    assert PrescriptionItem.objects.filter(prescription_id=rx.id).count() == 2

    log = AuditLog.objects.get(action=AuditAction.UPDATE_PRESCRIPTION)
    assert log.details["item_count"] == 2
    assert log.details["medicines"] == ["Ibuprofen", "Paracetamol"]


def test_finalize_once_then_frozen(doctor_caller, draft_prescription, patient):
    rx = PrescriptionService.finalize(caller=doctor_caller, prescription_id=draft_prescription.id)
    assert rx.status == PrescriptionStatus.FINAL

    log = AuditLog.objects.get(action=AuditAction.FINALIZE_PRESCRIPTION)
    assert log.resource_id == str(rx.id)
    assert log.details == {"previous_status": "DRAFT", "new_status": "FINAL"}

    with pytest.raises(NotFoundOrForbidden):
        PrescriptionService.finalize(caller=doctor_caller, prescription_id=rx.id)
    with pytest.raises(NotFoundOrForbidden):
        PrescriptionService.update_prescription(caller=doctor_caller, prescription_id=rx.id, **_content(patient))

    rx.refresh_from_db()
    assert rx.status == PrescriptionStatus.FINAL
    assert rx.diagnosis == "Flu"
    assert AuditLog.objects.filter(action=AuditAction.FINALIZE_PRESCRIPTION).count() == 1
    assert not AuditLog.objects.filter(action=AuditAction.UPDATE_PRESCRIPTION).exists()


def test_dispense_is_idempotent(dispenser_caller, admin_caller, final_prescription):
    rx = PrescriptionService.dispense(caller=dispenser_caller, prescription_id=final_prescription.id)
    assert rx.dispensed_at is not None
    assert rx.dispensed_by_id == dispenser_caller.user_id

    with pytest.raises(NotFoundOrForbidden):
        PrescriptionService.dispense(caller=admin_caller, prescription_id=final_prescription.id)

    stored = Prescription.objects.get(pk=final_prescription.id)
    assert stored.dispensed_by_id == dispenser_caller.user_id
    assert stored.dispensed_at == rx.dispensed_at

    logs = AuditLog.objects.filter(action=AuditAction.DISPENSE_PRESCRIPTION)
    assert logs.count() == 1
    assert logs.get().details["dispenser_name"] == "Sana Pharmacist"


def test_draft_cannot_be_dispensed(dispenser_caller, draft_prescription):
    with pytest.raises(NotFoundOrForbidden):
        PrescriptionService.dispense(caller=dispenser_caller, prescription_id=draft_prescription.id)

    draft_prescription.refresh_from_db()
    assert draft_prescription.dispensed_at is None


def test_doctor_cannot_dispense(doctor_caller, final_prescription):
    with pytest.raises(RoleRequired):
        PrescriptionService.dispense(caller=doctor_caller, prescription_id=final_prescription.id)


def test_database_refuses_dispensed_draft(draft_prescription):
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            Prescription.objects.filter(pk=draft_prescription.pk).update(dispensed_at=timezone.now())


def test_other_doctor_gets_same_answer_as_unknown_id(other_doctor_caller, draft_prescription, patient):
    unknown = "6f1c1c2e-1111-4a4a-9b9b-000000000000"

    for target in (draft_prescription.id, unknown):
        with pytest.raises(NotFoundOrForbidden):
            PrescriptionService.update_prescription(
                caller=other_doctor_caller, prescription_id=target, **_content(patient)
            )
        with pytest.raises(NotFoundOrForbidden):
            PrescriptionService.finalize(caller=other_doctor_caller, prescription_id=target)

    draft_prescription.refresh_from_db()
    assert draft_prescription.status == PrescriptionStatus.DRAFT
