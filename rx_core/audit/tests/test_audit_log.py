import pytest
from django.db import DatabaseError, transaction

from rx_core.audit.models import AuditAction, AuditLog, AuditLogImmutable, ResourceType
from rx_core.audit.services import AuditService
from rx_core.patients.models import Patient
from rx_core.patients.services import PatientService

pytestmark = pytest.mark.django_db


def _record(actor, **overrides):
    kwargs = dict(
        actor_user_id=actor.id,
        action=AuditAction.CREATE_PATIENT,
        resource_type=ResourceType.PATIENT,
        resource_id="00000000-0000-0000-0000-000000000001",
        details={"patient_code": "P260001"},
    )
    kwargs.update(overrides)
    return AuditService.record(**kwargs)


def test_record_appends_one_row(doctor):
    rec = _record(doctor)

    row = AuditLog.objects.get(pk=rec.id)
    assert row.actor_id == doctor.id
    assert row.action == AuditAction.CREATE_PATIENT
    assert row.details == {"patient_code": "P260001"}


def test_rows_cannot_be_changed_or_removed(doctor):
    row = AuditLog.objects.get(pk=_record(doctor).id)

    row.details = {"patient_code": "tampered"}
    with pytest.raises(AuditLogImmutable):
        row.save()
    with pytest.raises(AuditLogImmutable):
        row.delete()
    with pytest.raises(AuditLogImmutable):
        AuditLog.objects.filter(pk=row.pk).update(details={})
    with pytest.raises(AuditLogImmutable):
        AuditLog.objects.all().delete()

    row.refresh_from_db()
    assert row.details == {"patient_code": "P260001"}


def test_failed_audit_write_does_not_fail_the_operation(doctor_caller, monkeypatch, caplog):
    def boom(**kwargs):
        raise DatabaseError("audit table unavailable")

    monkeypatch.setattr(AuditLog.objects, "create", boom)

    with caplog.at_level("ERROR", logger="rx_core.audit"):
        patient = PatientService.create_patient(
            caller=doctor_caller,
            full_name="Jane Doe",
            phone="03001234567",
            address="Karachi",
            national_id="12345-1234567-1",
            age_band="Adult",
        )

    assert Patient.objects.filter(pk=patient.pk).exists()
    assert not AuditLog.objects.exists()
    assert any("Audit write failed" in r.getMessage() for r in caplog.records)


def test_audit_row_rolls_back_with_its_mutation(doctor_caller):
    with pytest.raises(RuntimeError):
        with transaction.atomic():
            PatientService.create_patient(
                caller=doctor_caller,
                full_name="Jane Doe",
                phone="03001234567",
                address="Karachi",
                national_id="12345-1234567-1",
                age_band="Adult",
            )
            raise RuntimeError("outer failure")

    assert not Patient.objects.exists()
    assert not AuditLog.objects.exists()
