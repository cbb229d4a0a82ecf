import pytest
from django.utils import timezone

from rx_core.audit.models import AuditAction, AuditLog, ResourceType
from rx_core.conftest import item_payload
from rx_core.patients.models import Patient, PatientCodeSequence, PatientPII
from rx_core.prescriptions.services import PrescriptionService

pytestmark = pytest.mark.django_db

JANE = {
    "full_name": "Jane Doe",
    "phone": "03001234567",
    "address": "12 Mall Road, Lahore",
    "national_id": "12345-1234567-1",
    "age_band": "Adult",
}


def _yy() -> str:
    return f"{timezone.localdate().year % 100:02d}"


def test_create_patient_generates_code_and_audits(doctor_client, doctor):
    res = doctor_client.post("/api/v1/patients/", JANE, format="json")
    assert res.status_code == 201, res.content

    body = res.json()
    assert body["patient_code"] == f"P{_yy()}0001"
    assert body["full_name"] == "Jane Doe"
    assert body["age_band"] == "Adult"

    patient = Patient.objects.get(pk=body["id"])
    assert PatientPII.objects.get(patient=patient).national_id == "12345-1234567-1"

    log = AuditLog.objects.get(action=AuditAction.CREATE_PATIENT)
    assert log.actor_id == doctor.id
    assert log.resource_type == ResourceType.PATIENT
    assert log.resource_id == str(patient.id)
    assert log.details == {"patient_code": body["patient_code"], "age_band": "Adult"}


def test_codes_are_sequential_within_a_year(doctor_client):
    codes = [doctor_client.post("/api/v1/patients/", JANE, format="json").json()["patient_code"] for _ in range(3)]
    assert codes == [f"P{_yy()}0001", f"P{_yy()}0002", f"P{_yy()}0003"]
    assert PatientCodeSequence.objects.get(year=timezone.localdate().year).last_value == 3


def test_sequence_continues_after_existing_patients(doctor_client, doctor):
    # rows registered before the counter existed
    Patient.objects.create(patient_code="LEGACY-1", age_band="Adult", created_by=doctor)
    Patient.objects.create(patient_code="LEGACY-2", age_band="Child", created_by=doctor)
    assert not PatientCodeSequence.objects.exists()

    res = doctor_client.post("/api/v1/patients/", JANE, format="json")
    assert res.json()["patient_code"] == f"P{_yy()}0003"


@pytest.mark.parametrize(
    "field, value",
    [
        ("phone", "0300123"),
        ("national_id", "1234512345671"),
        ("national_id", "12345-123456-1"),
        ("age_band", "   "),
        ("full_name", "  "),
    ],
)
def test_invalid_input_rejected_before_any_write(doctor_client, field, value):
    res = doctor_client.post("/api/v1/patients/", {**JANE, field: value}, format="json")
    assert res.status_code == 400

    err = res.json()["error"]
    assert err["code"] == "validation_error"
    assert field in err["details"]
    assert not Patient.objects.exists()
    assert not AuditLog.objects.exists()


def test_only_doctors_register_patients(dispenser_client, admin_client):
    assert dispenser_client.post("/api/v1/patients/", JANE, format="json").status_code == 403
    assert admin_client.post("/api/v1/patients/", JANE, format="json").status_code == 403


def test_patient_list_is_derived_from_my_prescriptions(doctor_client, other_doctor_client, doctor_caller, patient):
    assert doctor_client.get("/api/v1/patients/").json()["count"] == 0

    PrescriptionService.create_prescription(
        caller=doctor_caller,
        patient_id=patient.id,
        diagnosis="Flu",
        recommendation="Rest",
        items=[item_payload()],
    )

    body = doctor_client.get("/api/v1/patients/").json()
    assert body["count"] == 1
    row = body["results"][0]
    assert row["id"] == str(patient.id)
    assert row["full_name"] == "Ali Raza"
    assert row["last_prescribed_on"] is not None

    assert other_doctor_client.get("/api/v1/patients/").json()["count"] == 0


def test_patient_detail_shows_only_my_prescriptions(
    doctor_client, other_doctor_client, doctor_caller, other_doctor_caller, patient
):
    # not treated yet: same answer as an unknown id
    assert doctor_client.get(f"/api/v1/patients/{patient.id}/").status_code == 404

    mine = PrescriptionService.create_prescription(
        caller=doctor_caller, patient_id=patient.id, diagnosis="Flu", recommendation="Rest", items=[item_payload()]
    )
    theirs = PrescriptionService.create_prescription(
        caller=other_doctor_caller,
        patient_id=patient.id,
        diagnosis="Migraine",
        recommendation="Dark room",
        items=[item_payload(medicine_name="Ibuprofen", strength="400mg")],
    )

    body = doctor_client.get(f"/api/v1/patients/{patient.id}/").json()
    assert body["patient"]["national_id"] == "35202-1234567-1"
    assert [p["id"] for p in body["prescriptions"]] == [str(mine.id)]

    body = other_doctor_client.get(f"/api/v1/patients/{patient.id}/").json()
    assert [p["id"] for p in body["prescriptions"]] == [str(theirs.id)]


def test_patient_detail_unknown_and_malformed_ids(doctor_client):
    res = doctor_client.get("/api/v1/patients/6f1c1c2e-1111-4a4a-9b9b-000000000000/")
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Not found."

    res = doctor_client.get("/api/v1/patients/not-a-uuid/")
    assert res.status_code == 400
