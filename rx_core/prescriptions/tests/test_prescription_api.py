import pytest
from django.test import override_settings
from django.utils import timezone

from rx_core.audit.models import AuditAction, AuditLog
from rx_core.catalog.models import Medicine
from rx_core.conftest import item_payload
from rx_core.prescriptions.pdf import PrescriptionDocument

pytestmark = pytest.mark.django_db

UNKNOWN_ID = "6f1c1c2e-1111-4a4a-9b9b-000000000000"

RENDERED: list = []


def fake_renderer(document: PrescriptionDocument) -> bytes:
    RENDERED.append(document)
    return b"%PDF-fake"


def _body(patient_id, **overrides):
    data = {
        "patient_id": str(patient_id),
        "diagnosis": "Flu",
        "recommendation": "Rest and fluids",
        "items": [item_payload()],
    }
    data.update(overrides)
    return data


def test_doctor_end_to_end(doctor_client, doctor):
    # 1. register patient
    res = doctor_client.post(
        "/api/v1/patients/",
        {
            "full_name": "Jane Doe",
            "phone": "03001234567",
            "address": "Karachi",
            "national_id": "12345-1234567-1",
            "age_band": "Adult",
        },
        format="json",
    )
    assert res.status_code == 201
    patient = res.json()
    assert patient["patient_code"] == f"P{timezone.localdate().year % 100:02d}0001"
    assert AuditLog.objects.get(action=AuditAction.CREATE_PATIENT).actor_id == doctor.id

    # 2. draft prescription
    res = doctor_client.post("/api/v1/prescriptions/", _body(patient["id"]), format="json")
    assert res.status_code == 201, res.content
    rx = res.json()
    assert rx["status"] == "DRAFT"
    assert rx["patient"]["full_name"] == "Jane Doe"
    assert rx["items"][0]["medicine_name"] == "Paracetamol"
    assert Medicine.objects.filter(name="Paracetamol", strength="500mg", form="Tablet").count() == 1

    # 3. finalize, twice
    res = doctor_client.post(f"/api/v1/prescriptions/{rx['id']}/finalize/")
    assert res.status_code == 200
    assert res.json()["status"] == "FINAL"

    res = doctor_client.post(f"/api/v1/prescriptions/{rx['id']}/finalize/")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "not_found"


def test_list_filters_by_status(doctor_client, draft_prescription, final_prescription, doctor_caller, patient):
    from rx_core.prescriptions.services import PrescriptionService

    other_draft = PrescriptionService.create_prescription(
        caller=doctor_caller,
        patient_id=patient.id,
        diagnosis="Cough",
        recommendation="Steam",
        items=[item_payload()],
    )

    body = doctor_client.get("/api/v1/prescriptions/").json()
    assert body["count"] == 2

    body = doctor_client.get("/api/v1/prescriptions/", {"status": "DRAFT"}).json()
    assert [r["id"] for r in body["results"]] == [str(other_draft.id)]

    res = doctor_client.get("/api/v1/prescriptions/", {"status": "ARCHIVED"})
    assert res.status_code == 400


def test_put_is_full_replace(doctor_client, draft_prescription, patient):
    res = doctor_client.put(
        f"/api/v1/prescriptions/{draft_prescription.id}/",
        _body(patient.id, diagnosis="Sinusitis", items=[item_payload(medicine_name="Cetirizine", strength="10mg")]),
        format="json",
    )
    assert res.status_code == 200, res.content
    body = res.json()
    assert body["diagnosis"] == "Sinusitis"
    assert [i["medicine_name"] for i in body["items"]] == ["Cetirizine"]

    res = doctor_client.put(f"/api/v1/prescriptions/{draft_prescription.id}/", _body(patient.id, items=[]), format="json")
    assert res.status_code == 400
    assert "items" in res.json()["error"]["details"]


def test_other_doctor_sees_not_found(other_doctor_client, draft_prescription, patient):
    """Non-author and unknown id must be indistinguishable."""
    responses = []
    for target in (draft_prescription.id, UNKNOWN_ID):
        get = other_doctor_client.get(f"/api/v1/prescriptions/{target}/")
        put = other_doctor_client.put(f"/api/v1/prescriptions/{target}/", _body(patient.id), format="json")
        fin = other_doctor_client.post(f"/api/v1/prescriptions/{target}/finalize/")
        responses.append([(r.status_code, r.json()["error"]["code"], r.json()["error"]["message"]) for r in (get, put, fin)])

    assert responses[0] == responses[1]
    assert {r[0] for r in responses[0]} == {404}


def test_dispenser_cannot_use_doctor_surface(dispenser_client, draft_prescription):
    assert dispenser_client.get("/api/v1/prescriptions/").status_code == 403
    assert dispenser_client.post(f"/api/v1/prescriptions/{draft_prescription.id}/finalize/").status_code == 403


@override_settings(PRESCRIPTION_PDF_RENDERER="rx_core.prescriptions.tests.test_prescription_api.fake_renderer")
def test_pdf_for_final_prescription(doctor_client, final_prescription):
    RENDERED.clear()

    res = doctor_client.get(f"/api/v1/prescriptions/{final_prescription.id}/pdf/")
    assert res.status_code == 200
    assert res["Content-Type"] == "application/pdf"
    assert res["Content-Disposition"] == f'attachment; filename="prescription-{str(final_prescription.id)[:8]}.pdf"'
    assert res["Cache-Control"] == "no-store"
    assert res.content == b"%PDF-fake"

    doc = RENDERED[0]
    assert doc.patient_name == "Ali Raza"
    assert doc.doctor_name == "Dr. Ayesha Khan"
    assert [i.medicine_name for i in doc.items] == ["Paracetamol"]

    log = AuditLog.objects.get(action=AuditAction.GENERATE_PDF)
    assert log.resource_id == str(final_prescription.id)
    assert log.details["patient_code"] == final_prescription.patient.patient_code


@override_settings(PRESCRIPTION_PDF_RENDERER="rx_core.prescriptions.tests.test_prescription_api.fake_renderer")
def test_pdf_requires_final_and_owner(doctor_client, other_doctor_client, draft_prescription):
    assert doctor_client.get(f"/api/v1/prescriptions/{draft_prescription.id}/pdf/").status_code == 404
    assert other_doctor_client.get(f"/api/v1/prescriptions/{draft_prescription.id}/pdf/").status_code == 404
    assert not AuditLog.objects.filter(action=AuditAction.GENERATE_PDF).exists()


def test_default_renderer_produces_pdf(doctor_client, final_prescription):
    res = doctor_client.get(f"/api/v1/prescriptions/{final_prescription.id}/pdf/")
    assert res.status_code == 200
    assert res.content.startswith(b"%PDF")
