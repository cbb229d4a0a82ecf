import pytest

from rx_core.prescriptions.services import PrescriptionService

pytestmark = pytest.mark.django_db


def test_admin_dashboard_counts(admin_client, dispenser_caller, final_prescription, doctor, other_doctor):
    PrescriptionService.dispense(caller=dispenser_caller, prescription_id=final_prescription.id)

    res = admin_client.get("/api/v1/dashboard/admin/")
    assert res.status_code == 200

    body = res.json()
    assert body["total_users"] == 4
    assert body["total_doctors"] == 2
    assert body["total_dispensers"] == 1
    assert body["total_patients"] == 1
    assert body["total_prescriptions"] == 1
    assert body["final_prescriptions"] == 1
    assert body["dispensed_prescriptions"] == 1
    assert body["today_prescriptions"] == 1

    assert body["recent_prescriptions"][0]["doctor_name"] == "Dr. Ayesha Khan"
    assert [a["action"] for a in body["recent_audit_logs"]] == [
        "DISPENSE_PRESCRIPTION",
        "FINALIZE_PRESCRIPTION",
        "CREATE_PRESCRIPTION",
        "CREATE_PATIENT",
    ]


def test_doctor_dashboard_is_scoped_to_me(doctor_client, other_doctor_client, draft_prescription):
    body = doctor_client.get("/api/v1/dashboard/doctor/").json()
    assert body["total_prescriptions"] == 1
    assert body["draft_prescriptions"] == 1
    assert body["final_prescriptions"] == 0
    assert body["total_patients"] == 1
    assert body["recent_prescriptions"][0]["patient_name"] == "Ali Raza"

    body = other_doctor_client.get("/api/v1/dashboard/doctor/").json()
    assert body["total_prescriptions"] == 0
    assert body["recent_prescriptions"] == []


def test_dashboards_are_role_gated(doctor_client, dispenser_client, admin_client):
    assert doctor_client.get("/api/v1/dashboard/admin/").status_code == 403
    assert dispenser_client.get("/api/v1/dashboard/doctor/").status_code == 403
    assert admin_client.get("/api/v1/dashboard/doctor/").status_code == 403
