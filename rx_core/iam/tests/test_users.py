import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from rx_core.audit.models import AuditAction, AuditLog, ResourceType
from rx_core.common.exceptions import RoleRequired
from rx_core.iam.services import UserService

pytestmark = pytest.mark.django_db


def _payload(**overrides):
    data = {
        "email": "new.doctor@rx.test",
        "password": "secret1",
        "display_name": "Dr. New",
        "roles": ["DOCTOR"],
    }
    data.update(overrides)
    return data


def test_admin_creates_user_with_roles_and_audit(admin_client, admin_user):
    res = admin_client.post("/api/v1/users/", _payload(roles=["DOCTOR", "DISPENSER"]), format="json")
    assert res.status_code == 201, res.content

    body = res.json()
    assert body["email"] == "new.doctor@rx.test"
    assert body["roles"] == ["DISPENSER", "DOCTOR"]

    user = get_user_model().objects.get(pk=body["id"])
    assert user.check_password("secret1")
    assert set(user.groups.values_list("name", flat=True)) == {"DOCTOR", "DISPENSER"}

    log = AuditLog.objects.get(action=AuditAction.CREATE_USER)
    assert log.actor_id == admin_user.id
    assert log.resource_type == ResourceType.USER
    assert log.resource_id == str(user.id)
    assert log.details["created_by"] == admin_user.id
    assert "secret1" not in str(log.details)


def test_created_user_can_log_in(admin_client):
    admin_client.post("/api/v1/users/", _payload(), format="json")

    res = APIClient().post(
        "/api/v1/auth/login/",
        {"email": "new.doctor@rx.test", "password": "secret1"},
        format="json",
    )
    assert res.status_code == 200


def test_duplicate_email_is_conflict(admin_client):
    assert admin_client.post("/api/v1/users/", _payload(), format="json").status_code == 201

    res = admin_client.post("/api/v1/users/", _payload(email="NEW.doctor@rx.test"), format="json")
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "conflict"
    assert AuditLog.objects.filter(action=AuditAction.CREATE_USER).count() == 1


def test_short_password_and_missing_roles_rejected(admin_client):
    res = admin_client.post("/api/v1/users/", _payload(password="12345"), format="json")
    assert res.status_code == 400
    assert "password" in res.json()["error"]["details"]

    res = admin_client.post("/api/v1/users/", _payload(roles=[]), format="json")
    assert res.status_code == 400
    assert "roles" in res.json()["error"]["details"]

    assert not AuditLog.objects.exists()


def test_only_admin_manages_users(doctor_client, dispenser_client):
    assert doctor_client.post("/api/v1/users/", _payload(), format="json").status_code == 403
    assert dispenser_client.get("/api/v1/users/").status_code == 403


def test_service_refuses_non_admin_caller(doctor_caller):
    with pytest.raises(RoleRequired):
        UserService.create_user(caller=doctor_caller, **_payload())


def test_admin_lists_users(admin_client, doctor, dispenser):
    res = admin_client.get("/api/v1/users/")
    assert res.status_code == 200

    body = res.json()
    assert body["count"] == 3
    by_email = {u["email"]: u for u in body["results"]}
    assert by_email["doctor@rx.test"]["roles"] == ["DOCTOR"]
    assert by_email["dispenser@rx.test"]["display_name"] == "Sana Pharmacist"
