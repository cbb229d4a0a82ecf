# rx_core/conftest.py
import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from rest_framework.test import APIClient

from rx_core.common.permissions import Role
from rx_core.iam.caller import caller_from_user
from rx_core.iam.models import UserProfile


def make_user(email: str, *roles: Role, display_name: str | None = None):
    """
    Create a user the way UserService does: username == email, profile, role groups.
    """
    User = get_user_model()
    user = User.objects.create_user(username=email, email=email, password="pass1234")
    UserProfile.objects.create(user=user, display_name=display_name or email.split("@")[0].title())
    for role in roles:
        group, _ = Group.objects.get_or_create(name=role.value)
        user.groups.add(group)
    return user


def client_for(user) -> APIClient:
    c = APIClient()
    c.force_authenticate(user=user)
    return c


def item_payload(**overrides) -> dict:
    item = {
        "medicine_name": "Paracetamol",
        "strength": "500mg",
        "form": "Tablet",
        "dosage": "1 tablet",
        "frequency": "Twice daily",
        "duration": "5 days",
        "remarks": "",
    }
    item.update(overrides)
    return item


@pytest.fixture
def admin_user(db):
    return make_user("admin@rx.test", Role.ADMIN, display_name="Admin")


@pytest.fixture
def doctor(db):
    return make_user("doctor@rx.test", Role.DOCTOR, display_name="Dr. Ayesha Khan")


@pytest.fixture
def other_doctor(db):
    return make_user("doctor2@rx.test", Role.DOCTOR, display_name="Dr. Bilal Ahmed")


@pytest.fixture
def dispenser(db):
    return make_user("dispenser@rx.test", Role.DISPENSER, display_name="Sana Pharmacist")


@pytest.fixture
def doctor_caller(doctor):
    return caller_from_user(doctor)


@pytest.fixture
def other_doctor_caller(other_doctor):
    return caller_from_user(other_doctor)


@pytest.fixture
def dispenser_caller(dispenser):
    return caller_from_user(dispenser)


@pytest.fixture
def admin_caller(admin_user):
    return caller_from_user(admin_user)


@pytest.fixture
def admin_client(admin_user):
    return client_for(admin_user)


@pytest.fixture
def doctor_client(doctor):
    return client_for(doctor)


@pytest.fixture
def other_doctor_client(other_doctor):
    return client_for(other_doctor)


@pytest.fixture
def dispenser_client(dispenser):
    return client_for(dispenser)


@pytest.fixture
def patient(doctor_caller):
    from rx_core.patients.services import PatientService

    return PatientService.create_patient(
        caller=doctor_caller,
        full_name="Ali Raza",
        phone="03001234567",
        address="House 12, Street 4, Lahore",
        national_id="35202-1234567-1",
        age_band="Adult",
    )


@pytest.fixture
def draft_prescription(doctor_caller, patient):
    from rx_core.prescriptions.services import PrescriptionService

    return PrescriptionService.create_prescription(
        caller=doctor_caller,
        patient_id=patient.id,
        diagnosis="Flu",
        recommendation="Rest and fluids",
        items=[item_payload()],
    )


@pytest.fixture
def final_prescription(doctor_caller, draft_prescription):
    from rx_core.prescriptions.services import PrescriptionService

    return PrescriptionService.finalize(caller=doctor_caller, prescription_id=draft_prescription.id)
