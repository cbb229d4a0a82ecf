# rx_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from rx_core.audit.api.views import AuditLogViewSet
from rx_core.catalog.api.views import MedicineViewSet
from rx_core.dashboard.api.views import AdminDashboardViewSet, DoctorDashboardViewSet
from rx_core.iam.api.auth import LoginView, LogoutView, RefreshView
from rx_core.iam.api.me import MeView
from rx_core.iam.api.views import UserViewSet
from rx_core.pad.api.views import RawPrescriptionViewSet
from rx_core.patients.api.views import PatientViewSet
from rx_core.prescriptions.api.views import DispensingViewSet, PrescriptionViewSet

router = DefaultRouter()

router.register(r"patients", PatientViewSet, basename="patients")
router.register(r"medicines", MedicineViewSet, basename="medicines")
router.register(r"prescriptions", PrescriptionViewSet, basename="prescriptions")
router.register(r"dispensing/prescriptions", DispensingViewSet, basename="dispensing")
router.register(r"pad/prescriptions", RawPrescriptionViewSet, basename="pad-prescriptions")
router.register(r"users", UserViewSet, basename="users")
router.register(r"audit/logs", AuditLogViewSet, basename="audit-logs")
router.register(r"dashboard/admin", AdminDashboardViewSet, basename="dashboard-admin")
router.register(r"dashboard/doctor", DoctorDashboardViewSet, basename="dashboard-doctor")

urlpatterns = [
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", RefreshView.as_view(), name="refresh"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),

    *router.urls,
]
