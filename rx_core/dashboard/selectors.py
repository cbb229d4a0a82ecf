# rx_core/dashboard/selectors.py
from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model
from django.db.models import Count, Q
from django.utils import timezone

from rx_core.audit.selectors import list_audit_logs
from rx_core.common.permissions import Role
from rx_core.iam.selectors import count_users_with_role
from rx_core.patients.models import Patient
from rx_core.prescriptions.models import Prescription, PrescriptionStatus

RECENT_PRESCRIPTIONS = 5
RECENT_AUDIT_LOGS = 10


def _start_of_today():
    return timezone.localtime().replace(hour=0, minute=0, second=0, microsecond=0)


def admin_dashboard() -> dict[str, Any]:
    counts = Prescription.objects.aggregate(
        total_prescriptions=Count("id"),
        final_prescriptions=Count("id", filter=Q(status=PrescriptionStatus.FINAL)),
        dispensed_prescriptions=Count("id", filter=Q(dispensed_at__isnull=False)),
        today_prescriptions=Count("id", filter=Q(issued_on__gte=_start_of_today())),
    )
    return {
        "total_users": get_user_model().objects.count(),
        "total_doctors": count_users_with_role(Role.DOCTOR),
        "total_dispensers": count_users_with_role(Role.DISPENSER),
        "total_patients": Patient.objects.count(),
        **counts,
        "recent_prescriptions": list(
            Prescription.objects.select_related("patient", "patient__pii", "doctor", "doctor__rx_profile")
            .order_by("-issued_on")[:RECENT_PRESCRIPTIONS]
        ),
        "recent_audit_logs": list(list_audit_logs()[:RECENT_AUDIT_LOGS]),
    }


def doctor_dashboard(*, doctor_id: int) -> dict[str, Any]:
    mine = Prescription.objects.filter(doctor_id=doctor_id)
    counts = mine.aggregate(
        total_prescriptions=Count("id"),
        draft_prescriptions=Count("id", filter=Q(status=PrescriptionStatus.DRAFT)),
        final_prescriptions=Count("id", filter=Q(status=PrescriptionStatus.FINAL)),
    )
    return {
        **counts,
        "total_patients": mine.values("patient_id").distinct().count(),
        "recent_prescriptions": list(
            mine.select_related("patient", "patient__pii").order_by("-issued_on")[:RECENT_PRESCRIPTIONS]
        ),
    }
