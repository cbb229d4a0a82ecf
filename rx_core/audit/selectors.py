# rx_core/audit/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from rx_core.audit.models import AuditLog


def list_audit_logs(
    *,
    action: str | None = None,
    resource_type: str | None = None,
    resource_id: str | None = None,
    actor_user_id: int | None = None,
) -> QuerySet[AuditLog]:
    qs = AuditLog.objects.select_related("actor", "actor__rx_profile")

    if action:
        qs = qs.filter(action=action)
    if resource_type:
        qs = qs.filter(resource_type=resource_type)
    if resource_id:
        qs = qs.filter(resource_id=str(resource_id))
    if actor_user_id is not None:
        qs = qs.filter(actor_id=actor_user_id)

    return qs.order_by("-created_at", "-id")
