# rx_core/catalog/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from rx_core.catalog.models import Medicine


def list_active_medicines(*, q: str | None = None) -> QuerySet[Medicine]:
    qs = Medicine.objects.filter(is_active=True)
    if q:
        qs = qs.filter(name__icontains=q.strip())
    return qs.order_by("name", "strength", "form")
