# rx_core/catalog/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from rx_core.catalog.api.serializers import MedicineSerializer
from rx_core.catalog.models import Medicine
from rx_core.catalog.selectors import list_active_medicines
from rx_core.common.api.pagination import paginate
from rx_core.common.permissions import DoctorPermission


class MedicineViewSet(viewsets.GenericViewSet):
    """Active catalog for the prescription form."""
    permission_classes = [IsAuthenticated, DoctorPermission]

    serializer_class = MedicineSerializer
    queryset = Medicine.objects.none()

    @extend_schema(
        tags=["Catalog"],
        responses={200: MedicineSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="q",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Case-insensitive name search.",
            ),
        ],
    )
    def list(self, request):
        qs = list_active_medicines(q=request.query_params.get("q") or None)
        return paginate(request, qs, MedicineSerializer)
