# rx_core/audit/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from rx_core.audit.api.serializers import AuditLogSerializer
from rx_core.audit.models import AuditAction, AuditLog, ResourceType
from rx_core.audit.selectors import list_audit_logs
from rx_core.common.permissions import AdminPermission

DEFAULT_LIMIT = 100
MAX_LIMIT = 500


class AuditLogViewSet(viewsets.GenericViewSet):
    """
    List audit trail rows (ADMIN only), newest first.
    """
    permission_classes = [IsAuthenticated, AdminPermission]

    serializer_class = AuditLogSerializer
    queryset = AuditLog.objects.none()

    @extend_schema(
        tags=["Audit"],
        responses={200: AuditLogSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="action",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                enum=AuditAction.values,
                description="Filter by action.",
            ),
            OpenApiParameter(
                name="resource_type",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                enum=ResourceType.values,
                description="Filter by resource type.",
            ),
            OpenApiParameter(
                name="resource_id",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter by resource id.",
            ),
            OpenApiParameter(
                name="actor_user_id",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter by actor user id (int).",
            ),
            OpenApiParameter(
                name="limit",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description=f"Max records to return (default {DEFAULT_LIMIT}, max {MAX_LIMIT}).",
            ),
        ],
    )
    def list(self, request):
        params = request.query_params

        actor_user_id = None
        actor_raw = params.get("actor_user_id")
        if actor_raw:
            try:
                actor_user_id = int(actor_raw)
            except ValueError:
                raise ValidationError({"actor_user_id": "Invalid actor_user_id (int expected)"})

        qs = list_audit_logs(
            action=params.get("action") or None,
            resource_type=params.get("resource_type") or None,
            resource_id=params.get("resource_id") or None,
            actor_user_id=actor_user_id,
        )

        limit = params.get("limit")
        try:
            limit_n = int(limit) if limit else DEFAULT_LIMIT
        except ValueError:
            limit_n = DEFAULT_LIMIT
        limit_n = max(1, min(limit_n, MAX_LIMIT))

        return Response(AuditLogSerializer(qs[:limit_n], many=True).data, status=status.HTTP_200_OK)
