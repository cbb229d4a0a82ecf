# rx_core/audit/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from rx_core.audit.models import AuditLog
from rx_core.iam.models import display_name_of


class AuditLogSerializer(serializers.ModelSerializer):
    actor_user_id = serializers.IntegerField(source="actor_id", read_only=True)
    actor_name = serializers.SerializerMethodField()

    class Meta:
        model = AuditLog
        fields = [
            "id",
            "actor_user_id",
            "actor_name",
            "action",
            "resource_type",
            "resource_id",
            "details",
            "created_at",
        ]
        read_only_fields = fields

    def get_actor_name(self, obj) -> str:
        return display_name_of(obj.actor)
