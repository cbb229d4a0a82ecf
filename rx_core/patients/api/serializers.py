# rx_core/patients/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from rx_core.patients.models import Patient


class PatientCreateSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=32)
    address = serializers.CharField()
    national_id = serializers.CharField(max_length=15)
    age_band = serializers.CharField(max_length=32)


class PatientSerializer(serializers.ModelSerializer):
    """Doctor/admin projection: code + age band + PII."""
    full_name = serializers.CharField(source="pii.full_name", read_only=True)
    phone = serializers.CharField(source="pii.phone", read_only=True)
    address = serializers.CharField(source="pii.address", read_only=True)
    national_id = serializers.CharField(source="pii.national_id", read_only=True)

    class Meta:
        model = Patient
        fields = [
            "id",
            "patient_code",
            "age_band",
            "full_name",
            "phone",
            "address",
            "national_id",
            "created_at",
        ]
        read_only_fields = fields


class PatientListItemSerializer(PatientSerializer):
    last_prescribed_on = serializers.DateTimeField(read_only=True)

    class Meta(PatientSerializer.Meta):
        fields = PatientSerializer.Meta.fields + ["last_prescribed_on"]
        read_only_fields = fields


class PatientPrescriptionSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    status = serializers.CharField()
    diagnosis = serializers.CharField()
    issued_on = serializers.DateTimeField()
    dispensed_at = serializers.DateTimeField(allow_null=True)
    item_count = serializers.SerializerMethodField()

    def get_item_count(self, obj) -> int:
        return len(obj.items.all())


class PatientDetailSerializer(serializers.Serializer):
    patient = PatientSerializer()
    prescriptions = PatientPrescriptionSummarySerializer(many=True)
