# rx_core/prescriptions/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from rx_core.prescriptions.models import Prescription, PrescriptionItem


class PrescriptionItemInputSerializer(serializers.Serializer):
    medicine_name = serializers.CharField(max_length=255)
    strength = serializers.CharField(max_length=64)
    form = serializers.CharField(max_length=64)
    dosage = serializers.CharField(max_length=128)
    frequency = serializers.CharField(max_length=128)
    duration = serializers.CharField(max_length=128)
    remarks = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class PrescriptionWriteSerializer(serializers.Serializer):
    """
    Create (POST) and full replace (PUT) contract. No partial updates.
    """
    patient_id = serializers.UUIDField()
    diagnosis = serializers.CharField()
    recommendation = serializers.CharField()
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    items = PrescriptionItemInputSerializer(many=True, allow_empty=False)


class PrescriptionItemSerializer(serializers.ModelSerializer):
    medicine_id = serializers.IntegerField(read_only=True)
    medicine_name = serializers.CharField(source="medicine.name", read_only=True)
    strength = serializers.CharField(source="medicine.strength", read_only=True)
    form = serializers.CharField(source="medicine.form", read_only=True)

    class Meta:
        model = PrescriptionItem
        fields = [
            "position",
            "medicine_id",
            "medicine_name",
            "strength",
            "form",
            "dosage",
            "frequency",
            "duration",
            "remarks",
        ]
        read_only_fields = fields


class PrescriptionPatientSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    patient_code = serializers.CharField()
    age_band = serializers.CharField()
    full_name = serializers.CharField(source="pii.full_name")


class PrescriptionSerializer(serializers.ModelSerializer):
    """Doctor projection (includes patient name)."""
    patient = PrescriptionPatientSerializer(read_only=True)
    items = PrescriptionItemSerializer(many=True, read_only=True)
    dispensed_by_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Prescription
        fields = [
            "id",
            "status",
            "issued_on",
            "diagnosis",
            "recommendation",
            "notes",
            "dispensed_at",
            "dispensed_by_id",
            "patient",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class RedactedPatientSerializer(serializers.Serializer):
    patient_code = serializers.CharField()
    age_band = serializers.CharField()


class DispensingPrescriptionSerializer(serializers.ModelSerializer):
    """Dispenser projection: no patient identity beyond code + age band."""
    patient = RedactedPatientSerializer(read_only=True)
    items = PrescriptionItemSerializer(many=True, read_only=True)
    dispensed_by_id = serializers.IntegerField(read_only=True, allow_null=True)
    doctor_name = serializers.CharField(read_only=True)

    class Meta:
        model = Prescription
        fields = [
            "id",
            "status",
            "issued_on",
            "dispensed_at",
            "dispensed_by_id",
            "diagnosis",
            "recommendation",
            "notes",
            "doctor_name",
            "patient",
            "items",
        ]
        read_only_fields = fields


class DispensingStatsSerializer(serializers.Serializer):
    total_final = serializers.IntegerField()
    total_dispensed = serializers.IntegerField()
    today_dispensed = serializers.IntegerField()
