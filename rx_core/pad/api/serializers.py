# rx_core/pad/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from rx_core.pad.models import RawPrescription, RawPrescriptionMedicine


class PadMedicineInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, allow_blank=True)
    # morning / noon / night
    frequencies = serializers.ListField(child=serializers.BooleanField(), min_length=3, max_length=3)


class RawPrescriptionCreateSerializer(serializers.Serializer):
    patient_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    patient_age = serializers.CharField(max_length=32, required=False, allow_blank=True)
    patient_gender = serializers.CharField(max_length=32, required=False, allow_blank=True)
    patient_cnic = serializers.CharField(max_length=32, required=False, allow_blank=True)
    patient_phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    patient_address = serializers.CharField(required=False, allow_blank=True)
    diagnosis = serializers.CharField(required=False, allow_blank=True)
    tests = serializers.CharField(required=False, allow_blank=True)
    recommendations = serializers.CharField(required=False, allow_blank=True)
    medicines = PadMedicineInputSerializer(many=True)


class RawPrescriptionMedicineSerializer(serializers.ModelSerializer):
    class Meta:
        model = RawPrescriptionMedicine
        fields = ["medicine_order", "medicine_name", "frequency1", "frequency2", "frequency3"]
        read_only_fields = fields


class RawPrescriptionSerializer(serializers.ModelSerializer):
    medicines = RawPrescriptionMedicineSerializer(many=True, read_only=True)

    class Meta:
        model = RawPrescription
        fields = [
            "id",
            "patient_name",
            "patient_age",
            "patient_gender",
            "patient_cnic",
            "patient_phone",
            "patient_address",
            "diagnosis",
            "tests",
            "recommendations",
            "medicines",
            "created_at",
        ]
        read_only_fields = fields
