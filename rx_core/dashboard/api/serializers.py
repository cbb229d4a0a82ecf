# rx_core/dashboard/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from rx_core.audit.api.serializers import AuditLogSerializer
from rx_core.iam.models import display_name_of


class RecentPrescriptionSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    status = serializers.CharField()
    diagnosis = serializers.CharField()
    issued_on = serializers.DateTimeField()
    dispensed_at = serializers.DateTimeField(allow_null=True)
    patient_code = serializers.CharField(source="patient.patient_code")
    patient_name = serializers.CharField(source="patient.pii.full_name")


class AdminRecentPrescriptionSerializer(RecentPrescriptionSerializer):
    doctor_name = serializers.SerializerMethodField()

    def get_doctor_name(self, obj) -> str:
        return display_name_of(obj.doctor)


class AdminDashboardSerializer(serializers.Serializer):
    total_users = serializers.IntegerField()
    total_doctors = serializers.IntegerField()
    total_dispensers = serializers.IntegerField()
    total_patients = serializers.IntegerField()
    total_prescriptions = serializers.IntegerField()
    final_prescriptions = serializers.IntegerField()
    dispensed_prescriptions = serializers.IntegerField()
    today_prescriptions = serializers.IntegerField()
    recent_prescriptions = AdminRecentPrescriptionSerializer(many=True)
    recent_audit_logs = AuditLogSerializer(many=True)


class DoctorDashboardSerializer(serializers.Serializer):
    total_prescriptions = serializers.IntegerField()
    draft_prescriptions = serializers.IntegerField()
    final_prescriptions = serializers.IntegerField()
    total_patients = serializers.IntegerField()
    recent_prescriptions = RecentPrescriptionSerializer(many=True)
