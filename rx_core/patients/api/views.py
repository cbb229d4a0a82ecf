# rx_core/patients/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from rx_core.common.api.pagination import paginate
from rx_core.common.permissions import DoctorPermission
from rx_core.iam.caller import current_caller
from rx_core.patients.api.serializers import (
    PatientCreateSerializer,
    PatientDetailSerializer,
    PatientListItemSerializer,
    PatientSerializer,
)
from rx_core.patients.models import Patient
from rx_core.patients.selectors import get_patient_for_doctor, list_patients_for_doctor
from rx_core.patients.services import PatientService


class PatientViewSet(viewsets.ViewSet):
    """
    POST /api/v1/patients/       -> register patient (returns PII projection)
    GET  /api/v1/patients/       -> patients I have prescribed for
    GET  /api/v1/patients/{id}/  -> patient + my prescriptions for them
    """
    permission_classes = [IsAuthenticated, DoctorPermission]

    serializer_class = PatientSerializer
    queryset = Patient.objects.none()

    @extend_schema(responses={200: PatientListItemSerializer(many=True)}, tags=["Patients"])
    def list(self, request):
        qs = list_patients_for_doctor(doctor_id=request.user.id)
        return paginate(request, qs, PatientListItemSerializer)

    @extend_schema(request=PatientCreateSerializer, responses={201: PatientSerializer}, tags=["Patients"])
    def create(self, request):
        ser = PatientCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        patient = PatientService.create_patient(caller=current_caller(request), **ser.validated_data)
        return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: PatientDetailSerializer}, tags=["Patients"])
    def retrieve(self, request, pk=None):
        detail = get_patient_for_doctor(doctor_id=request.user.id, patient_id=pk)
        return Response(
            PatientDetailSerializer({"patient": detail.patient, "prescriptions": detail.prescriptions}).data,
            status=status.HTTP_200_OK,
        )
