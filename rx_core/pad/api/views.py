# rx_core/pad/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from rx_core.common.api.pagination import PadPagination, paginate
from rx_core.common.permissions import DoctorPermission
from rx_core.iam.caller import current_caller
from rx_core.pad.api.serializers import RawPrescriptionCreateSerializer, RawPrescriptionSerializer
from rx_core.pad.models import RawPrescription
from rx_core.pad.selectors import get_raw_prescription_for_doctor, list_raw_prescriptions_for_doctor
from rx_core.pad.services import PadService


class RawPrescriptionViewSet(viewsets.ViewSet):
    """
    POST /api/v1/pad/prescriptions/       -> save pad transcription
    GET  /api/v1/pad/prescriptions/       -> mine, newest first (?limit=&offset=)
    GET  /api/v1/pad/prescriptions/{id}/  -> detail
    """
    permission_classes = [IsAuthenticated, DoctorPermission]

    serializer_class = RawPrescriptionSerializer
    queryset = RawPrescription.objects.none()

    @extend_schema(tags=["Prescription pad"], responses={200: RawPrescriptionSerializer(many=True)})
    def list(self, request):
        qs = list_raw_prescriptions_for_doctor(doctor_id=request.user.id)
        return paginate(request, qs, RawPrescriptionSerializer, paginator=PadPagination())

    @extend_schema(
        tags=["Prescription pad"],
        request=RawPrescriptionCreateSerializer,
        responses={201: RawPrescriptionSerializer},
    )
    def create(self, request):
        ser = RawPrescriptionCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        raw = PadService.create_raw_prescription(caller=current_caller(request), **ser.validated_data)
        raw = get_raw_prescription_for_doctor(doctor_id=request.user.id, raw_prescription_id=raw.id)
        return Response(RawPrescriptionSerializer(raw).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Prescription pad"], responses={200: RawPrescriptionSerializer})
    def retrieve(self, request, pk=None):
        raw = get_raw_prescription_for_doctor(doctor_id=request.user.id, raw_prescription_id=pk)
        return Response(RawPrescriptionSerializer(raw).data, status=status.HTTP_200_OK)
