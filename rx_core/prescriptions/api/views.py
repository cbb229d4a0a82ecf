# rx_core/prescriptions/api/views.py
from __future__ import annotations

from django.http import HttpResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from rx_core.common.api.pagination import paginate
from rx_core.common.permissions import DispensingPermission, DoctorPermission
from rx_core.iam.caller import current_caller
from rx_core.prescriptions.api.serializers import (
    DispensingPrescriptionSerializer,
    DispensingStatsSerializer,
    PrescriptionSerializer,
    PrescriptionWriteSerializer,
)
from rx_core.prescriptions.models import Prescription, PrescriptionStatus
from rx_core.prescriptions.selectors import (
    dispensing_stats,
    get_prescription_for_dispensing,
    get_prescription_for_doctor,
    list_final_for_dispensing,
    list_pending_for_dispensing,
    list_prescriptions_for_doctor,
)
from rx_core.prescriptions.services import PrescriptionService


class PrescriptionViewSet(viewsets.ViewSet):
    """
    Doctor workspace: own prescriptions only.

    POST /api/v1/prescriptions/                 -> create DRAFT
    GET  /api/v1/prescriptions/?status=         -> list mine
    GET  /api/v1/prescriptions/{id}/            -> detail
    PUT  /api/v1/prescriptions/{id}/            -> full replace (DRAFT only)
    POST /api/v1/prescriptions/{id}/finalize/   -> DRAFT -> FINAL
    GET  /api/v1/prescriptions/{id}/pdf/        -> PDF (FINAL only)
    """
    permission_classes = [IsAuthenticated, DoctorPermission]

    serializer_class = PrescriptionSerializer
    queryset = Prescription.objects.none()

    @extend_schema(
        tags=["Prescriptions"],
        responses={200: PrescriptionSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="status",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                enum=PrescriptionStatus.values,
            ),
        ],
    )
    def list(self, request):
        qs = list_prescriptions_for_doctor(
            doctor_id=request.user.id,
            status=request.query_params.get("status") or None,
        )
        return paginate(request, qs, PrescriptionSerializer)

    @extend_schema(tags=["Prescriptions"], request=PrescriptionWriteSerializer, responses={201: PrescriptionSerializer})
    def create(self, request):
        ser = PrescriptionWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        rx = PrescriptionService.create_prescription(caller=current_caller(request), **ser.validated_data)
        return Response(PrescriptionSerializer(rx).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Prescriptions"], responses={200: PrescriptionSerializer})
    def retrieve(self, request, pk=None):
        rx = get_prescription_for_doctor(doctor_id=request.user.id, prescription_id=pk)
        return Response(PrescriptionSerializer(rx).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Prescriptions"], request=PrescriptionWriteSerializer, responses={200: PrescriptionSerializer})
    def update(self, request, pk=None):
        ser = PrescriptionWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        rx = PrescriptionService.update_prescription(
            caller=current_caller(request),
            prescription_id=pk,
            **ser.validated_data,
        )
        return Response(PrescriptionSerializer(rx).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Prescriptions"], request=None, responses={200: PrescriptionSerializer})
    @action(detail=True, methods=["post"])
    def finalize(self, request, pk=None):
        rx = PrescriptionService.finalize(caller=current_caller(request), prescription_id=pk)
        return Response(PrescriptionSerializer(rx).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Prescriptions"],
        responses={(200, "application/pdf"): OpenApiResponse(response=OpenApiTypes.BINARY)},
    )
    @action(detail=True, methods=["get"])
    def pdf(self, request, pk=None):
        content = PrescriptionService.generate_pdf(caller=current_caller(request), prescription_id=pk)

        res = HttpResponse(content, content_type="application/pdf")
        res["Content-Disposition"] = f'attachment; filename="prescription-{str(pk)[:8]}.pdf"'
        res["Cache-Control"] = "no-store"
        return res


class DispensingViewSet(viewsets.ViewSet):
    """
    Dispensing gateway over FINAL prescriptions. Responses never carry patient PII.

    GET  /api/v1/dispensing/prescriptions/                -> pending queue
    GET  /api/v1/dispensing/prescriptions/all/?state=&q=  -> all FINAL
    GET  /api/v1/dispensing/prescriptions/stats/          -> counters
    GET  /api/v1/dispensing/prescriptions/{id}/           -> redacted detail
    POST /api/v1/dispensing/prescriptions/{id}/dispense/  -> mark dispensed
    """
    permission_classes = [IsAuthenticated, DispensingPermission]

    serializer_class = DispensingPrescriptionSerializer
    queryset = Prescription.objects.none()

    @extend_schema(tags=["Dispensing"], responses={200: DispensingPrescriptionSerializer(many=True)})
    def list(self, request):
        return paginate(request, list_pending_for_dispensing(), DispensingPrescriptionSerializer)

    @extend_schema(
        tags=["Dispensing"],
        responses={200: DispensingPrescriptionSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="state",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                enum=["all", "pending", "dispensed"],
            ),
            OpenApiParameter(
                name="q",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Patient code, prescription id prefix or doctor name.",
            ),
        ],
    )
    @action(detail=False, methods=["get"])
    def all(self, request):
        qs = list_final_for_dispensing(
            state=request.query_params.get("state") or "all",
            q=request.query_params.get("q") or None,
        )
        return paginate(request, qs, DispensingPrescriptionSerializer)

    @extend_schema(tags=["Dispensing"], responses={200: DispensingStatsSerializer})
    @action(detail=False, methods=["get"])
    def stats(self, request):
        return Response(DispensingStatsSerializer(dispensing_stats()).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Dispensing"], responses={200: DispensingPrescriptionSerializer})
    def retrieve(self, request, pk=None):
        rx = get_prescription_for_dispensing(prescription_id=pk)
        return Response(DispensingPrescriptionSerializer(rx).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Dispensing"], request=None, responses={200: DispensingPrescriptionSerializer})
    @action(detail=True, methods=["post"])
    def dispense(self, request, pk=None):
        rx = PrescriptionService.dispense(caller=current_caller(request), prescription_id=pk)
        return Response(DispensingPrescriptionSerializer(rx).data, status=status.HTTP_200_OK)
