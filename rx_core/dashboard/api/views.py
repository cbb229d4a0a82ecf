# rx_core/dashboard/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from rx_core.common.permissions import AdminPermission, DoctorPermission
from rx_core.dashboard.api.serializers import AdminDashboardSerializer, DoctorDashboardSerializer
from rx_core.dashboard.selectors import admin_dashboard, doctor_dashboard


class AdminDashboardViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated, AdminPermission]
    serializer_class = AdminDashboardSerializer

    @extend_schema(tags=["Dashboard"], responses={200: AdminDashboardSerializer})
    def list(self, request):
        return Response(AdminDashboardSerializer(admin_dashboard()).data, status=status.HTTP_200_OK)


class DoctorDashboardViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated, DoctorPermission]
    serializer_class = DoctorDashboardSerializer

    @extend_schema(tags=["Dashboard"], responses={200: DoctorDashboardSerializer})
    def list(self, request):
        data = doctor_dashboard(doctor_id=request.user.id)
        return Response(DoctorDashboardSerializer(data).data, status=status.HTTP_200_OK)
