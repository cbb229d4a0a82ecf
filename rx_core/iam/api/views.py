# rx_core/iam/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from rx_core.common.api.pagination import paginate
from rx_core.common.permissions import AdminPermission
from rx_core.iam.api.serializers import UserCreateSerializer, UserCreatedSerializer, UserSerializer
from rx_core.iam.caller import current_caller
from rx_core.iam.selectors import list_users
from rx_core.iam.services import UserService


class UserViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Admin user management.

    POST /api/v1/users/  -> create user with roles
    GET  /api/v1/users/  -> list users
    """
    permission_classes = [IsAuthenticated, AdminPermission]
    serializer_class = UserSerializer
    filter_backends: list = []

    def get_queryset(self):
        return list_users()

    @extend_schema(request=UserCreateSerializer, responses={201: UserCreatedSerializer}, tags=["Users"])
    def create(self, request, *args, **kwargs):
        ser = UserCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        created = UserService.create_user(caller=current_caller(request), **ser.validated_data)
        return Response(
            UserCreatedSerializer(
                {"id": created.id, "email": created.email, "display_name": created.display_name, "roles": list(created.roles)}
            ).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(responses={200: UserSerializer(many=True)}, tags=["Users"])
    def list(self, request, *args, **kwargs):
        return paginate(request, self.get_queryset(), UserSerializer)
