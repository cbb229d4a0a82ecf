# rx_core/iam/api/me.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from rx_core.iam.api.serializers import MeResponseSerializer
from rx_core.iam.caller import current_caller
from rx_core.iam.models import display_name_of


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: MeResponseSerializer}, tags=["IAM"])
    def get(self, request):
        """Current caller: identity + role tags."""
        caller = current_caller(request)
        user = request.user
        return Response(
            {
                "user": {
                    "id": user.id,
                    "email": getattr(user, "email", None),
                    "display_name": display_name_of(user),
                },
                "roles": sorted(r.value for r in caller.roles),
            },
            status=status.HTTP_200_OK,
        )
