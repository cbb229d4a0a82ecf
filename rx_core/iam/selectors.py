# rx_core/iam/selectors.py
from __future__ import annotations

from django.contrib.auth import get_user_model
from django.db.models import Prefetch, QuerySet
from django.contrib.auth.models import Group

from rx_core.common.permissions import Role


def list_users() -> QuerySet:
    """All users with profile + role groups, newest first."""
    User = get_user_model()
    return (
        User.objects.select_related("rx_profile")
        .prefetch_related(Prefetch("groups", queryset=Group.objects.filter(name__in=Role.values).order_by("name")))
        .order_by("-date_joined", "-id")
    )


def count_users_with_role(role: Role) -> int:
    return get_user_model().objects.filter(groups__name=role.value).distinct().count()
