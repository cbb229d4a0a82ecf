# rx_core/common/permissions.py

from __future__ import annotations

import logging
from typing import FrozenSet, Set

from django.db import models
from rest_framework.permissions import BasePermission

logger = logging.getLogger(__name__)


class Role(models.TextChoices):
    """
    Role tags. Stored as Django auth Group names.
    """
    ADMIN = "ADMIN", "Administrator"
    DOCTOR = "DOCTOR", "Doctor"
    DISPENSER = "DISPENSER", "Dispenser"


ALL_ROLES: FrozenSet[Role] = frozenset(Role)


def user_roles(user) -> Set[Role]:
    """
    Resolve typed roles from Django groups.

    - Unauthenticated users have no roles.
    - Superusers are treated as ADMIN (in addition to any groups they hold).
    - Group names that are not a known Role are ignored.
    """
    roles: Set[Role] = set()

    if not user or not getattr(user, "is_authenticated", False):
        return roles

    if getattr(user, "is_superuser", False):
        roles.add(Role.ADMIN)

    if hasattr(user, "groups"):
        for name in user.groups.values_list("name", flat=True):
            if name in Role.values:
                roles.add(Role(name))

    return roles


class RolePermission(BasePermission):
    """
    Role-based access control per ViewSet action.

    Key behavior:
    - Requires authentication.
    - No implicit ADMIN bypass: every action lists the roles it accepts.
    - Unknown action => deny.
    """
    message = "You do not have permission to perform this action."

    # Override in subclasses: dict of action -> set of allowed roles
    allowed_roles_per_action: dict[str, Set[Role]] = {}

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False

        action = getattr(view, "action", None)
        allowed = self.allowed_roles_per_action.get(action)
        if allowed is None:
            return False

        if user_roles(user) & allowed:
            return True

        logger.warning(
            "Role check failed: user=%s action=%s.%s required=%s",
            user.pk,
            view.__class__.__name__,
            action,
            sorted(allowed),
        )
        return False


# Specific permission classes for each module

class DoctorPermission(RolePermission):
    """Doctor-only workspace (patients, prescriptions, catalog, pad)."""
    allowed_roles_per_action = {
        "list": {Role.DOCTOR},
        "retrieve": {Role.DOCTOR},
        "create": {Role.DOCTOR},
        "update": {Role.DOCTOR},
        "finalize": {Role.DOCTOR},
        "pdf": {Role.DOCTOR},
    }


class DispensingPermission(RolePermission):
    """Dispensing gateway: redacted reads + dispense."""
    allowed_roles_per_action = {
        "list": {Role.DISPENSER, Role.ADMIN},
        "retrieve": {Role.DISPENSER, Role.ADMIN},
        "all": {Role.DISPENSER, Role.ADMIN},
        "stats": {Role.DISPENSER, Role.ADMIN},
        "dispense": {Role.DISPENSER, Role.ADMIN},
    }


class AdminPermission(RolePermission):
    """User management + audit trail."""
    allowed_roles_per_action = {
        "list": {Role.ADMIN},
        "retrieve": {Role.ADMIN},
        "create": {Role.ADMIN},
    }
