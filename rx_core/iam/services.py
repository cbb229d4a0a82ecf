# rx_core/iam/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from rx_core.audit.models import AuditAction, ResourceType
from rx_core.audit.services import AuditService
from rx_core.common.exceptions import Conflict
from rx_core.common.permissions import Role
from rx_core.iam.caller import Caller, require_roles
from rx_core.iam.models import UserProfile

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class CreatedUser:
    id: int
    email: str
    display_name: str
    roles: tuple[str, ...]


class UserService:
    @staticmethod
    @transaction.atomic
    def create_user(
        *,
        caller: Optional[Caller],
        email: str,
        password: str,
        display_name: str,
        roles: Iterable[str],
    ) -> CreatedUser:
        """
        Admin creates a user with one or more roles.
        Email is the login identity and must be unique (case-insensitive).
        """
        require_roles(caller, {Role.ADMIN})

        email = (email or "").strip().lower()
        display_name = (display_name or "").strip()
        role_values = sorted({str(r).strip().upper() for r in (roles or []) if str(r).strip()})

        errors: dict[str, list[str]] = {}
        if not email:
            errors["email"] = ["This field is required."]
        if not display_name:
            errors["display_name"] = ["This field is required."]
        if len(password or "") < MIN_PASSWORD_LENGTH:
            errors["password"] = [f"Password must be at least {MIN_PASSWORD_LENGTH} characters."]
        if not role_values:
            errors["roles"] = ["At least one role is required."]
        else:
            unknown = [r for r in role_values if r not in Role.values]
            if unknown:
                errors["roles"] = [f"Unknown role: {', '.join(unknown)}"]
        if errors:
            raise ValidationError(errors)

        User = get_user_model()
        if User.objects.filter(username__iexact=email).exists():
            raise Conflict("A user with this email already exists.")

        try:
            # savepoint so a lost race on the unique username does not poison the outer transaction
            with transaction.atomic():
                user = User.objects.create_user(username=email, email=email, password=password)
        except IntegrityError as e:
            raise Conflict("A user with this email already exists.") from e

        UserProfile.objects.create(user=user, display_name=display_name)
        for value in role_values:
            group, _ = Group.objects.get_or_create(name=value)
            user.groups.add(group)

        AuditService.record(
            actor_user_id=caller.user_id,
            action=AuditAction.CREATE_USER,
            resource_type=ResourceType.USER,
            resource_id=user.pk,
            details={
                "display_name": display_name,
                "email": email,
                "roles": role_values,
                "created_by": caller.user_id,
            },
        )
        logger.info("User created: user_id=%s roles=%s", user.pk, role_values)

        return CreatedUser(id=user.pk, email=email, display_name=display_name, roles=tuple(role_values))
