# rx_core/audit/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from django.db import DatabaseError, transaction

from rx_core.audit.models import AuditAction, AuditLog, ResourceType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditRecord:
    id: int
    actor_user_id: int
    action: str
    resource_type: str
    resource_id: str
    details: Dict[str, Any]


class AuditService:
    """
    Central audit writer.

    Runs inside the caller's transaction, so the audit row commits or rolls back
    with the mutation it describes. The insert itself sits in a savepoint: a
    failing insert is rolled back to the savepoint and logged, and the parent
    operation continues.
    """

    @staticmethod
    def record(
        *,
        actor_user_id: int,
        action: AuditAction,
        resource_type: ResourceType,
        resource_id: Any,
        details: Optional[Dict[str, Any]] = None,
    ) -> Optional[AuditRecord]:
        details = details or {}
        resource_id = str(resource_id)

        try:
            with transaction.atomic():
                row = AuditLog.objects.create(
                    actor_id=actor_user_id,
                    action=action,
                    resource_type=resource_type,
                    resource_id=resource_id,
                    details=details,
                )
        except DatabaseError:
            logger.exception(
                "Audit write failed: action=%s resource=%s:%s actor=%s",
                action,
                resource_type,
                resource_id,
                actor_user_id,
            )
            return None

        return AuditRecord(
            id=row.pk,
            actor_user_id=actor_user_id,
            action=str(action),
            resource_type=str(resource_type),
            resource_id=resource_id,
            details=details,
        )
