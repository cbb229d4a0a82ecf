# rx_core/common/ids.py
from __future__ import annotations

from typing import Any
from uuid import UUID

from django.core.exceptions import ValidationError


def parse_uuid(value: Any, field_name: str = "id") -> UUID:
    """
    Parse a resource id; malformed ids are rejected as caller input errors (400).
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise ValidationError({field_name: ["Invalid UUID."]})
