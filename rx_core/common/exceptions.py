# rx_core/common/exceptions.py
"""
Domain errors raised by services and selectors.

The API layer translates them (see rx_core.common.api.exceptions); nothing in
the domain layer knows about HTTP.
"""
from __future__ import annotations


class DomainError(Exception):
    default_message = "Request failed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(DomainError):
    default_message = "Authentication credentials were not provided."


class RoleRequired(DomainError):
    default_message = "You do not have permission to perform this action."


class NotFoundOrForbidden(DomainError):
    """
    Single failure for "does not exist", "not yours" and "wrong state".
    Callers must never be able to tell these apart.
    """
    default_message = "Not found."


class Conflict(DomainError):
    default_message = "Conflict."
