# rx_core/iam/caller.py

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from rx_core.common.exceptions import RoleRequired, Unauthenticated
from rx_core.common.permissions import Role, user_roles


@dataclass(frozen=True)
class Caller:
    """
    Authenticated principal handed explicitly to every service operation.
    """
    user_id: int
    roles: FrozenSet[Role]

    def has_any(self, required: Iterable[Role]) -> bool:
        return bool(self.roles & frozenset(required))


def caller_from_user(user) -> Optional[Caller]:
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return Caller(user_id=user.pk, roles=frozenset(user_roles(user)))


def current_caller(request) -> Optional[Caller]:
    """Identity provider contract: request -> Caller | None."""
    return caller_from_user(getattr(request, "user", None))


def require_roles(caller: Optional[Caller], required: Iterable[Role]) -> Caller:
    """
    Raise Unauthenticated without a caller, RoleRequired when it holds none of `required`.
    """
    if caller is None:
        raise Unauthenticated()
    if not caller.has_any(required):
        raise RoleRequired()
    return caller
