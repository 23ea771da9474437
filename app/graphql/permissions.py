"""
Strawberry permission class that applies the access policy table.

Attached to every root query and mutation. Denials raise the domain
error directly, so the client sees ``UNAUTHENTICATED`` and ``FORBIDDEN``
as distinct codes.
"""

from __future__ import annotations

from typing import Any

from strawberry.permission import BasePermission
from strawberry.types import Info


class PolicyGate(BasePermission):
    message = "Access denied"

    def has_permission(self, source: Any, info: Info, **kwargs: Any) -> bool:
        info.context.authorize(info.field_name, kwargs.get("webtoken"))
        return True


GATED = [PolicyGate]
