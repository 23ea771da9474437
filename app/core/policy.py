"""
Access policy for every root query and mutation.

The table is consulted uniformly before a root field resolves; nested
fields below an authorized root are not re-checked.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from app.core.exceptions import Forbidden, Unauthenticated
from app.core.security import verify_token
from app.models.enums import PRIVILEGED_ROLES, Role

logger = logging.getLogger(__name__)


class Scope(str, enum.Enum):
    NONE = "none"
    OWNER = "owner"  # non-privileged callers only see their own records
    SUBJECT = "subject"  # writes are bound to the token subject


@dataclass(frozen=True)
class Policy:
    authenticated: bool = False
    roles: frozenset[Role] | None = None
    scope: Scope = Scope.NONE


@dataclass(frozen=True)
class Principal:
    subject: str
    roles: frozenset[Role]

    @property
    def is_privileged(self) -> bool:
        return bool(self.roles & PRIVILEGED_ROLES)

    def can_access(self, owner_id: str | None) -> bool:
        return self.is_privileged or (owner_id is not None and owner_id == self.subject)


PUBLIC = Policy()
OWN_RECORDS = Policy(authenticated=True, scope=Scope.OWNER)
OWN_WRITES = Policy(authenticated=True, scope=Scope.SUBJECT)
STAFF_ONLY = Policy(authenticated=True, roles=PRIVILEGED_ROLES)

POLICIES: dict[str, Policy] = {
    # queries
    "viewer": OWN_RECORDS,
    "user": OWN_RECORDS,
    "users": STAFF_ONLY,
    "item": PUBLIC,
    "items": PUBLIC,
    "allItems": PUBLIC,
    "order": OWN_RECORDS,
    "allOrders": STAFF_ONLY,
    "menu": PUBLIC,
    # mutations
    "signUp": PUBLIC,
    "logIn": PUBLIC,
    "createItem": STAFF_ONLY,
    "editItem": STAFF_ONLY,
    "removeItem": STAFF_ONLY,
    "createOrder": OWN_WRITES,
    "updateOrderStatus": STAFF_ONLY,
    "addFavoriteItem": OWN_WRITES,
    "removeFavoriteItem": OWN_WRITES,
}


def resolve_principal(token: str | None) -> Principal | None:
    """Map a presented credential to a principal, ``None`` if unusable."""
    if not token:
        return None
    payload = verify_token(token)
    if payload is None:
        return None
    return Principal(subject=payload.sub, roles=frozenset(payload.roles))


def authorize(operation: str, token: str | None) -> Principal | None:
    """Decide whether *token* may invoke *operation*.

    Returns the caller's principal (``None`` for an anonymous caller of a
    public operation). Raises :class:`Unauthenticated` when a gated
    operation gets no usable token and :class:`Forbidden` when the roles
    do not satisfy the policy. Operations missing from the table are denied.
    """
    policy = POLICIES.get(operation)
    if policy is None:
        logger.warning("Denied '%s': no access policy registered", operation)
        raise Forbidden(f"Operation '{operation}' is not available")

    principal = resolve_principal(token)
    if not policy.authenticated:
        return principal

    if principal is None:
        raise Unauthenticated()
    if policy.roles is not None and not (principal.roles & policy.roles):
        logger.info("Denied '%s' to %s: roles %s", operation, principal.subject,
                    sorted(r.value for r in principal.roles))
        raise Forbidden(f"Operation '{operation}' requires an administrator")
    return principal


def permits(operation: str, principal: Principal | None, owner_id: str | None) -> bool:
    """Apply the operation's scoping rule to one record owned by *owner_id*."""
    policy = POLICIES[operation]
    if policy.scope is Scope.OWNER:
        return principal is not None and principal.can_access(owner_id)
    return True
