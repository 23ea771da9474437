"""Closed enumerations shared by the storage models and the GraphQL schema."""

from __future__ import annotations

import enum


class Role(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class MenuCategory(str, enum.Enum):
    APPETIZER = "APPETIZER"
    ENTRE = "ENTRE"
    SIDE = "SIDE"
    DESERT = "DESERT"
    DRINK = "DRINK"
    UPSELL = "UPSELL"


PRIVILEGED_ROLES = frozenset({Role.ADMIN, Role.SUPER_ADMIN})
