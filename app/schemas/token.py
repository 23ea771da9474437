"""Pydantic schemas for JWT tokens."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from app.models.enums import Role


class TokenPayload(BaseModel):
    sub: str
    roles: frozenset[Role]
    type: str | None = None

    @field_validator("roles")
    @classmethod
    def _non_empty(cls, v: frozenset[Role]) -> frozenset[Role]:
        if not v:
            raise ValueError("Token carries no roles")
        return v
