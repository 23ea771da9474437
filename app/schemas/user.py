"""Pydantic schemas for sign-up input."""

from __future__ import annotations

import re

from pydantic import BaseModel, field_validator

from app.models.enums import Role

_USERNAME_RE = re.compile(r"^[A-Za-z0-9_.-]{3,80}$")
_PHONE_RE = re.compile(r"^\+?[0-9 ()-]{7,30}$")


class SignUp(BaseModel):
    username: str
    password: str
    first_name: str
    last_name: str
    phone_number: str
    roles: list[Role] = [Role.USER]

    @field_validator("username")
    @classmethod
    def _username(cls, v: str) -> str:
        v = v.strip()
        if not _USERNAME_RE.match(v):
            raise ValueError(
                "Username must be 3-80 characters (letters, digits, '.', '_' or '-')"
            )
        return v

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters")
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password must not exceed 72 bytes")
        return v

    @field_validator("first_name", "last_name")
    @classmethod
    def _name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name must not be empty")
        if len(v) > 100:
            raise ValueError("Name must not exceed 100 characters")
        return v

    @field_validator("phone_number")
    @classmethod
    def _phone(cls, v: str) -> str:
        v = v.strip()
        if not _PHONE_RE.match(v):
            raise ValueError("Phone number must be 7-30 digits")
        return v

    @field_validator("roles", mode="before")
    @classmethod
    def _roles(cls, v: object) -> object:
        if v is None:
            return [Role.USER]
        return v

    @field_validator("roles")
    @classmethod
    def _distinct_roles(cls, v: list[Role]) -> list[Role]:
        if not v:
            raise ValueError("At least one role is required")
        return list(dict.fromkeys(v))
