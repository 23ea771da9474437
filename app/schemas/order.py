"""Pydantic schemas for order input."""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class OrderCreate(BaseModel):
    item_ids: list[str]
    comment: str | None = None

    @field_validator("item_ids")
    @classmethod
    def _items(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("An order needs at least one item")
        if any(not i.strip() for i in v):
            raise ValueError("Item ids must not be blank")
        return v

    @field_validator("comment")
    @classmethod
    def _comment(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if len(v) > 1000:
            raise ValueError("Comment must not exceed 1000 characters")
        return v or None


class OrderStatusUpdate(BaseModel):
    status_message: str | None = None
    fulfilled: bool | None = None

    @field_validator("status_message")
    @classmethod
    def _status(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("Status message must not be empty")
        if len(v) > 200:
            raise ValueError("Status message must not exceed 200 characters")
        return v
