"""Pydantic schemas for menu item input."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, field_validator

from app.models.enums import MenuCategory

_CENTS = Decimal("0.01")


def normalise_price(v: str) -> str:
    """Parse decimal text and render it with two fractional digits."""
    try:
        price = Decimal(v.strip())
    except (InvalidOperation, AttributeError):
        raise ValueError("Price must be a decimal number such as '12.50'") from None
    if not price.is_finite() or price < 0:
        raise ValueError("Price must be a non-negative amount")
    if price == 0:
        price = Decimal(0)
    try:
        return str(price.quantize(_CENTS))
    except InvalidOperation:
        raise ValueError("Price is out of range") from None


class ItemWrite(BaseModel):
    item_description: str
    menu_category: MenuCategory
    item_price: str
    tags: list[str] = []
    item_image_url: str | None = None
    side_ids: list[str] = []
    upsell_ids: list[str] = []

    @field_validator("item_description")
    @classmethod
    def _description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Description must not be empty")
        if len(v) > 500:
            raise ValueError("Description must not exceed 500 characters")
        return v

    @field_validator("item_price")
    @classmethod
    def _price(cls, v: str) -> str:
        return normalise_price(v)

    @field_validator("tags", "side_ids", "upsell_ids", mode="before")
    @classmethod
    def _absent_is_empty(cls, v: object) -> object:
        if v is None:
            return []
        if isinstance(v, list):
            return [x for x in v if x is not None]
        return v

    @field_validator("tags")
    @classmethod
    def _tags(cls, v: list[str]) -> list[str]:
        # tags form a set; keep first-seen order
        cleaned = (t.strip().lower() for t in v if t)
        return list(dict.fromkeys(t for t in cleaned if t))

    @field_validator("side_ids", "upsell_ids")
    @classmethod
    def _ids(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(i for i in v if i))

    @field_validator("item_image_url")
    @classmethod
    def _image_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        v = v.strip()
        if len(v) > 2048:
            raise ValueError("Image URL must not exceed 2048 characters")
        return v
