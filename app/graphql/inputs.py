"""
GraphQL input types and their conversion into validated pydantic models.

Inputs form their own graph: they reference other inputs or scalars,
never output types. GraphQL coercion already enforces required fields and
enum membership; the pydantic pass adds the value-level rules.
"""

from __future__ import annotations

from typing import Any, TypeVar

import strawberry
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from strawberry.utils.str_converters import to_camel_case

from app.core.exceptions import ValidationError
from app.models.enums import MenuCategory

M = TypeVar("M", bound=BaseModel)

# python attribute -> wire name, where auto camel-casing gets it wrong
_WIRE_NAMES = {"item_image_url": "itemImageURL"}


@strawberry.input(name="itemInput")
class ItemInput:
    item_description: str
    menu_category: MenuCategory
    item_price: str
    tags: list[str | None] | None = None
    item_image_url: str | None = strawberry.field(default=None, name="itemImageURL")
    side_ids: list[str | None] | None = None
    upsell_ids: list[str | None] | None = None


@strawberry.input(name="orderInput")
class OrderInput:
    item_ids: list[str]
    comment: str | None = None


def wire_name(attribute: str) -> str:
    return _WIRE_NAMES.get(attribute) or to_camel_case(attribute)


def validate(model: type[M], data: Any, *, argument: str | None = None) -> M:
    """Validate *data* (a strawberry input or a dict) against *model*.

    The first failure is raised as :class:`ValidationError` naming the
    offending wire field.
    """
    if data is None:
        raise ValidationError(f"Argument '{argument}' is required", field=argument)
    if not isinstance(data, dict):
        data = strawberry.asdict(data)
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        error = exc.errors()[0]
        loc = error.get("loc") or ()
        field = wire_name(str(loc[0])) if loc else argument
        message = error["msg"].removeprefix("Value error, ")
        raise ValidationError(f"Invalid {field}: {message}", field=field) from None
