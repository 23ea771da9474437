"""Root query resolvers."""

from __future__ import annotations

from typing import Annotated

import strawberry
from strawberry.types import Info

from app.core.policy import permits
from app.graphql.permissions import GATED
from app.graphql.types import Item, Menu, Order, User
from app.models.enums import MenuCategory


@strawberry.type(name="RootQuery")
class Query:
    @strawberry.field(permission_classes=GATED)
    async def viewer(self, info: Info, webtoken: str) -> User | None:
        """The user the token was issued to."""
        principal = info.context.authorize(info.field_name, webtoken)
        record = await info.context.loaders.users.load(principal.subject)
        return User.from_record(record) if record is not None else None

    @strawberry.field(permission_classes=GATED)
    async def user(self, info: Info, username: str, webtoken: str) -> User | None:
        principal = info.context.authorize(info.field_name, webtoken)
        records = await info.context.store.find("users", {"username": username})
        if not records or not permits(info.field_name, principal, records[0]["id"]):
            return None
        return User.from_record(records[0])

    @strawberry.field(permission_classes=GATED)
    async def users(self, info: Info, webtoken: str) -> list[User] | None:
        records = await info.context.store.find("users")
        return [User.from_record(r) for r in records]

    @strawberry.field(permission_classes=GATED)
    async def item(
        self, info: Info, item_id: Annotated[str, strawberry.argument(name="_id")]
    ) -> Item | None:
        record = await info.context.loaders.items.load(item_id)
        return Item.from_record(record) if record is not None else None

    @strawberry.field(permission_classes=GATED)
    async def items(self, info: Info, menu_category: MenuCategory | None = None) -> list[Item] | None:
        filters = {"menu_category": menu_category.value} if menu_category is not None else None
        records = await info.context.store.find("items", filters)
        return [Item.from_record(r) for r in records]

    @strawberry.field(permission_classes=GATED)
    async def all_items(self, info: Info) -> list[Item] | None:
        records = await info.context.store.find("items")
        return [Item.from_record(r) for r in records]

    @strawberry.field(permission_classes=GATED)
    async def order(
        self,
        info: Info,
        order_id: Annotated[str, strawberry.argument(name="_id")],
        webtoken: str,
    ) -> Order | None:
        """One order; callers without staff roles only ever see their own.

        Someone else's order and a missing order both come back as null.
        """
        principal = info.context.authorize(info.field_name, webtoken)
        record = await info.context.store.get("orders", order_id)
        if record is None or not permits(info.field_name, principal, record["user_id"]):
            return None
        return Order.from_record(record)

    @strawberry.field(permission_classes=GATED)
    async def all_orders(self, info: Info, webtoken: str) -> list[Order] | None:
        records = await info.context.store.find("orders")
        return [Order.from_record(r) for r in records]

    @strawberry.field(permission_classes=GATED)
    async def menu(self, info: Info) -> Menu | None:
        records = await info.context.store.find("items")
        return Menu.from_records(records)
