"""
GraphQL output types.

Entities reference each other by id only; every relationship field is a
resolver that fetches the related records lazily, when it is selected.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import strawberry
from strawberry.types import Info

from app.core.config import settings
from app.db.store import Record
from app.models.enums import MenuCategory, Role

logger = logging.getLogger(__name__)

strawberry.enum(Role, name="Roles")
strawberry.enum(MenuCategory, name="MenuCategory")


def _iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def _category(record: Record) -> MenuCategory | None:
    try:
        return MenuCategory(record["menu_category"])
    except ValueError:
        logger.warning(
            "Item %s has unknown menu category %r", record["id"], record["menu_category"]
        )
        return None


def _roles(record: Record) -> list[Role]:
    known = {r.value for r in Role}
    return [Role(r) for r in record["roles"] or [] if r in known]


async def _load_items(info: Info, ids: list[str], depth: int = 0) -> list[Item]:
    """Expand item ids in order; dangling ids are dropped, repeats are kept."""
    if not ids:
        return []
    records = await info.context.loaders.items.load_many(ids)
    return [Item.from_record(r, depth) for r in records if r is not None]


@strawberry.type
class Item:
    id: str = strawberry.field(name="_id")
    item_description: str | None
    menu_category: MenuCategory | None
    tags: list[str] | None
    item_price: str | None
    item_image_url: str | None = strawberry.field(name="itemImageURL")
    side_ids: strawberry.Private[list[str]]
    upsell_ids: strawberry.Private[list[str]]
    # hops taken through sides / upsells to reach this item
    depth: strawberry.Private[int] = 0

    @classmethod
    def from_record(cls, record: Record, depth: int = 0) -> Item:
        return cls(
            id=record["id"],
            item_description=record["item_description"],
            menu_category=_category(record),
            tags=list(record["tags"] or []),
            item_price=record["item_price"],
            item_image_url=record["item_image_url"],
            side_ids=list(record["side_ids"] or []),
            upsell_ids=list(record["upsell_ids"] or []),
            depth=depth,
        )

    @strawberry.field
    async def sides(self, info: Info) -> list[Item] | None:
        if self.depth >= settings.MAX_ITEM_DEPTH:
            return []
        return await _load_items(info, self.side_ids, self.depth + 1)

    @strawberry.field
    async def upsells(self, info: Info) -> list[Item] | None:
        if self.depth >= settings.MAX_ITEM_DEPTH:
            return []
        return await _load_items(info, self.upsell_ids, self.depth + 1)


@strawberry.type
class User:
    id: str = strawberry.field(name="_id")
    roles: list[Role] | None
    first_name: str | None
    last_name: str | None
    username: str | None
    phone_number: str | None
    favorite_item_ids: strawberry.Private[list[str]]

    @classmethod
    def from_record(cls, record: Record) -> User:
        # hashed_password is never exposed
        return cls(
            id=record["id"],
            roles=_roles(record),
            first_name=record["first_name"],
            last_name=record["last_name"],
            username=record["username"],
            phone_number=record["phone_number"],
            favorite_item_ids=list(record["favorite_item_ids"] or []),
        )

    @strawberry.field
    async def favorite_items(self, info: Info) -> list[Item] | None:
        return await _load_items(info, self.favorite_item_ids)

    @strawberry.field
    async def orders(self, info: Info) -> list[Order] | None:
        records = await info.context.store.find("orders", {"user_id": self.id})
        return [Order.from_record(r) for r in records]

    @strawberry.field
    async def pending_orders(self, info: Info) -> list[Order] | None:
        records = await info.context.store.find(
            "orders", {"user_id": self.id, "fulfilled": False}
        )
        return [Order.from_record(r) for r in records]


@strawberry.type
class Order:
    id: str = strawberry.field(name="_id")
    total: str | None
    status_message: str | None
    comment: str | None
    fulfilled: bool | None
    created_at: str | None
    updated_at: str | None
    user_id: strawberry.Private[str]
    item_ids: strawberry.Private[list[str]]

    @classmethod
    def from_record(cls, record: Record) -> Order:
        return cls(
            id=record["id"],
            total=record["total"],
            status_message=record["status_message"],
            comment=record["comment"],
            fulfilled=record["fulfilled"],
            created_at=_iso(record["created_at"]),
            updated_at=_iso(record["updated_at"]),
            user_id=record["user_id"],
            item_ids=list(record["item_ids"] or []),
        )

    @strawberry.field
    async def user(self, info: Info) -> User | None:
        record = await info.context.loaders.users.load(self.user_id)
        return User.from_record(record) if record is not None else None

    @strawberry.field
    async def items(self, info: Info) -> list[Item] | None:
        return await _load_items(info, self.item_ids)


MENU_BUCKETS: dict[MenuCategory, str] = {
    MenuCategory.ENTRE: "entrees",
    MenuCategory.SIDE: "sides",
    MenuCategory.APPETIZER: "appetizers",
    MenuCategory.DESERT: "deserts",
    MenuCategory.DRINK: "drinks",
    MenuCategory.UPSELL: "upsells",
}


@strawberry.type
class Menu:
    entrees: list[Item] | None
    sides: list[Item] | None
    appetizers: list[Item] | None
    deserts: list[Item] | None
    drinks: list[Item] | None
    upsells: list[Item] | None

    @classmethod
    def from_records(cls, records: list[Record]) -> Menu:
        """Partition items into one bucket per category.

        Items whose stored category is not a :class:`MenuCategory` are
        left out of every bucket.
        """
        buckets: dict[str, list[Item]] = {name: [] for name in MENU_BUCKETS.values()}
        for record in records:
            item = Item.from_record(record)
            if item.menu_category is None:
                continue
            buckets[MENU_BUCKETS[item.menu_category]].append(item)
        return cls(**buckets)


@strawberry.type
class AuthPayload:
    token: str | None
    user: User | None
