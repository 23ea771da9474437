"""
Root mutation resolvers.

Each mutation validates its input, applies exactly one store write and
then returns the written record as a fresh read, so clients can select
nested relations of what they just created. Nothing is written unless
authorization and validation both passed.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Annotated

import strawberry
from strawberry.types import Info

from app.core.config import settings
from app.core.exceptions import Conflict, Forbidden, NotFound, Unauthenticated, ValidationError
from app.core.security import create_access_token, get_password_hash, verify_password
from app.graphql.inputs import ItemInput, OrderInput, validate
from app.graphql.permissions import GATED
from app.graphql.types import AuthPayload, Item, Order, User
from app.models.enums import PRIVILEGED_ROLES, Role
from app.schemas.item import ItemWrite, normalise_price
from app.schemas.order import OrderCreate, OrderStatusUpdate
from app.schemas.user import SignUp

logger = logging.getLogger(__name__)

IdArg = Annotated[str, strawberry.argument(name="_id")]


async def _require_items(info: Info, ids: list[str], field: str, *, allow: str | None = None) -> list[dict]:
    """Load every referenced item or fail with a validation error on *field*."""
    wanted = [i for i in ids if i != allow]
    if not wanted:
        return []
    records = await info.context.loaders.items.load_many(wanted)
    missing = [i for i, r in zip(wanted, records) if r is None]
    if missing:
        raise ValidationError(
            f"Unknown item id(s) in {field}: {', '.join(dict.fromkeys(missing))}",
            field=field,
        )
    return records


async def _check_item_references(info: Info, body: ItemWrite, *, self_id: str | None = None) -> None:
    await _require_items(info, body.side_ids, "sideIds", allow=self_id)
    await _require_items(info, body.upsell_ids, "upsellIds", allow=self_id)


def _item_data(body: ItemWrite) -> dict:
    data = body.model_dump()
    data["menu_category"] = body.menu_category.value
    return data


def _order_total(items: list[dict]) -> str:
    total = Decimal("0.00")
    for record in items:
        try:
            total += Decimal(normalise_price(record["item_price"] or ""))
        except ValueError:
            raise ValidationError(
                f"Item {record['id']} has no valid price", field="itemIds"
            ) from None
    return str(total.quantize(Decimal("0.01")))


async def _update_favorites(info: Info, user_id: str, item_id: str, *, add: bool) -> User:
    user = await info.context.loaders.users.load(user_id)
    if user is None:
        raise Unauthenticated("Token subject no longer exists")
    favorites = [i for i in user["favorite_item_ids"] or [] if i != item_id]
    if add:
        favorites.append(item_id)
    try:
        record = await info.context.store.patch("users", user_id, {"favorite_item_ids": favorites})
    except NotFound:
        raise Unauthenticated("Token subject no longer exists") from None
    info.context.loaders.refresh("users", record)
    return User.from_record(record)


@strawberry.type(name="RootMutation")
class Mutation:
    # ── Accounts ─────────────────────────────────────────────────────
    @strawberry.mutation(permission_classes=GATED)
    async def sign_up(
        self,
        info: Info,
        username: str,
        password: str,
        first_name: str,
        last_name: str,
        phone_number: str,
        roles: list[Role] | None = None,
    ) -> User | None:
        """Register a user.

        Roles default to USER. Asking for ADMIN or SUPER_ADMIN needs a
        SUPER_ADMIN credential on the request.
        """
        body = validate(
            SignUp,
            {
                "username": username,
                "password": password,
                "first_name": first_name,
                "last_name": last_name,
                "phone_number": phone_number,
                "roles": roles,
            },
        )
        if PRIVILEGED_ROLES & set(body.roles):
            caller = info.context.authorize(info.field_name)
            if caller is None or Role.SUPER_ADMIN not in caller.roles:
                raise Forbidden("Only a super admin may grant administrator roles", field="roles")

        store = info.context.store
        if await store.find("users", {"username": body.username}):
            raise Conflict(f"Username '{body.username}' is already taken", field="username")

        record = await store.create(
            "users",
            {
                "username": body.username,
                "hashed_password": get_password_hash(body.password),
                "first_name": body.first_name,
                "last_name": body.last_name,
                "phone_number": body.phone_number,
                "roles": [r.value for r in body.roles],
                "favorite_item_ids": [],
            },
        )
        info.context.loaders.refresh("users", record)
        logger.info("User signed up: %s (%s)", record["username"], record["id"])
        return User.from_record(record)

    @strawberry.mutation(permission_classes=GATED)
    async def log_in(self, info: Info, username: str, password: str) -> AuthPayload | None:
        records = await info.context.store.find("users", {"username": username.strip()})
        record = records[0] if records else None
        if record is None or not verify_password(password, record["hashed_password"]):
            raise Unauthenticated("Incorrect username or password")

        user = User.from_record(record)
        token = create_access_token(record["id"], user.roles or [Role.USER])
        logger.info("User logged in: %s", record["username"])
        return AuthPayload(token=token, user=user)

    # ── Menu items ───────────────────────────────────────────────────
    @strawberry.mutation(permission_classes=GATED)
    async def create_item(self, info: Info, webtoken: str, item: ItemInput | None = None) -> Item | None:
        body = validate(ItemWrite, item, argument="item")
        await _check_item_references(info, body)

        record = await info.context.store.create("items", _item_data(body))
        info.context.loaders.refresh("items", record)
        logger.info("Item created: %s (%s)", record["item_description"], record["id"])
        return Item.from_record(record)

    @strawberry.mutation(permission_classes=GATED)
    async def edit_item(
        self, info: Info, item_id: IdArg, webtoken: str, item: ItemInput | None = None
    ) -> Item | None:
        """Replace an item's fields; the item may list itself as a side or upsell."""
        body = validate(ItemWrite, item, argument="item")
        if await info.context.loaders.items.load(item_id) is None:
            return None
        await _check_item_references(info, body, self_id=item_id)

        try:
            record = await info.context.store.patch("items", item_id, _item_data(body))
        except NotFound:
            info.context.loaders.forget("items", item_id)
            return None
        info.context.loaders.refresh("items", record)
        logger.info("Item edited: %s", item_id)
        return Item.from_record(record)

    @strawberry.mutation(permission_classes=GATED)
    async def remove_item(self, info: Info, item_id: IdArg, webtoken: str) -> Item | None:
        try:
            record = await info.context.store.remove("items", item_id)
        except NotFound:
            return None
        finally:
            info.context.loaders.forget("items", item_id)
        logger.info("Item removed: %s", item_id)
        return Item.from_record(record)

    # ── Orders ───────────────────────────────────────────────────────
    @strawberry.mutation(permission_classes=GATED)
    async def create_order(self, info: Info, webtoken: str, order: OrderInput | None = None) -> Order | None:
        """Place an order for the token's subject; the owner is never client-supplied."""
        principal = info.context.authorize(info.field_name, webtoken)
        body = validate(OrderCreate, order, argument="order")

        if await info.context.loaders.users.load(principal.subject) is None:
            raise Unauthenticated("Token subject no longer exists")
        items = await _require_items(info, body.item_ids, "itemIds")
        total = _order_total(items)

        record = await info.context.store.create(
            "orders",
            {
                "user_id": principal.subject,
                "item_ids": body.item_ids,
                "total": total,
                "status_message": settings.DEFAULT_ORDER_STATUS,
                "comment": body.comment,
                "fulfilled": False,
            },
        )
        logger.info("Order %s placed by %s (total %s)", record["id"], principal.subject, record["total"])
        return Order.from_record(record)

    @strawberry.mutation(permission_classes=GATED)
    async def update_order_status(
        self,
        info: Info,
        order_id: IdArg,
        webtoken: str,
        status_message: str | None = None,
        fulfilled: bool | None = None,
    ) -> Order | None:
        body = validate(
            OrderStatusUpdate, {"status_message": status_message, "fulfilled": fulfilled}
        )
        changes = body.model_dump(exclude_none=True)
        if not changes:
            raise ValidationError("Nothing to update", field="statusMessage")
        try:
            record = await info.context.store.patch("orders", order_id, changes)
        except NotFound:
            return None
        logger.info("Order %s updated: %s", order_id, changes)
        return Order.from_record(record)

    # ── Favorites ────────────────────────────────────────────────────
    @strawberry.mutation(permission_classes=GATED)
    async def add_favorite_item(self, info: Info, item_id: IdArg, webtoken: str) -> User | None:
        principal = info.context.authorize(info.field_name, webtoken)
        await _require_items(info, [item_id], "_id")
        return await _update_favorites(info, principal.subject, item_id, add=True)

    @strawberry.mutation(permission_classes=GATED)
    async def remove_favorite_item(self, info: Info, item_id: IdArg, webtoken: str) -> User | None:
        principal = info.context.authorize(info.field_name, webtoken)
        return await _update_favorites(info, principal.subject, item_id, add=False)

