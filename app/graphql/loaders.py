"""
Per-request DataLoaders.

Every relationship edge (``Item.sides``, ``Order.items``, ``Order.user``,
``User.favoriteItems`` ...) loads through these, so sibling fields that
need records from the same collection collapse into a single
``find(collection, {"id": [...]})`` call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable

from strawberry.dataloader import DataLoader

from app.db.store import DocumentStore, Record


def _by_id(store: DocumentStore, collection: str) -> Callable[[list[str]], Awaitable[list[Record | None]]]:
    async def load(keys: list[str]) -> list[Record | None]:
        records = await store.find(collection, {"id": list(dict.fromkeys(keys))})
        by_id = {r["id"]: r for r in records}
        return [by_id.get(key) for key in keys]

    return load


@dataclass
class Loaders:
    users: DataLoader[str, Record | None]
    items: DataLoader[str, Record | None]

    @classmethod
    def for_store(cls, store: DocumentStore) -> "Loaders":
        return cls(
            users=DataLoader(load_fn=_by_id(store, "users")),
            items=DataLoader(load_fn=_by_id(store, "items")),
        )

    def _loader(self, collection: str) -> DataLoader[str, Record | None]:
        return self.users if collection == "users" else self.items

    def refresh(self, collection: str, record: Record) -> None:
        """Replace a cached record after a write, so the write reads back fresh."""
        self._loader(collection).prime(record["id"], record, force=True)

    def forget(self, collection: str, id: str) -> None:
        loader = self._loader(collection)
        # clear() raises KeyError for keys that were never loaded
        if loader.cache_map.get(id) is not None:
            loader.clear(id)
