"""Per-request loader cache and batching."""

import pytest

from app.graphql.loaders import Loaders


@pytest.mark.asyncio
async def test_refresh_primes_a_key_that_was_never_loaded(store, monkeypatch):
    loaders = Loaders.for_store(store)
    record = {"id": "fresh", "item_description": "Soup"}

    async def unexpected_find(collection, filters=None):
        raise AssertionError("primed record should not hit the store")

    loaders.refresh("items", record)
    monkeypatch.setattr(store, "find", unexpected_find)
    assert await loaders.items.load("fresh") == record


@pytest.mark.asyncio
async def test_refresh_replaces_a_cached_record(store, make_item):
    burger = await make_item("Burger")
    loaders = Loaders.for_store(store)
    assert (await loaders.items.load(burger["id"]))["item_description"] == "Burger"

    loaders.refresh("items", {**burger, "item_description": "Cheeseburger"})
    assert (await loaders.items.load(burger["id"]))["item_description"] == "Cheeseburger"


@pytest.mark.asyncio
async def test_forget_tolerates_unknown_keys(store, make_item):
    burger = await make_item("Burger")
    loaders = Loaders.for_store(store)
    loaders.forget("items", "never-loaded")

    await loaders.items.load(burger["id"])
    await store.remove("items", burger["id"])
    loaders.forget("items", burger["id"])
    assert await loaders.items.load(burger["id"]) is None


@pytest.mark.asyncio
async def test_shared_sides_load_in_one_batch(gql, store, make_item, monkeypatch):
    fries = await make_item("Fries", category="SIDE")
    salad = await make_item("Salad", category="SIDE")
    for name in ("Burger", "Steak", "Fish"):
        await make_item(name, side_ids=[fries["id"], salad["id"]])

    calls = []
    original_find = store.find

    async def counting_find(collection, filters=None):
        calls.append((collection, filters))
        return await original_find(collection, filters)

    monkeypatch.setattr(store, "find", counting_find)
    body = await gql("{ menu { entrees { sides { itemDescription } } } }")

    assert "errors" not in body
    entrees = body["data"]["menu"]["entrees"]
    assert len(entrees) == 3
    assert all([s["itemDescription"] for s in e["sides"]] == ["Fries", "Salad"] for e in entrees)
    # one read for the menu, one batched read for every side of every entree
    assert len(calls) == 2
    assert calls[0] == ("items", None)
    assert sorted(calls[1][1]["id"]) == sorted([fries["id"], salad["id"]])
