"""
Shared test fixtures for the ordering graph test suite.

Every test gets its own SQLite database file (aiosqlite) behind a
SqlDocumentStore, wired into the app through the ``get_store`` dependency.
"""

import os
import sys
from typing import Any, AsyncGenerator, Awaitable, Callable

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CORS_ORIGINS"] = '["*"]'
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.api.v1.deps import get_store
from app.core.security import create_access_token, get_password_hash
from app.db.base import Base
from app.db.store import SqlDocumentStore
from app.main import app

GraphQLCall = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture
async def store(tmp_path) -> AsyncGenerator[SqlDocumentStore, None]:
    """A store over a fresh database file, tables created."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'ordering.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield SqlDocumentStore(
        async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    )

    await test_engine.dispose()


@pytest.fixture
async def async_client(store: SqlDocumentStore) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app and the test store."""

    async def _override_get_store() -> SqlDocumentStore:
        return store

    app.dependency_overrides[get_store] = _override_get_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def gql(async_client: AsyncClient) -> GraphQLCall:
    """POST a GraphQL document and return the decoded response body."""

    async def _execute(
        query: str,
        variables: dict[str, Any] | None = None,
        token: str | None = None,
    ) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        resp = await async_client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers,
        )
        return resp.json()

    return _execute


# ── Users & tokens ──────────────────────────────────────────────────
@pytest.fixture
def make_user(store: SqlDocumentStore):
    """Create a user straight in the store; returns ``(record, token)``."""

    async def _make(
        username: str,
        roles: tuple[str, ...] = ("USER",),
        password: str = "password123",
    ) -> tuple[dict[str, Any], str]:
        record = await store.create(
            "users",
            {
                "username": username,
                "hashed_password": get_password_hash(password),
                "first_name": username.title(),
                "last_name": "Tester",
                "phone_number": "+1 555 0100",
                "roles": list(roles),
                "favorite_item_ids": [],
            },
        )
        return record, create_access_token(record["id"], roles)

    return _make


@pytest.fixture
async def customer(make_user) -> tuple[dict[str, Any], str]:
    return await make_user("customer")


@pytest.fixture
async def admin(make_user) -> tuple[dict[str, Any], str]:
    return await make_user("manager", roles=("ADMIN",))


@pytest.fixture
def make_item(store: SqlDocumentStore):
    """Insert an item record directly, bypassing validation."""

    async def _make(description: str, category: str = "ENTRE", price: str = "10.00", **extra: Any) -> dict[str, Any]:
        data = {
            "item_description": description,
            "menu_category": category,
            "item_price": price,
            "tags": [],
            "item_image_url": None,
            "side_ids": [],
            "upsell_ids": [],
        }
        data.update(extra)
        return await store.create("items", data)

    return _make
