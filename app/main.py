"""
Restaurant ordering graph: application entry point.

This is the **only** file that assembles the app. Schema and resolvers
live in `graphql/`, access rules in `core/policy.py`, persistence behind
`db/store.py`.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.api import api_router
from app.api.v1.deps import get_store
from app.core.config import settings
from app.core.exceptions import register_exception_handlers
from app.core.security import get_password_hash
from app.db.base import Base
from app.db.session import engine
from app.models.enums import Role

# Ensure all models are imported so metadata.create_all can see them
from app.models import Item, Order, User  # noqa: F401

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialised")

    # Seed the super admin on first run
    store = await get_store()
    if not await store.find("users", {"username": settings.FIRST_ADMIN_USERNAME}):
        await store.create(
            "users",
            {
                "username": settings.FIRST_ADMIN_USERNAME,
                "hashed_password": get_password_hash(settings.FIRST_ADMIN_PASSWORD),
                "first_name": "System",
                "last_name": "Administrator",
                "phone_number": None,
                "roles": [Role.SUPER_ADMIN.value],
                "favorite_item_ids": [],
            },
        )
        logger.info(
            "Default super admin created: %s (password: <redacted>)",
            settings.FIRST_ADMIN_USERNAME,
        )

    logger.info("%s v%s started", settings.PROJECT_NAME, settings.VERSION)
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Graph API for users, menu items and orders",
        version=settings.VERSION,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )

    # CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Catch-all handler for failures outside GraphQL execution
    register_exception_handlers(application)

    # GraphQL + health
    application.include_router(api_router)

    return application


app = create_app()
