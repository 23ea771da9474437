"""
Menu item model.

Sides and upsells are stored as lists of item ids, so an item may point
back at itself or close a loop through other items.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, String

from app.db.base import Base
from app.models.user import new_id


class Item(Base):
    __tablename__ = "items"

    id: str = Column(String(32), primary_key=True, default=new_id)  # type: ignore[assignment]
    item_description: str = Column(String(500), nullable=False)  # type: ignore[assignment]
    # Plain text rather than an Enum column: rows written by other tools may
    # carry a category outside MenuCategory and must still load.
    menu_category: str = Column(String(20), nullable=False, index=True)  # type: ignore[assignment]
    tags: list[str] = Column(JSON, nullable=False, default=list)  # type: ignore[assignment]
    item_price: str = Column(String(32), nullable=False)  # type: ignore[assignment]
    item_image_url: str | None = Column(String(2048), nullable=True)  # type: ignore[assignment]
    side_ids: list[str] = Column(JSON, nullable=False, default=list)  # type: ignore[assignment]
    upsell_ids: list[str] = Column(JSON, nullable=False, default=list)  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
