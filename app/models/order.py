"""
Order model: one placed order, owned by exactly one user.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, String

from app.db.base import Base
from app.models.user import new_id


class Order(Base):
    __tablename__ = "orders"
    __table_args__ = (Index("ix_orders_user_fulfilled", "user_id", "fulfilled"),)

    id: str = Column(String(32), primary_key=True, default=new_id)  # type: ignore[assignment]
    user_id: str = Column(String(32), ForeignKey("users.id"), nullable=False)  # type: ignore[assignment]
    item_ids: list[str] = Column(JSON, nullable=False, default=list)  # type: ignore[assignment]
    # Repeated ids stand for quantity.
    total: str = Column(String(32), nullable=False, default="0.00")  # type: ignore[assignment]
    status_message: str | None = Column(String(200), nullable=True)  # type: ignore[assignment]
    comment: str | None = Column(String(1000), nullable=True)  # type: ignore[assignment]
    fulfilled: bool = Column(Boolean, nullable=False, default=False, server_default="false")  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
