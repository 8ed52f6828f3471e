"""SQLAlchemy ORM models for Order aggregate."""

from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderModel(Base):
    """SQLAlchemy ORM model for orders table.

    Total columns are a denormalized copy for querying; loads always
    recalculate them from items and adjustments.
    """

    __tablename__ = "orders"

    id = Column(String(36), primary_key=True)
    number = Column(String(255), nullable=True, unique=True, index=True)
    notes = Column(Text, nullable=True)
    state = Column(String(50), nullable=False, default="cart", index=True)
    checkout_completed_at = Column(DateTime(timezone=True), nullable=True)
    items_total = Column(Integer, nullable=False, default=0)
    adjustments_total = Column(Integer, nullable=False, default=0)
    total = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # Relationship to items
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
        lazy="selectin",
    )

    # Order-level adjustments only
    adjustments = relationship(
        "AdjustmentModel",
        foreign_keys="AdjustmentModel.order_id",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="AdjustmentModel.position",
        lazy="selectin",
    )


class OrderItemModel(Base):
    """SQLAlchemy ORM model for order_items table."""

    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    product_code = Column(String(100), nullable=True)
    name = Column(String(500), nullable=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Integer, nullable=False)
    adjustments_total = Column(Integer, nullable=False, default=0)
    total = Column(Integer, nullable=False, default=0)

    # Relationship back to order
    order = relationship("OrderModel", back_populates="items")

    adjustments = relationship(
        "AdjustmentModel",
        foreign_keys="AdjustmentModel.order_item_id",
        back_populates="order_item",
        cascade="all, delete-orphan",
        order_by="AdjustmentModel.position",
        lazy="selectin",
    )


class AdjustmentModel(Base):
    """SQLAlchemy ORM model for adjustments table.

    Exactly one of order_id / order_item_id is set.
    """

    __tablename__ = "adjustments"

    # Orphaned only when detached from both the order and the item side
    __mapper_args__ = {"legacy_is_orphan": True}

    id = Column(String(36), primary_key=True)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=True, index=True)
    order_item_id = Column(
        String(36), ForeignKey("order_items.id"), nullable=True, index=True
    )
    position = Column(Integer, nullable=False, default=0)
    type = Column(String(255), nullable=False, index=True)
    label = Column(String(255), nullable=True)
    amount = Column(Integer, nullable=False)
    neutral = Column(Boolean, nullable=False, default=False)
    locked = Column(Boolean, nullable=False, default=False)
    origin_code = Column(String(255), nullable=True)
    details = Column(JSON, nullable=False, default=dict)

    order = relationship(
        "OrderModel", foreign_keys=[order_id], back_populates="adjustments"
    )
    order_item = relationship(
        "OrderItemModel", foreign_keys=[order_item_id], back_populates="adjustments"
    )
