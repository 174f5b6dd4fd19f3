from __future__ import annotations

from datetime import datetime, date
from decimal import Decimal

from sqlalchemy import (
    String,
    Integer,
    BigInteger,
    DateTime,
    Date,
    Boolean,
    ForeignKey,
    Numeric,
    Enum,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db.base import Base
from backend.app.db.models.core_types import MovementType, OrderStatus

# quantités en kg / mètre / pièce selon l'unité de la matière
QTY = Numeric(14, 3)
# SQLite n'auto-incrémente que INTEGER PRIMARY KEY
ID = BigInteger().with_variant(Integer, "sqlite")


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


# ---------- MASTER DATA ----------
class Material(Base):
    __tablename__ = "materials"
    id: Mapped[int] = mapped_column(ID, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    unit: Mapped[str] = mapped_column(String(32), default="kg", nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


# ---------- PURCHASING ----------
class RawMaterialOrder(Base):
    __tablename__ = "raw_material_orders"
    id: Mapped[int] = mapped_column(ID, primary_key=True)
    material_id: Mapped[int] = mapped_column(
        ForeignKey("materials.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    quantity: Mapped[Decimal] = mapped_column(QTY, nullable=False)
    order_date: Mapped[date] = mapped_column(Date, default=date.today, nullable=False)
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, name="order_status", values_callable=_enum_values),
        default=OrderStatus.pending,
        nullable=False,
    )
    # posé dans la transaction qui décrémente le stock, jamais remis à NULL
    stock_moved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    material: Mapped[Material] = relationship()

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_rm_order_qty_pos"),
        Index("ix_rm_orders_order_date", "order_date"),
        {"sqlite_autoincrement": True},
    )


# ---------- INVENTORY ----------
class MaterialStock(Base):
    """Une ligne de stock par matière, créée hors du flux de commande."""

    __tablename__ = "material_stock"
    material_id: Mapped[int] = mapped_column(ForeignKey("materials.id", ondelete="RESTRICT"), primary_key=True)

    qty_on_hand: Mapped[Decimal] = mapped_column(QTY, default=0, nullable=False)
    qty_min: Mapped[Decimal] = mapped_column(QTY, default=0, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    material: Mapped[Material] = relationship()

    __table_args__ = (
        CheckConstraint("qty_on_hand >= 0", name="ck_material_stock_on_hand_nonneg"),
        CheckConstraint("qty_min >= 0", name="ck_material_stock_min_nonneg"),
    )


class MaterialMovement(Base):
    """Journal des mouvements de stock, en ajout seul."""

    __tablename__ = "material_movements"
    id: Mapped[int] = mapped_column(ID, primary_key=True)

    material_id: Mapped[int] = mapped_column(
        ForeignKey("materials.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    movement_type: Mapped[MovementType] = mapped_column(
        Enum(MovementType, name="movement_type", values_callable=_enum_values),
        nullable=False,
    )
    quantity: Mapped[Decimal] = mapped_column(QTY, nullable=False)
    note: Mapped[str | None] = mapped_column(String(255))
    order_id: Mapped[int | None] = mapped_column(BigInteger, index=True)

    happened_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_material_movement_qty_pos"),
        Index("ix_material_movements_material_time", "material_id", "happened_at"),
    )
