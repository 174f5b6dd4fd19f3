"""raw material orders, stock ledger and movement log

Revision ID: 0001_raw_material_tables
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_raw_material_tables"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ORDER_STATUS = sa.Enum("PENDING", "IN_PREPARATION", "APPROVED", "DELIVERED", name="order_status")
MOVEMENT_TYPE = sa.Enum("IN", "OUT", name="movement_type")


def upgrade() -> None:
    op.create_table(
        "materials",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False, unique=True),
        sa.Column("unit", sa.String(32), nullable=False, server_default="kg"),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        "raw_material_orders",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column(
            "material_id",
            sa.BigInteger(),
            sa.ForeignKey("materials.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("quantity", sa.Numeric(14, 3), nullable=False),
        sa.Column("order_date", sa.Date(), nullable=False),
        sa.Column("status", ORDER_STATUS, nullable=False, server_default="PENDING"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("stock_moved_at", sa.DateTime(timezone=True)),
        sa.CheckConstraint("quantity > 0", name="ck_rm_order_qty_pos"),
    )
    op.create_index("ix_raw_material_orders_material_id", "raw_material_orders", ["material_id"])
    op.create_index("ix_rm_orders_order_date", "raw_material_orders", ["order_date"])

    op.create_table(
        "material_stock",
        sa.Column(
            "material_id",
            sa.BigInteger(),
            sa.ForeignKey("materials.id", ondelete="RESTRICT"),
            primary_key=True,
        ),
        sa.Column("qty_on_hand", sa.Numeric(14, 3), nullable=False, server_default="0"),
        sa.Column("qty_min", sa.Numeric(14, 3), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("qty_on_hand >= 0", name="ck_material_stock_on_hand_nonneg"),
        sa.CheckConstraint("qty_min >= 0", name="ck_material_stock_min_nonneg"),
    )

    op.create_table(
        "material_movements",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column(
            "material_id",
            sa.BigInteger(),
            sa.ForeignKey("materials.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("movement_type", MOVEMENT_TYPE, nullable=False),
        sa.Column("quantity", sa.Numeric(14, 3), nullable=False),
        sa.Column("note", sa.String(255)),
        sa.Column("order_id", sa.BigInteger()),
        sa.Column("happened_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("quantity > 0", name="ck_material_movement_qty_pos"),
    )
    op.create_index("ix_material_movements_material_id", "material_movements", ["material_id"])
    op.create_index("ix_material_movements_order_id", "material_movements", ["order_id"])
    op.create_index(
        "ix_material_movements_material_time",
        "material_movements",
        ["material_id", "happened_at"],
    )


def downgrade() -> None:
    op.drop_table("material_movements")
    op.drop_table("material_stock")
    op.drop_table("raw_material_orders")
    op.drop_table("materials")
    MOVEMENT_TYPE.drop(op.get_bind(), checkfirst=True)
    ORDER_STATUS.drop(op.get_bind(), checkfirst=True)
