"""
Service achats.

Commandes de matière première : liste, création, édition administrative et
suppression. Les changements de statut avec effet sur le stock passent par
backend.services.fulfillment ; une simple édition ici ne bouge jamais le stock.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from backend.app.core.config import DELIVERY_LEAD_BUSINESS_DAYS
from backend.app.core.exceptions import DuplicateError, NotFoundError, ValidationError
from backend.app.core.logging_config import get_logger
from backend.app.db.models.models_v1 import Material, RawMaterialOrder
from backend.app.db.models.core_types import OrderStatus
from backend.services.formatting import add_business_days, format_date_tr
from backend.services.order_status import canonicalize_status, status_label

logger = get_logger(__name__)


def _order_row(order: RawMaterialOrder, material: Material) -> dict:
    estimated = (
        add_business_days(order.order_date, DELIVERY_LEAD_BUSINESS_DAYS)
        if order.order_date
        else None
    )
    return {
        "id": int(order.id),
        "material_id": int(order.material_id),
        "material_name": material.name,
        "unit": material.unit,
        "quantity": order.quantity,
        "order_date": order.order_date,
        "order_date_display": format_date_tr(order.order_date),
        "estimated_delivery": format_date_tr(estimated),
        "status": order.status.value,
        "status_label": status_label(order.status),
    }


def _require_material(db: Session, material_id: int) -> Material:
    material = db.get(Material, material_id)
    if not material:
        raise ValidationError("invalid material_id", field="material_id", value=material_id)
    return material


def list_orders(db: Session, *, limit: int, offset: int = 0) -> tuple[list[dict], int]:
    total = db.scalar(select(func.count()).select_from(RawMaterialOrder)) or 0
    rows = db.execute(
        select(RawMaterialOrder, Material)
        .join(Material, Material.id == RawMaterialOrder.material_id)
        .order_by(RawMaterialOrder.id.desc())
        .offset(offset)
        .limit(limit)
    ).all()
    return [_order_row(order, material) for order, material in rows], int(total)


def get_order(db: Session, order_id: int) -> dict:
    row = db.execute(
        select(RawMaterialOrder, Material)
        .join(Material, Material.id == RawMaterialOrder.material_id)
        .where(RawMaterialOrder.id == order_id)
    ).one_or_none()
    if row is None:
        raise NotFoundError("order", order_id)
    order, material = row
    return _order_row(order, material)


def create_order(
    db: Session,
    *,
    material_id: int,
    quantity: Decimal,
    order_date: date | None = None,
) -> dict:
    material = _require_material(db, material_id)

    order = RawMaterialOrder(
        material_id=material_id,
        quantity=quantity,
        order_date=order_date or date.today(),
        status=OrderStatus.pending,
    )
    db.add(order)
    db.commit()
    db.refresh(order)

    logger.info("Raw material order %s created (material=%s qty=%s)", order.id, material_id, quantity)
    return _order_row(order, material)


def update_order(
    db: Session,
    order_id: int,
    *,
    material_id: int,
    quantity: Decimal,
    order_date: date,
    status: str,
) -> dict:
    """Édition administrative complète. Le statut est stocké tel quel : aucun mouvement de stock."""
    new_status = canonicalize_status(status)

    order = db.get(RawMaterialOrder, order_id)
    if not order:
        raise NotFoundError("order", order_id)
    material = _require_material(db, material_id)

    order.material_id = material_id
    order.quantity = quantity
    order.order_date = order_date
    order.status = new_status
    db.commit()
    db.refresh(order)
    return _order_row(order, material)


def delete_order(db: Session, order_id: int) -> None:
    order = db.get(RawMaterialOrder, order_id)
    if not order:
        raise NotFoundError("order", order_id)
    db.delete(order)
    db.commit()
    logger.info("Raw material order %s deleted", order_id)


def list_materials(db: Session) -> list[Material]:
    return list(
        db.execute(
            select(Material).where(Material.active.is_(True)).order_by(Material.name)
        )
        .scalars()
        .all()
    )


def create_material(db: Session, *, name: str, unit: str = "kg", active: bool = True) -> Material:
    exists = db.execute(select(Material).where(Material.name == name)).scalar_one_or_none()
    if exists:
        raise DuplicateError("material", field="name", value=name)

    material = Material(name=name, unit=unit, active=active)
    db.add(material)
    db.commit()
    db.refresh(material)
    return material
