from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import case, func, select, update
from sqlalchemy.orm import Session

from backend.app.db.models.models_v1 import (
    Material,
    MaterialMovement,
    MaterialStock,
)
from backend.app.db.models.core_types import MovementType


def decrement_stock(db: Session, *, material_id: int, quantity: Decimal) -> int:
    """
    Diminue qty_on_hand de `quantity`, avec plancher à zéro.

    Un seul UPDATE : la base l'applique atomiquement, deux commandes
    concurrentes sur la même matière ne perdent pas de décrément et aucun
    verrou explicite n'est pris sur la ligne de stock. Un sur-décrément est
    absorbé (stock à 0, pas d'erreur).

    Retourne le nombre de lignes de stock touchées (0 si la matière n'a pas
    encore de ligne).
    """
    remaining = MaterialStock.qty_on_hand - quantity
    result = db.execute(
        update(MaterialStock)
        .where(MaterialStock.material_id == material_id)
        .values(
            qty_on_hand=case((remaining > 0, remaining), else_=0),
            updated_at=datetime.now(timezone.utc),
        )
        .execution_options(synchronize_session=False)
    )
    return int(result.rowcount or 0)


def log_movement(
    db: Session,
    *,
    material_id: int,
    quantity: Decimal,
    movement_type: MovementType = MovementType.stock_out,
    note: str | None = None,
    order_id: int | None = None,
) -> MaterialMovement:
    mv = MaterialMovement(
        material_id=material_id,
        movement_type=movement_type,
        quantity=quantity,
        note=note,
        order_id=order_id,
        happened_at=datetime.now(timezone.utc),
    )
    db.add(mv)
    db.flush()
    return mv


def set_stock_level(
    db: Session,
    *,
    material_id: int,
    qty_on_hand: Decimal,
    qty_min: Decimal,
) -> MaterialStock:
    """Upsert de la ligne de stock d'une matière (correction administrative)."""
    sl = (
        db.execute(
            select(MaterialStock)
            .where(MaterialStock.material_id == material_id)
            .with_for_update()
        )
        .scalar_one_or_none()
    )
    if not sl:
        sl = MaterialStock(material_id=material_id)
        db.add(sl)

    sl.qty_on_hand = qty_on_hand
    sl.qty_min = qty_min
    db.flush()
    return sl


def list_stock(db: Session) -> list[dict]:
    """
    Toutes les matières avec leurs quantités en stock.

    Sans ligne de stock : 0 / 0. Une ligne est critique si disponible <=
    minimum ; les lignes critiques d'abord, puis par nom.
    """
    rows = db.execute(
        select(
            Material.id,
            Material.name,
            Material.unit,
            MaterialStock.qty_on_hand,
            MaterialStock.qty_min,
        )
        .outerjoin(MaterialStock, MaterialStock.material_id == Material.id)
        .where(Material.active.is_(True))
        .order_by(Material.name)
    ).all()

    items = []
    for material_id, name, unit, on_hand, qty_min in rows:
        on_hand = Decimal(on_hand or 0)
        qty_min = Decimal(qty_min or 0)
        items.append(
            {
                "material_id": int(material_id),
                "material_name": name,
                "unit": unit,
                "qty_on_hand": on_hand,
                "qty_min": qty_min,
                "critical": on_hand <= qty_min,
            }
        )

    # tri stable : l'ordre par nom reste dans chaque groupe
    items.sort(key=lambda r: not r["critical"])
    return items


def count_critical(db: Session) -> int:
    """Matières avec un minimum > 0 dont le stock est au minimum ou en dessous."""
    count = db.scalar(
        select(func.count())
        .select_from(MaterialStock)
        .join(Material, Material.id == MaterialStock.material_id)
        .where(Material.active.is_(True))
        .where(MaterialStock.qty_min > 0)
        .where(MaterialStock.qty_on_hand <= MaterialStock.qty_min)
    )
    return int(count or 0)


def list_movements(
    db: Session,
    *,
    material_id: int | None = None,
    order_id: int | None = None,
    limit: int = 100,
) -> list[MaterialMovement]:
    stmt = select(MaterialMovement).order_by(
        MaterialMovement.happened_at.desc(), MaterialMovement.id.desc()
    )
    if material_id is not None:
        stmt = stmt.where(MaterialMovement.material_id == material_id)
    if order_id is not None:
        stmt = stmt.where(MaterialMovement.order_id == order_id)
    return list(db.execute(stmt.limit(limit)).scalars().all())

