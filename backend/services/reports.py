"""
Rapports du panneau usine sur les commandes de matière première.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import extract, func, select
from sqlalchemy.orm import Session

from backend.app.db.models.models_v1 import Material, RawMaterialOrder
from backend.services.formatting import month_name_tr, months_before

RANGE_MONTHS = {
    "last_1_month": 1,
    "last_2_months": 2,
    "last_3_months": 3,
}
DEFAULT_RANGE = "last_1_month"


def range_start(range_key: str | None, today: date | None = None) -> date:
    """Clé inconnue ou absente : dernier mois."""
    months = RANGE_MONTHS.get(range_key or DEFAULT_RANGE, RANGE_MONTHS[DEFAULT_RANGE])
    return months_before(today or date.today(), months)


def order_totals_by_material(db: Session, *, range_key: str | None = None, today: date | None = None) -> list[dict]:
    start = range_start(range_key, today)
    total = func.coalesce(func.sum(RawMaterialOrder.quantity), 0).label("total_quantity")

    rows = db.execute(
        select(Material.name, Material.unit, total)
        .select_from(RawMaterialOrder)
        .join(Material, Material.id == RawMaterialOrder.material_id)
        .where(RawMaterialOrder.order_date >= start)
        .group_by(Material.name, Material.unit)
        .order_by(total.desc(), Material.name)
    ).all()

    return [
        {"material_name": name, "unit": unit, "total_quantity": Decimal(qty or 0)}
        for name, unit, qty in rows
    ]


def monthly_order_totals(
    db: Session,
    *,
    start: date | None = None,
    end: date | None = None,
    today: date | None = None,
) -> list[dict]:
    """
    Quantité commandée par (mois, matière) entre start et end inclus.

    Par défaut : le mois courant et les deux précédents.
    """
    today = today or date.today()
    if end is None:
        end = today
    if start is None:
        start = months_before(today.replace(day=1), 2)

    year = extract("year", RawMaterialOrder.order_date).label("y")
    month = extract("month", RawMaterialOrder.order_date).label("m")
    total = func.coalesce(func.sum(RawMaterialOrder.quantity), 0).label("total_quantity")

    rows = db.execute(
        select(year, month, Material.name, total)
        .select_from(RawMaterialOrder)
        .join(Material, Material.id == RawMaterialOrder.material_id)
        .where(RawMaterialOrder.order_date >= start)
        .where(RawMaterialOrder.order_date <= end)
        .group_by(year, month, Material.name)
    ).all()

    items = [
        {
            "month_code": f"{int(y):04d}-{int(m):02d}",
            "month_name": month_name_tr(int(y), int(m)),
            "material_name": name,
            "total_quantity": Decimal(qty or 0),
        }
        for y, m, name, qty in rows
    ]
    items.sort(key=lambda r: (r["month_code"], -r["total_quantity"], r["material_name"]))
    return items
