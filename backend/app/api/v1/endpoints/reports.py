from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backend.app.api.deps import get_db
from backend.services import reports

router = APIRouter(prefix="/reports")


@router.get("/raw-material-orders")
def raw_material_order_totals(
    range_key: str | None = Query(default=None, alias="range"),
    db: Session = Depends(get_db),
):
    rows = reports.order_totals_by_material(db, range_key=range_key)
    return [{**r, "total_quantity": float(r["total_quantity"])} for r in rows]


@router.get("/raw-material-orders/monthly")
def raw_material_order_monthly(
    start: date | None = None,
    end: date | None = None,
    db: Session = Depends(get_db),
):
    rows = reports.monthly_order_totals(db, start=start, end=end)
    return [{**r, "total_quantity": float(r["total_quantity"])} for r in rows]
