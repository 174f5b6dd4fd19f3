from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backend.app.api.deps import get_db
from backend.app.schemas.stock_level import MovementRead
from backend.services import inventory

router = APIRouter(prefix="/stock-movements")


@router.get("", response_model=list[MovementRead])
def list_movements(
    material_id: int | None = None,
    order_id: int | None = None,
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    rows = inventory.list_movements(db, material_id=material_id, order_id=order_id, limit=limit)
    return [
        {
            "id": mv.id,
            "material_id": mv.material_id,
            "movement_type": mv.movement_type.value,
            "quantity": mv.quantity,
            "note": mv.note,
            "order_id": mv.order_id,
            "happened_at": mv.happened_at,
        }
        for mv in rows
    ]
