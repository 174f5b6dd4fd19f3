from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.api.deps import get_db
from backend.app.core.exceptions import NotFoundError
from backend.app.db.models.models_v1 import Material
from backend.app.schemas.stock_level import StockLevelRead, StockLevelUpdate
from backend.services import inventory

router = APIRouter(prefix="/stock")


@router.get(
    "",
    response_model=list[StockLevelRead],
)
def get_stock(db: Session = Depends(get_db)):
    """
    Stock (READ ONLY)
    - one row per active material, 0 / 0 when it has no ledger row
    - critical rows first
    """
    return inventory.list_stock(db)


@router.get("/critical-count")
def get_critical_count(db: Session = Depends(get_db)):
    return {"success": True, "critical_count": inventory.count_critical(db)}


@router.put("/{material_id}", response_model=StockLevelRead)
def set_stock(material_id: int, payload: StockLevelUpdate, db: Session = Depends(get_db)):
    material = db.get(Material, material_id)
    if not material:
        raise NotFoundError("material", material_id)

    sl = inventory.set_stock_level(
        db,
        material_id=material_id,
        qty_on_hand=payload.qty_on_hand,
        qty_min=payload.qty_min,
    )
    db.commit()
    return {
        "material_id": material.id,
        "material_name": material.name,
        "unit": material.unit,
        "qty_on_hand": sl.qty_on_hand,
        "qty_min": sl.qty_min,
        "critical": sl.qty_on_hand <= sl.qty_min,
    }
