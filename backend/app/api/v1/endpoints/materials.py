from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from backend.app.api.deps import get_db
from backend.services import procurement

router = APIRouter(prefix="/materials")


class MaterialCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    unit: str = Field(default="kg", min_length=1, max_length=32)
    active: bool = True


@router.get("")
def list_materials(db: Session = Depends(get_db)):
    rows = procurement.list_materials(db)
    return [
        {
            "id": m.id,
            "name": m.name,
            "unit": m.unit,
            "active": m.active,
        }
        for m in rows
    ]


@router.post("", status_code=201)
def create_material(payload: MaterialCreate, db: Session = Depends(get_db)):
    m = procurement.create_material(db, name=payload.name, unit=payload.unit, active=payload.active)
    return {"id": m.id, "name": m.name, "unit": m.unit}
