from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class StockLevelRead(BaseModel):
    material_id: int
    material_name: str
    unit: str

    qty_on_hand: float
    qty_min: float
    critical: bool  # READ ONLY, qty_on_hand <= qty_min


class StockLevelUpdate(BaseModel):
    qty_on_hand: Decimal = Field(ge=0)
    qty_min: Decimal = Field(default=Decimal(0), ge=0)


class MovementRead(BaseModel):
    id: int
    material_id: int
    movement_type: str
    quantity: float
    note: str | None = None
    order_id: int | None = None
    happened_at: datetime
