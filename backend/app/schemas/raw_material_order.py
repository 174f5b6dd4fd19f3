from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field


class OrderCreate(BaseModel):
    material_id: int
    quantity: Decimal = Field(gt=0)
    order_date: date | None = None


class OrderUpdate(BaseModel):
    material_id: int
    quantity: Decimal = Field(gt=0)
    order_date: date
    status: str = Field(min_length=1)


class StatusUpdate(BaseModel):
    # les panneaux envoient le libellé turc ("Teslim Edildi") ou le code canonique
    durum: Any = None


class OrderRead(BaseModel):
    id: int
    material_id: int
    material_name: str
    unit: str
    quantity: float
    order_date: date | None = None
    order_date_display: str | None = None
    estimated_delivery: str | None = None
    status: str
    status_label: str


class OrderPage(BaseModel):
    items: list[OrderRead]
    total: int
    page: int
    pages: int
    limit: int


class StatusUpdateResult(BaseModel):
    success: bool
    message: str
    stockUpdated: bool
