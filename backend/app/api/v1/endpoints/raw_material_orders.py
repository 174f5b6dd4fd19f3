from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.api.deps import Pagination, get_db, get_pagination
from backend.app.schemas.raw_material_order import (
    OrderCreate,
    OrderPage,
    OrderRead,
    OrderUpdate,
    StatusUpdate,
    StatusUpdateResult,
)
from backend.services import fulfillment, procurement
from backend.services.formatting import page_count

router = APIRouter(prefix="/raw-material-orders")


@router.get("", response_model=OrderPage)
def list_orders(
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    items, total = procurement.list_orders(db, limit=pagination.limit, offset=pagination.offset)
    return {
        "items": items,
        "total": total,
        "page": pagination.page,
        "pages": page_count(total, pagination.limit),
        "limit": pagination.limit,
    }


@router.get("/{order_id}", response_model=OrderRead)
def get_order(order_id: int, db: Session = Depends(get_db)):
    return procurement.get_order(db, order_id)


@router.post("", status_code=201)
def create_order(payload: OrderCreate, db: Session = Depends(get_db)):
    order = procurement.create_order(
        db,
        material_id=payload.material_id,
        quantity=payload.quantity,
        order_date=payload.order_date,
    )
    return {
        "success": True,
        "message": "raw material order created",
        "order": OrderRead(**order),
    }


@router.put("/{order_id}")
def update_order(order_id: int, payload: OrderUpdate, db: Session = Depends(get_db)):
    order = procurement.update_order(
        db,
        order_id,
        material_id=payload.material_id,
        quantity=payload.quantity,
        order_date=payload.order_date,
        status=payload.status,
    )
    return {"success": True, "message": "order updated", "order": OrderRead(**order)}


@router.delete("/{order_id}")
def delete_order(order_id: int, db: Session = Depends(get_db)):
    procurement.delete_order(db, order_id)
    return {"success": True, "message": "order deleted"}


# ---------- Fulfillment ----------
@router.put("/{order_id}/status", response_model=StatusUpdateResult)
def update_order_status(
    order_id: int,
    payload: StatusUpdate | None = None,
    db: Session = Depends(get_db),
):
    durum = payload.durum if payload else None
    result = fulfillment.update_order_status(db, order_id, durum)
    return {"success": True, "message": "status updated", "stockUpdated": result.stock_updated}


@router.put("/{order_id}/deliver", response_model=StatusUpdateResult)
def deliver_order(order_id: int, db: Session = Depends(get_db)):
    result = fulfillment.force_deliver(db, order_id)
    return {"success": True, "message": "order delivered", "stockUpdated": result.stock_updated}
