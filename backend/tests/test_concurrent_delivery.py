import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine, event, func, select
from sqlalchemy.orm import Session

from backend.app.db.base import Base
from backend.app.db.models.models_v1 import Material, MaterialMovement, MaterialStock, RawMaterialOrder
from backend.app.db.models.core_types import OrderStatus
from backend.services import fulfillment


@pytest.fixture
def race_engine(tmp_path):
    """
    File-backed SQLite engine usable from several threads.

    SQLite has no row locks: every transaction starts with BEGIN IMMEDIATE,
    taking the database write lock up front, which stands in for the
    SELECT ... FOR UPDATE a server database would serialize on.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


def test_concurrent_deliveries_move_stock_once(race_engine):
    with Session(race_engine) as db:
        material = Material(name="M1", unit="kg", active=True)
        db.add(material)
        db.flush()
        db.add(MaterialStock(material_id=material.id, qty_on_hand=Decimal("100"), qty_min=Decimal("0")))
        db.add(
            RawMaterialOrder(
                id=42,
                material_id=material.id,
                quantity=Decimal("30"),
                status=OrderStatus.pending,
                order_date=date(2025, 10, 6),
            )
        )
        db.commit()
        material_id = material.id

    start = threading.Barrier(2)

    def deliver(requested):
        start.wait()
        with Session(race_engine) as db:
            return fulfillment.update_order_status(db, 42, requested)

    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = [pool.submit(deliver, "Teslim Edildi"), pool.submit(deliver, "DELIVERED")]
        results = [f.result(timeout=60) for f in futures]

    assert sorted(r.stock_updated for r in results) == [False, True]

    with Session(race_engine) as db:
        on_hand = db.execute(
            select(MaterialStock.qty_on_hand).where(MaterialStock.material_id == material_id)
        ).scalar_one()
        movements = db.scalar(
            select(func.count()).select_from(MaterialMovement).where(MaterialMovement.order_id == 42)
        )
        status = db.execute(select(RawMaterialOrder.status).where(RawMaterialOrder.id == 42)).scalar_one()

    assert on_hand == Decimal("70")
    assert movements == 1
    assert status is OrderStatus.delivered
