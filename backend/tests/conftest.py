import os

# the app module builds its engine at import time; never point it at a real server
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from backend.app.api.deps import get_db  # noqa: E402
from backend.app.db.base import Base  # noqa: E402
from backend.app.db.models.models_v1 import Material, MaterialStock, RawMaterialOrder  # noqa: E402
from backend.app.db.models.core_types import OrderStatus  # noqa: E402
from backend.app.main import app  # noqa: E402

# In-memory SQLite shared by every session of a test (single connection)
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture(scope="function")
def db_session() -> Session:
    """
    Fresh schema per test.

    Tables are created before and dropped after each test so commits made
    by the services under test never leak into the next one.
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_material(db: Session, *, name: str = "Pamuk İplik", unit: str = "kg", on_hand=None, qty_min=0) -> Material:
    material = Material(name=name, unit=unit, active=True)
    db.add(material)
    db.flush()
    if on_hand is not None:
        db.add(
            MaterialStock(
                material_id=material.id,
                qty_on_hand=Decimal(str(on_hand)),
                qty_min=Decimal(str(qty_min)),
            )
        )
    db.commit()
    return material


def make_order(
    db: Session,
    material: Material,
    *,
    quantity=30,
    status: OrderStatus = OrderStatus.pending,
    order_date: date | None = None,
    order_id: int | None = None,
) -> RawMaterialOrder:
    order = RawMaterialOrder(
        material_id=material.id,
        quantity=Decimal(str(quantity)),
        status=status,
        order_date=order_date or date(2025, 10, 6),
    )
    if order_id is not None:
        order.id = order_id
    db.add(order)
    db.commit()
    return order


@pytest.fixture
def material_m1(db_session) -> Material:
    """M1: 100 on hand, minimum 20."""
    return make_material(db_session, name="M1", on_hand=100, qty_min=20)


@pytest.fixture
def order_42(db_session, material_m1) -> RawMaterialOrder:
    """Order #42: 30 of M1, PENDING."""
    return make_order(db_session, material_m1, quantity=30, order_id=42)


@pytest.fixture
def new_material(db_session):
    def _make(**kwargs) -> Material:
        return make_material(db_session, **kwargs)

    return _make


@pytest.fixture
def new_order(db_session):
    def _make(material: Material, **kwargs) -> RawMaterialOrder:
        return make_order(db_session, material, **kwargs)

    return _make
