from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select

from backend.app.core.logging_config import get_logger, setup_logging
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.db.models.models_v1 import Material, MaterialStock

logger = get_logger(__name__)

# nom, unité, disponible, minimum
DEFAULT_MATERIALS = [
    ("Pamuk İplik", "kg", Decimal("1200"), Decimal("300")),
    ("Polyester İplik", "kg", Decimal("800"), Decimal("250")),
    ("Viskon Kumaş", "metre", Decimal("450"), Decimal("500")),
    ("Boya (Reaktif)", "kg", Decimal("90"), Decimal("40")),
    ("Fermuar", "adet", Decimal("5000"), Decimal("1000")),
]


def run_seed():
    # normalement les tables viennent d'alembic ; create_all garde une base de dev neuve utilisable
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        created = 0
        for name, unit, on_hand, qty_min in DEFAULT_MATERIALS:
            material = db.scalar(select(Material).where(Material.name == name))
            if not material:
                material = Material(name=name, unit=unit, active=True)
                db.add(material)
                db.flush()
                created += 1

            if not db.get(MaterialStock, material.id):
                db.add(MaterialStock(material_id=material.id, qty_on_hand=on_hand, qty_min=qty_min))

        db.commit()
        logger.info("Seed OK: %s new materials, %s total", created, len(DEFAULT_MATERIALS))
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    run_seed()
