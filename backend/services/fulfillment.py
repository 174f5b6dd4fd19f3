"""
Livraison des commandes de matière première.

Un changement de statut s'exécute dans une seule transaction :

    1. verrouiller la ligne de commande (SELECT ... FOR UPDATE) et lire
       matière / quantité / statut / stock_moved_at
    2. écrire le nouveau statut
    3. au premier passage en DELIVERED seulement : décrémenter le stock de
       la matière (plancher à zéro), ajouter un mouvement OUT et poser
       stock_moved_at sur la commande
    4. commit, ou rollback de l'ensemble

Repasser DELIVERED sur une commande déjà livrée ne touche pas au stock.
Une commande livrée, remise à un autre statut puis relivrée ne bouge pas
le stock une seconde fois : stock_moved_at reste posé sur la ligne.

Les appels concurrents sur une même commande sont sérialisés par le verrou.
L'écriture vers DELIVERED est en plus gardée par `status <> DELIVERED` et
son rowcount décide du mouvement de stock : un seul appelant l'applique.

Les transitions sont libres : tout statut peut suivre tout autre.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select, text, update
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.config import LOCK_TIMEOUT_MS
from backend.app.core.exceptions import NotFoundError, TransactionError
from backend.app.core.logging_config import get_logger
from backend.app.db.models.models_v1 import RawMaterialOrder
from backend.app.db.models.core_types import OrderStatus
from backend.services import inventory
from backend.services.order_status import canonicalize_status

logger = get_logger(__name__)


@dataclass(frozen=True)
class FulfillmentResult:
    order_id: int
    previous_status: OrderStatus
    status: OrderStatus
    stock_updated: bool
    success: bool = True


def update_order_status(db: Session, order_id: int, requested_status: str | OrderStatus) -> FulfillmentResult:
    """
    Change le statut d'une commande de matière première.

    InvalidStatusError avant tout accès base si le texte ne se canonicalise
    pas, NotFoundError si la commande n'existe pas, TransactionError si la
    transaction a été annulée.
    """
    new_status = canonicalize_status(requested_status)
    return _run_transition(db, order_id, new_status, note_prefix="Siparis TESLIMEDILDI")


def force_deliver(db: Session, order_id: int) -> FulfillmentResult:
    """Passe la commande en DELIVERED quel que soit son statut."""
    return _run_transition(db, order_id, OrderStatus.delivered, note_prefix="Fabrika siparisi TESLIMEDILDI")


def _run_transition(db: Session, order_id: int, new_status: OrderStatus, *, note_prefix: str) -> FulfillmentResult:
    try:
        result = _apply_transition(db, order_id, new_status, note_prefix=note_prefix)
        db.commit()
    except NotFoundError:
        db.rollback()
        raise
    except OperationalError as exc:
        db.rollback()
        logger.warning("Order %s status update rolled back (retryable): %s", order_id, exc)
        raise TransactionError("order is busy, please retry", retryable=True) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Order %s status update rolled back: %s", order_id, exc)
        raise TransactionError("order status could not be updated") from exc
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Order %s status %s -> %s (stock_updated=%s)",
        order_id,
        result.previous_status.value,
        result.status.value,
        result.stock_updated,
    )
    return result


def _set_lock_timeout(db: Session) -> None:
    if LOCK_TIMEOUT_MS <= 0:
        return
    if db.get_bind().dialect.name == "postgresql":
        # SET n'accepte pas de paramètres liés
        db.execute(text(f"SET LOCAL lock_timeout = {int(LOCK_TIMEOUT_MS)}"))


def _apply_transition(db: Session, order_id: int, new_status: OrderStatus, *, note_prefix: str) -> FulfillmentResult:
    _set_lock_timeout(db)

    row = db.execute(
        select(
            RawMaterialOrder.material_id,
            RawMaterialOrder.quantity,
            RawMaterialOrder.status,
            RawMaterialOrder.stock_moved_at,
        )
        .where(RawMaterialOrder.id == order_id)
        .with_for_update()
    ).one_or_none()
    if row is None:
        raise NotFoundError("order", order_id)

    material_id, quantity, current_status, stock_moved_at = row

    stmt = update(RawMaterialOrder).where(RawMaterialOrder.id == order_id)
    if new_status is OrderStatus.delivered:
        stmt = stmt.where(RawMaterialOrder.status != OrderStatus.delivered)
    written = db.execute(
        stmt.values(status=new_status).execution_options(synchronize_session=False)
    ).rowcount

    first_delivery = (
        new_status is OrderStatus.delivered
        and bool(written)
        and material_id is not None
        and stock_moved_at is None
    )
    if new_status is OrderStatus.delivered and not written:
        # déjà DELIVERED : rien à écrire, rien à bouger
        current_status = OrderStatus.delivered

    if first_delivery:
        qty = Decimal(quantity or 0)
        touched = inventory.decrement_stock(db, material_id=material_id, quantity=qty)
        inventory.log_movement(
            db,
            material_id=material_id,
            quantity=qty,
            note=f"{note_prefix} #{order_id}",
            order_id=order_id,
        )
        db.execute(
            update(RawMaterialOrder)
            .where(RawMaterialOrder.id == order_id)
            .values(stock_moved_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        logger.debug("Stock decrement material=%s qty=%s rows=%s", material_id, qty, touched)

    return FulfillmentResult(
        order_id=order_id,
        previous_status=current_status,
        status=new_status,
        stock_updated=first_delivery,
    )
