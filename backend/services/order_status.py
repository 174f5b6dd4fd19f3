"""
Canonicalisation du statut de commande.

Les panneaux usine et admin envoient le statut en texte libre, le plus
souvent le libellé turc ("Teslim Edildi", "teslim edildi", "TESLİM EDİLDİ"),
parfois le code canonique. Tout passe par canonicalize_status() avant
d'atteindre la base ; un texte inconnu est rejeté.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any

from backend.app.core.exceptions import InvalidStatusError
from backend.app.db.models.core_types import OrderStatus

# str.upper() donne "I" pour "i" ; le turc veut "İ" (ramené à "I" plus bas)
_TR_UPPER = str.maketrans({"i": "İ", "ı": "I"})
_SEPARATORS = re.compile(r"[\s_\-]+")

STATUS_ALIASES: dict[str, OrderStatus] = {
    "TESLIMEDILDI": OrderStatus.delivered,
    "DELIVERED": OrderStatus.delivered,
    "BEKLEMEDE": OrderStatus.pending,
    "PENDING": OrderStatus.pending,
    "ONAYLANDI": OrderStatus.approved,
    "APPROVED": OrderStatus.approved,
    "HAZIRLANIYOR": OrderStatus.in_preparation,
    "INPREPARATION": OrderStatus.in_preparation,
}

STATUS_LABELS: dict[OrderStatus, str] = {
    OrderStatus.pending: "Beklemede",
    OrderStatus.in_preparation: "Hazırlanıyor",
    OrderStatus.approved: "Onaylandı",
    OrderStatus.delivered: "Teslim Edildi",
}


def fold_status_text(text: str) -> str:
    """Majuscules (règles turques), sans accents ni séparateurs."""
    upper = text.strip().translate(_TR_UPPER).upper()
    decomposed = unicodedata.normalize("NFKD", upper)
    ascii_only = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _SEPARATORS.sub("", ascii_only)


def canonicalize_status(text: Any) -> OrderStatus:
    if isinstance(text, OrderStatus):
        return text
    if text is None:
        raise InvalidStatusError(text)

    status = STATUS_ALIASES.get(fold_status_text(str(text)))
    if status is None:
        raise InvalidStatusError(text)
    return status


def status_label(status: OrderStatus) -> str:
    return STATUS_LABELS[status]
