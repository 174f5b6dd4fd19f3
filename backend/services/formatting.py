"""
Presentation helpers shared by the panels' list endpoints.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta

TR_MONTHS = (
    "Ocak",
    "Şubat",
    "Mart",
    "Nisan",
    "Mayıs",
    "Haziran",
    "Temmuz",
    "Ağustos",
    "Eylül",
    "Ekim",
    "Kasım",
    "Aralık",
)


def _as_date(value: date | datetime | str | None) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value).strip()).date()
    except ValueError:
        return None


def format_date_tr(value: date | datetime | str | None) -> str | None:
    """dd.MM.yyyy, or None when the value is missing or unparseable."""
    d = _as_date(value)
    if d is None:
        return None
    return f"{d.day:02d}.{d.month:02d}.{d.year:04d}"


def add_business_days(start: date, days: int) -> date:
    """Ajoute des jours ouvrés, samedi et dimanche exclus."""
    current = start
    added = 0
    while added < days:
        current += timedelta(days=1)
        if current.weekday() < 5:
            added += 1
    return current


def month_name_tr(year: int, month: int) -> str:
    return f"{TR_MONTHS[month - 1]} {year}"


def months_before(d: date, months: int) -> date:
    """Même jour `months` mois plus tôt, ramené au dernier jour du mois si besoin."""
    index = d.year * 12 + (d.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    next_month_first = date(year + (month == 12), month % 12 + 1, 1)
    last_day = (next_month_first - timedelta(days=1)).day
    return date(year, month, min(d.day, last_day))


def page_count(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(total / limit)
