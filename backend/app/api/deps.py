from __future__ import annotations

from dataclasses import dataclass
from typing import Generator

from fastapi import Query

from backend.app.core.config import ORDER_LIST_MAX
from backend.app.db.session import SessionLocal


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@dataclass
class Pagination:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def get_pagination(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=ORDER_LIST_MAX, ge=1, le=ORDER_LIST_MAX),
) -> Pagination:
    return Pagination(page=page, limit=limit)
