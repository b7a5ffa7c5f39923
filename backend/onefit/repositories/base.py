# onefit/repositories/base.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from sqlalchemy.orm import Session
from sqlalchemy import Select, select, func

T = TypeVar("T")  # SQLAlchemy model type

@dataclass(slots=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    limit: int
    offset: int

class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style.

    Every model here is soft-deleted, so ``live()`` is the starting point
    for reads; rows with ``deleted_at`` set never come back.
    """
    model: type

    def __init__(self, db: Session):
        self.db = db

    def live(self) -> Select:
        return select(self.model).where(self.model.deleted_at.is_(None))

    def get_live(self, entity_id: int) -> Optional[T]:
        return self.db.execute(self.live().where(self.model.id == entity_id)).scalar_one_or_none()

    def page_from_stmt(self, stmt: Select, *, limit: int = 50, offset: int = 0) -> Page[T]:
        total = self.db.execute(
            select(func.count()).select_from(stmt.order_by(None).subquery())
        ).scalar_one()
        items = list(self.db.execute(stmt.limit(limit).offset(offset)).scalars().all())
        return Page(items=items, total=total, limit=limit, offset=offset)

    def add_and_refresh(self, entity: T) -> T:
        self.db.add(entity)
        self.db.flush()
        self.db.refresh(entity)
        return entity
