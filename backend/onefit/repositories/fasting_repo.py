from __future__ import annotations
from typing import Optional
from sqlalchemy import select
from onefit.models import FastType, FastSession, FastingStatus
from onefit.repositories.base import BaseRepository

class FastingRepository(BaseRepository[FastSession]):
    model = FastSession

    def builtin_types(self) -> list[FastType]:
        stmt = select(FastType).where(FastType.is_custom.is_(False), FastType.deleted_at.is_(None))\
                               .order_by(FastType.target_hours.asc(), FastType.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_type(self, fast_type_id: int, user_id: int) -> Optional[FastType]:
        stmt = select(FastType).where(
            FastType.id == fast_type_id,
            FastType.deleted_at.is_(None),
            (FastType.is_custom.is_(False)) | (FastType.user_id == user_id),
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def builtin_for_hours(self, target_hours: int) -> Optional[FastType]:
        stmt = select(FastType).where(
            FastType.target_hours == target_hours,
            FastType.is_custom.is_(False),
            FastType.deleted_at.is_(None),
        ).order_by(FastType.id.asc()).limit(1)
        return self.db.execute(stmt).scalar_one_or_none()

    def builtin_by_name(self, name: str) -> Optional[FastType]:
        stmt = select(FastType).where(FastType.name == name, FastType.is_custom.is_(False))
        return self.db.execute(stmt).scalar_one_or_none()

    def add_type(self, **fields) -> FastType:
        return self.add_and_refresh(FastType(**fields))

    def get_owned(self, fast_id: int, user_id: int) -> Optional[FastSession]:
        stmt = self.live().where(FastSession.id == fast_id, FastSession.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def ongoing(self, user_id: int) -> Optional[FastSession]:
        stmt = self.live().where(FastSession.user_id == user_id, FastSession.status == FastingStatus.ongoing)\
                          .order_by(FastSession.start_time.desc()).limit(1)
        return self.db.execute(stmt).scalar_one_or_none()

    def history(self, user_id: int) -> list[FastSession]:
        stmt = self.live().where(FastSession.user_id == user_id)\
                          .order_by(FastSession.start_time.desc(), FastSession.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def create(self, **fields) -> FastSession:
        return self.add_and_refresh(FastSession(**fields))
