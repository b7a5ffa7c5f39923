from __future__ import annotations
from datetime import datetime
from typing import Optional
from onefit.models import WaterLog
from onefit.repositories.base import BaseRepository

class WaterRepository(BaseRepository[WaterLog]):
    model = WaterLog

    def list_by_user(self, user_id: int, *, start: datetime | None = None, end: datetime | None = None) -> list[WaterLog]:
        stmt = self.live().where(WaterLog.user_id == user_id)
        if start is not None:
            stmt = stmt.where(WaterLog.logged_at >= start)
        if end is not None:
            stmt = stmt.where(WaterLog.logged_at < end)
        stmt = stmt.order_by(WaterLog.logged_at.desc(), WaterLog.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def latest(self, user_id: int) -> Optional[WaterLog]:
        stmt = self.live().where(WaterLog.user_id == user_id)\
                          .order_by(WaterLog.logged_at.desc(), WaterLog.created_at.desc(), WaterLog.id.desc())\
                          .limit(1)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_owned(self, log_id: int, user_id: int) -> Optional[WaterLog]:
        stmt = self.live().where(WaterLog.id == log_id, WaterLog.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def create(self, user_id: int, *, amount: float, logged_at: datetime) -> WaterLog:
        return self.add_and_refresh(WaterLog(user_id=user_id, amount=amount, logged_at=logged_at))
