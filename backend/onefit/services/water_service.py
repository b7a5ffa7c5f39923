from __future__ import annotations
from datetime import date, datetime, time, timedelta, timezone

from sqlalchemy.orm import Session

from onefit.clock import utcnow
from onefit.db import transaction
from onefit.errors import NotFoundOrForbidden, ValidationError
from onefit.models import WaterLog
from onefit.repositories.water_repo import WaterRepository
from onefit.services.fasting_service import from_epoch_ms


class WaterService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = WaterRepository(db)

    def log(self, user_id: int, *, amount: float, logged_at: int | None = None) -> WaterLog:
        if amount is None or amount <= 0:
            raise ValidationError("amount must be greater than 0")
        when = from_epoch_ms(logged_at) if logged_at is not None else utcnow()
        if when > utcnow():
            raise ValidationError("logged_at cannot be in the future")
        with transaction(self.db):
            entry = self.repo.create(user_id, amount=amount, logged_at=when)
        return entry

    def list(self, user_id: int, *, day: date | None = None) -> list[WaterLog]:
        if day is None:
            return self.repo.list_by_user(user_id)
        start = datetime.combine(day, time.min, tzinfo=timezone.utc)
        return self.repo.list_by_user(user_id, start=start, end=start + timedelta(days=1))

    def delete_latest(self, user_id: int) -> WaterLog:
        entry = self.repo.latest(user_id)
        if entry is None:
            raise NotFoundOrForbidden("No water logs found")
        with transaction(self.db):
            entry.soft_delete()
        return entry

    def delete(self, log_id: int, user_id: int) -> None:
        entry = self.repo.get_owned(log_id, user_id)
        if entry is None:
            raise NotFoundOrForbidden("Water log not found")
        with transaction(self.db):
            entry.soft_delete()
