from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from onefit.clock import utcnow
from onefit.db import transaction
from onefit.errors import ConflictError, NotFoundOrForbidden, ValidationError
from onefit.models import FastType, FastSession, FastingStatus
from onefit.repositories.fasting_repo import FastingRepository
from onefit.services import derived

log = logging.getLogger(__name__)


def from_epoch_ms(value: int) -> datetime:
    try:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise ValidationError(f"timestamp out of range: {value}") from exc


class FastingService:
    """
    Intermittent fasting sessions.

    At most one fast per user is ONGOING. Ending moves it to COMPLETED or
    CANCELLED and stamps the elapsed minutes; it never goes back.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = FastingRepository(db)

    def list_types(self) -> list[FastType]:
        return self.repo.builtin_types()

    def history(self, user_id: int) -> list[FastSession]:
        return self.repo.history(user_id)

    def current(self, user_id: int) -> Optional[FastSession]:
        return self.repo.ongoing(user_id)

    def start(self, user_id: int, *, fast_type_id: int, notes: str | None = None) -> FastSession:
        fast_type = self.repo.get_type(fast_type_id, user_id)
        if fast_type is None:
            raise ValidationError("invalid fast type")
        if self.repo.ongoing(user_id) is not None:
            raise ConflictError("a fast is already in progress")
        with transaction(self.db):
            fast = self.repo.create(
                user_id=user_id,
                fast_type_id=fast_type.id,
                start_time=utcnow(),
                target_minutes=fast_type.target_hours * 60,
                type=derived.fast_type_label(fast_type.target_hours * 3600),
                status=FastingStatus.ongoing,
                notes=notes,
            )
        log.info("fast %s started by user %s (%s)", fast.id, user_id, fast.type)
        return fast

    def end(self, fast_id: int, user_id: int, *, cancel: bool = False, notes: str | None = None) -> FastSession:
        fast = self.repo.get_owned(fast_id, user_id)
        if fast is None:
            raise NotFoundOrForbidden("Fast not found")
        if fast.status != FastingStatus.ongoing:
            raise ValidationError("fast is not ongoing")
        now = utcnow()
        fast.end_time = now
        fast.duration_minutes = derived.duration_minutes(fast.start_time, now)
        fast.status = FastingStatus.cancelled if cancel else FastingStatus.completed
        if notes is not None:
            fast.notes = notes
        with transaction(self.db):
            self.db.flush()
        log.info("fast %s ended with status %s", fast.id, fast.status.value)
        return fast

    def save_completed(
        self,
        user_id: int,
        *,
        start_time: int,
        end_time: int,
        actual_duration_seconds: int,
        goal_duration_seconds: int,
        notes: str | None = None,
    ) -> FastSession:
        """Record a fast that was timed on the client (times in epoch ms)."""
        if start_time >= end_time:
            raise ValidationError("start_time must be before end_time")
        if actual_duration_seconds <= 0 or goal_duration_seconds <= 0:
            raise ValidationError("durations must be positive")
        started, ended = from_epoch_ms(start_time), from_epoch_ms(end_time)
        now = utcnow()
        if started > now or ended > now:
            raise ValidationError("fast times cannot be in the future")

        label = derived.fast_type_label(goal_duration_seconds)
        fast_type = self.repo.builtin_for_hours(goal_duration_seconds // 3600)
        with transaction(self.db):
            fast = self.repo.create(
                user_id=user_id,
                fast_type_id=fast_type.id if fast_type else None,
                start_time=started,
                end_time=ended,
                target_minutes=goal_duration_seconds // 60,
                duration_minutes=actual_duration_seconds // 60,
                type=label,
                status=FastingStatus.completed,
                notes=notes,
            )
        return fast

