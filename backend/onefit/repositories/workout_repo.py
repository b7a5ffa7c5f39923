from __future__ import annotations
from datetime import datetime
from typing import Optional
from sqlalchemy import select, func
from onefit.models import WorkoutSession, SessionExercise, ExerciseSet
from onefit.repositories.base import BaseRepository, Page

class WorkoutRepository(BaseRepository[WorkoutSession]):
    model = WorkoutSession

    def history(
        self,
        user_id: int,
        *,
        limit: int = 20,
        offset: int = 0,
        started_from: datetime | None = None,
        started_before: datetime | None = None,
    ) -> Page[WorkoutSession]:
        stmt = self.live().where(WorkoutSession.user_id == user_id)
        if started_from is not None:
            stmt = stmt.where(WorkoutSession.started_at >= started_from)
        if started_before is not None:
            stmt = stmt.where(WorkoutSession.started_at < started_before)
        stmt = stmt.order_by(WorkoutSession.started_at.desc(), WorkoutSession.id.desc())
        return self.page_from_stmt(stmt, limit=limit, offset=offset)

    def get_active(self, user_id: int) -> Optional[WorkoutSession]:
        stmt = (
            self.live()
            .where(WorkoutSession.user_id == user_id, WorkoutSession.ended_at.is_(None))
            .order_by(WorkoutSession.started_at.desc(), WorkoutSession.id.desc())
            .limit(1)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def create(self, **fields) -> WorkoutSession:
        return self.add_and_refresh(WorkoutSession(**fields))

    # Session exercises
    def exercises_of(self, session_id: int) -> list[SessionExercise]:
        stmt = select(SessionExercise).where(
            SessionExercise.session_id == session_id, SessionExercise.deleted_at.is_(None)
        )
        return list(self.db.execute(stmt).scalars().all())

    def max_order_index(self, session_id: int) -> int | None:
        stmt = select(func.max(SessionExercise.order_index)).where(
            SessionExercise.session_id == session_id, SessionExercise.deleted_at.is_(None)
        )
        return self.db.execute(stmt).scalar_one()

    def add_exercise(self, **fields) -> SessionExercise:
        return self.add_and_refresh(SessionExercise(**fields))

    # Sets
    def sets_of(self, session_exercise_ids: list[int]) -> list[ExerciseSet]:
        if not session_exercise_ids:
            return []
        stmt = select(ExerciseSet).where(
            ExerciseSet.session_exercise_id.in_(session_exercise_ids), ExerciseSet.deleted_at.is_(None)
        )
        return list(self.db.execute(stmt).scalars().all())

    def max_set_number(self, session_exercise_id: int) -> int | None:
        # Deleted rows included: set numbers are never handed out twice
        stmt = select(func.max(ExerciseSet.set_number)).where(
            ExerciseSet.session_exercise_id == session_exercise_id
        )
        return self.db.execute(stmt).scalar_one()

    def add_set(self, **fields) -> ExerciseSet:
        return self.add_and_refresh(ExerciseSet(**fields))

    # Stats
    def finished_totals(self, user_id: int, since: datetime) -> tuple[int, int]:
        stmt = select(
            func.count(WorkoutSession.id), func.coalesce(func.sum(WorkoutSession.duration_minutes), 0)
        ).where(
            WorkoutSession.user_id == user_id,
            WorkoutSession.deleted_at.is_(None),
            WorkoutSession.started_at >= since,
            WorkoutSession.ended_at.is_not(None),
        )
        count, minutes = self.db.execute(stmt).one()
        return int(count), int(minutes)

    def set_count(self, user_id: int, since: datetime) -> int:
        stmt = (
            select(func.count(ExerciseSet.id))
            .join(SessionExercise, ExerciseSet.session_exercise_id == SessionExercise.id)
            .join(WorkoutSession, SessionExercise.session_id == WorkoutSession.id)
            .where(
                WorkoutSession.user_id == user_id,
                WorkoutSession.started_at >= since,
                WorkoutSession.deleted_at.is_(None),
                SessionExercise.deleted_at.is_(None),
                ExerciseSet.deleted_at.is_(None),
            )
        )
        return self.db.execute(stmt).scalar_one()
