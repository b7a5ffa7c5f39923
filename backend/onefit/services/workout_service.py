from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import Session

from onefit.clock import as_utc, utcnow
from onefit.db import transaction
from onefit.errors import NotFoundOrForbidden, ValidationError
from onefit.models import WorkoutSession, SessionExercise, ExerciseSet
from onefit.repositories.base import Page
from onefit.repositories.exercise_repo import ExerciseRepository
from onefit.repositories.template_repo import TemplateRepository
from onefit.repositories.workout_repo import WorkoutRepository
from onefit.services import derived
from onefit.services.ownership import owned_session, owned_session_exercise, owned_set

log = logging.getLogger(__name__)

SET_FIELDS = derived.SET_METRICS + ("rpe",)

@dataclass(slots=True)
class WorkoutStats:
    total_workouts: int
    total_minutes: int
    total_sets: int
    average_duration_minutes: float
    period_days: int

class WorkoutService:
    """
    Workout sessions and everything hanging off them.

    A session is Active while ``ended_at`` is null and Ended afterwards.
    Ending is one-way and happens once: later end requests leave the
    recorded end time and duration alone.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = WorkoutRepository(db)
        self.templates = TemplateRepository(db)
        self.exercises = ExerciseRepository(db)

    # Reads

    def history(
        self,
        user_id: int,
        *,
        limit: int = 20,
        offset: int = 0,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Page[WorkoutSession]:
        started_from = datetime.combine(start_date, time.min, tzinfo=timezone.utc) if start_date else None
        started_before = (
            datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=timezone.utc) if end_date else None
        )
        return self.repo.history(
            user_id, limit=limit, offset=offset, started_from=started_from, started_before=started_before
        )

    def get(self, session_id: int, user_id: int) -> WorkoutSession:
        return owned_session(self.db, session_id, user_id)

    def get_active(self, user_id: int) -> Optional[WorkoutSession]:
        # No active workout is a normal answer, not an error
        return self.repo.get_active(user_id)

    def stats(self, user_id: int, days: int = 30) -> WorkoutStats:
        since = utcnow() - timedelta(days=days)
        total_workouts, total_minutes = self.repo.finished_totals(user_id, since)
        total_sets = self.repo.set_count(user_id, since)
        average = total_minutes / total_workouts if total_workouts else 0.0
        return WorkoutStats(
            total_workouts=total_workouts,
            total_minutes=total_minutes,
            total_sets=total_sets,
            average_duration_minutes=average,
            period_days=days,
        )

    # Session lifecycle

    def start(self, user_id: int, *, name: str, template_id: int | None = None, notes: str | None = None) -> WorkoutSession:
        name = (name or "").strip()
        if not name:
            raise ValidationError("workout name is required")

        entries = []
        if template_id is not None:
            template = self.templates.get_readable(template_id, user_id)
            if template is None:
                raise NotFoundOrForbidden("Template not found")
            entries = self.templates.entries(template.id)

        # Session row and its copied exercises commit together or not at all
        with transaction(self.db):
            session = self.repo.create(
                user_id=user_id,
                template_id=template_id,
                name=name,
                started_at=utcnow(),
                notes=notes,
            )
            for entry in entries:
                self.repo.add_exercise(
                    session_id=session.id,
                    exercise_id=entry.exercise_id,
                    order_index=entry.order_index,
                    notes=derived.target_note(entry.target_sets, entry.target_reps),
                )
        log.info("workout %s started by user %s (template=%s)", session.id, user_id, template_id)
        return self.get(session.id, user_id)

    def update(self, session_id: int, user_id: int, changes: dict) -> WorkoutSession:
        session = owned_session(self.db, session_id, user_id)

        if "name" in changes:
            name = (changes["name"] or "").strip()
            if not name:
                raise ValidationError("workout name cannot be blank")
            session.name = name
        if "notes" in changes:
            session.notes = changes["notes"]

        ending = changes.get("ended_at") is not None or changes.get("is_active") is False
        if ending and session.ended_at is None:
            ended_at = as_utc(changes.get("ended_at") or utcnow())
            session.duration_minutes = derived.duration_minutes(session.started_at, ended_at)
            session.ended_at = ended_at
            log.info("workout %s finished after %s min", session.id, session.duration_minutes)

        with transaction(self.db):
            self.db.flush()
        return self.get(session_id, user_id)

    def delete(self, session_id: int, user_id: int) -> None:
        session = owned_session(self.db, session_id, user_id)
        with transaction(self.db):
            now = utcnow()
            children = self.repo.exercises_of(session.id)
            for exercise_set in self.repo.sets_of([c.id for c in children]):
                exercise_set.soft_delete(now)
            for child in children:
                child.soft_delete(now)
            session.soft_delete(now)

    # Session exercises

    def add_exercise(
        self, session_id: int, user_id: int, *, exercise_id: int, order_index: int = 0, notes: str | None = None
    ) -> SessionExercise:
        session = owned_session(self.db, session_id, user_id)
        if self.exercises.get_visible(exercise_id, user_id) is None:
            raise NotFoundOrForbidden("Exercise not found")
        with transaction(self.db):
            entry = self.repo.add_exercise(
                session_id=session.id,
                exercise_id=exercise_id,
                order_index=derived.resolve_order_index(order_index, self.repo.max_order_index(session.id)),
                notes=notes,
            )
        return entry

    def update_exercise(self, session_id: int, user_id: int, session_exercise_id: int, changes: dict) -> SessionExercise:
        chain = owned_session_exercise(self.db, session_exercise_id, user_id, session_id=session_id)
        entry = chain.session_exercise
        if "order_index" in changes:
            if changes["order_index"] is None:
                raise ValidationError("order_index cannot be null")
            entry.order_index = changes["order_index"]
        if "notes" in changes:
            entry.notes = changes["notes"]
        if "completed_at" in changes:
            completed_at = changes["completed_at"]
            entry.completed_at = as_utc(completed_at) if completed_at else None
        with transaction(self.db):
            self.db.flush()
        return entry

    def remove_exercise(self, session_id: int, user_id: int, session_exercise_id: int) -> None:
        chain = owned_session_exercise(self.db, session_exercise_id, user_id, session_id=session_id)
        with transaction(self.db):
            now = utcnow()
            for exercise_set in self.repo.sets_of([chain.session_exercise.id]):
                exercise_set.soft_delete(now)
            chain.session_exercise.soft_delete(now)

    # Sets

    def log_set(self, session_id: int, user_id: int, session_exercise_id: int, values: dict) -> ExerciseSet:
        chain = owned_session_exercise(self.db, session_exercise_id, user_id, session_id=session_id)
        if not derived.has_set_metric(values):
            raise ValidationError(
                "at least one set metric (reps, weight, duration_seconds or distance_meters) must be provided"
            )
        entry_id = chain.session_exercise.id
        with transaction(self.db):
            exercise_set = self.repo.add_set(
                session_exercise_id=entry_id,
                set_number=derived.next_in_sequence(self.repo.max_set_number(entry_id)),
                completed_at=utcnow(),
                **{key: values.get(key) for key in SET_FIELDS},
            )
        return exercise_set

    def update_set(self, session_id: int, user_id: int, set_id: int, changes: dict) -> ExerciseSet:
        chain = owned_set(self.db, set_id, user_id, session_id=session_id)
        exercise_set = chain.exercise_set
        merged = {key: getattr(exercise_set, key) for key in SET_FIELDS}
        merged.update({key: changes[key] for key in SET_FIELDS if key in changes})
        if not derived.has_set_metric(merged):
            raise ValidationError("a set must keep at least one of reps, weight, duration_seconds or distance_meters")
        for key in SET_FIELDS:
            setattr(exercise_set, key, merged[key])
        with transaction(self.db):
            self.db.flush()
        return exercise_set

    def delete_set(self, session_id: int, user_id: int, set_id: int) -> None:
        chain = owned_set(self.db, set_id, user_id, session_id=session_id)
        with transaction(self.db):
            chain.exercise_set.soft_delete()
