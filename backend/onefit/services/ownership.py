"""
Ownership checks for the workout domain.

Session exercises and sets carry no owner column of their own; they belong
to whoever owns the ``WorkoutSession`` at the top of the chain. Every lookup
here walks that chain in one joined query and raises ``NotFoundOrForbidden``
when any link is missing, soft-deleted or owned by someone else, so callers
cannot tell "does not exist" from "not yours".
"""
from __future__ import annotations
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from onefit.errors import NotFoundOrForbidden
from onefit.models import WorkoutSession, SessionExercise, ExerciseSet, WorkoutTemplate


@dataclass(slots=True)
class SessionExerciseChain:
    session: WorkoutSession
    session_exercise: SessionExercise


@dataclass(slots=True)
class SetChain:
    session: WorkoutSession
    session_exercise: SessionExercise
    exercise_set: ExerciseSet


def owned_session(db: Session, session_id: int, user_id: int) -> WorkoutSession:
    stmt = select(WorkoutSession).where(
        WorkoutSession.id == session_id,
        WorkoutSession.user_id == user_id,
        WorkoutSession.deleted_at.is_(None),
    )
    session = db.execute(stmt).scalar_one_or_none()
    if session is None:
        raise NotFoundOrForbidden("Workout not found")
    return session


def owned_session_exercise(
    db: Session, session_exercise_id: int, user_id: int, *, session_id: int | None = None
) -> SessionExerciseChain:
    """session_exercise -> session -> user."""
    stmt = (
        select(SessionExercise, WorkoutSession)
        .join(WorkoutSession, SessionExercise.session_id == WorkoutSession.id)
        .where(
            SessionExercise.id == session_exercise_id,
            SessionExercise.deleted_at.is_(None),
            WorkoutSession.user_id == user_id,
            WorkoutSession.deleted_at.is_(None),
        )
    )
    if session_id is not None:
        stmt = stmt.where(WorkoutSession.id == session_id)
    row = db.execute(stmt).first()
    if row is None:
        raise NotFoundOrForbidden("Session exercise not found")
    session_exercise, session = row
    return SessionExerciseChain(session=session, session_exercise=session_exercise)


def owned_set(db: Session, set_id: int, user_id: int, *, session_id: int | None = None) -> SetChain:
    """set -> session_exercise -> session -> user."""
    stmt = (
        select(ExerciseSet, SessionExercise, WorkoutSession)
        .join(SessionExercise, ExerciseSet.session_exercise_id == SessionExercise.id)
        .join(WorkoutSession, SessionExercise.session_id == WorkoutSession.id)
        .where(
            ExerciseSet.id == set_id,
            ExerciseSet.deleted_at.is_(None),
            SessionExercise.deleted_at.is_(None),
            WorkoutSession.user_id == user_id,
            WorkoutSession.deleted_at.is_(None),
        )
    )
    if session_id is not None:
        stmt = stmt.where(WorkoutSession.id == session_id)
    row = db.execute(stmt).first()
    if row is None:
        raise NotFoundOrForbidden("Set not found")
    exercise_set, session_exercise, session = row
    return SetChain(session=session, session_exercise=session_exercise, exercise_set=exercise_set)


def owned_template(db: Session, template_id: int, user_id: int) -> WorkoutTemplate:
    stmt = select(WorkoutTemplate).where(
        WorkoutTemplate.id == template_id,
        WorkoutTemplate.user_id == user_id,
        WorkoutTemplate.deleted_at.is_(None),
    )
    template = db.execute(stmt).scalar_one_or_none()
    if template is None:
        raise NotFoundOrForbidden("Template not found")
    return template
