from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, DateTime, String, Text, and_
from onefit.db import Base
from onefit.models.base import SoftDeleteMixin
from onefit.models.exercise_set import ExerciseSet

class WorkoutSession(SoftDeleteMixin, Base):
    """A performed workout. Active while ``ended_at`` is null."""

    __tablename__ = "workout_sessions"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    template_id: Mapped[int | None] = mapped_column(ForeignKey("workout_templates.id"), nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    exercises = relationship(
        "SessionExercise",
        primaryjoin=lambda: and_(
            WorkoutSession.id == SessionExercise.session_id,
            SessionExercise.deleted_at.is_(None),
        ),
        order_by=lambda: [SessionExercise.order_index, SessionExercise.id],
        viewonly=True,
        lazy="selectin",
    )

    @property
    def is_active(self) -> bool:
        return self.ended_at is None

class SessionExercise(SoftDeleteMixin, Base):
    __tablename__ = "session_exercises"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    session_id: Mapped[int] = mapped_column(ForeignKey("workout_sessions.id", ondelete="CASCADE"), index=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id"), index=True)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    exercise = relationship("Exercise", lazy="selectin")
    sets = relationship(
        ExerciseSet,
        primaryjoin=lambda: and_(
            SessionExercise.id == ExerciseSet.session_exercise_id,
            ExerciseSet.deleted_at.is_(None),
        ),
        order_by=lambda: ExerciseSet.set_number,
        viewonly=True,
        lazy="selectin",
    )
