from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, String, Text, Boolean, Numeric, and_, false
from onefit.db import Base
from onefit.models.base import SoftDeleteMixin

class WorkoutTemplate(SoftDeleteMixin, Base):
    __tablename__ = "workout_templates"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    category: Mapped[str] = mapped_column(String(60), nullable=False, default="", server_default="", index=True)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    # Live rows only, in workout order
    exercises = relationship(
        "TemplateExercise",
        primaryjoin=lambda: and_(
            WorkoutTemplate.id == TemplateExercise.template_id,
            TemplateExercise.deleted_at.is_(None),
        ),
        order_by=lambda: [TemplateExercise.order_index, TemplateExercise.id],
        viewonly=True,
        lazy="selectin",
    )

class TemplateExercise(SoftDeleteMixin, Base):
    __tablename__ = "template_exercises"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    template_id: Mapped[int] = mapped_column(ForeignKey("workout_templates.id", ondelete="CASCADE"), index=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id"), index=True)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)
    target_sets: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    target_reps: Mapped[str] = mapped_column(String(40), nullable=False, default="", server_default="")  # "8-12", "AMRAP", "60 sec"
    target_weight: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)  # kg
    rest_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    exercise = relationship("Exercise", lazy="selectin")
