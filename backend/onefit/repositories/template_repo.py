from __future__ import annotations
from typing import Optional
from sqlalchemy import select, func, or_
from onefit.models import WorkoutTemplate, TemplateExercise
from onefit.repositories.base import BaseRepository

class TemplateRepository(BaseRepository[WorkoutTemplate]):
    model = WorkoutTemplate

    def _readable(self, user_id: int):
        return self.live().where(or_(WorkoutTemplate.user_id == user_id, WorkoutTemplate.is_public.is_(True)))

    def list_for_user(self, user_id: int, *, category: str | None = None, include_public: bool = False) -> list[WorkoutTemplate]:
        stmt = self._readable(user_id) if include_public else self.live().where(WorkoutTemplate.user_id == user_id)
        if category:
            stmt = stmt.where(WorkoutTemplate.category == category)
        stmt = stmt.order_by(WorkoutTemplate.created_at.desc(), WorkoutTemplate.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_readable(self, template_id: int, user_id: int) -> Optional[WorkoutTemplate]:
        stmt = self._readable(user_id).where(WorkoutTemplate.id == template_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def name_taken(self, user_id: int, name: str, *, exclude_id: int | None = None) -> bool:
        # Only the caller's own templates count; other users' public ones do not
        stmt = self.live().where(WorkoutTemplate.user_id == user_id, WorkoutTemplate.name == name)
        if exclude_id is not None:
            stmt = stmt.where(WorkoutTemplate.id != exclude_id)
        return self.db.execute(stmt.limit(1)).first() is not None

    def categories(self, user_id: int) -> list[str]:
        stmt = (
            self._readable(user_id)
            .with_only_columns(WorkoutTemplate.category)
            .where(WorkoutTemplate.category != "")
            .distinct()
            .order_by(WorkoutTemplate.category)
        )
        return list(self.db.execute(stmt).scalars().all())

    def create(self, **fields) -> WorkoutTemplate:
        return self.add_and_refresh(WorkoutTemplate(**fields))

    # Template exercises: addressed by (template_id, exercise_id)
    def get_entry(self, template_id: int, exercise_id: int) -> Optional[TemplateExercise]:
        stmt = select(TemplateExercise).where(
            TemplateExercise.template_id == template_id,
            TemplateExercise.exercise_id == exercise_id,
            TemplateExercise.deleted_at.is_(None),
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def entries(self, template_id: int) -> list[TemplateExercise]:
        stmt = select(TemplateExercise).where(
            TemplateExercise.template_id == template_id,
            TemplateExercise.deleted_at.is_(None),
        ).order_by(TemplateExercise.order_index.asc(), TemplateExercise.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def max_order_index(self, template_id: int) -> int | None:
        stmt = select(func.max(TemplateExercise.order_index)).where(
            TemplateExercise.template_id == template_id,
            TemplateExercise.deleted_at.is_(None),
        )
        return self.db.execute(stmt).scalar_one()

    def add_entry(self, **fields) -> TemplateExercise:
        return self.add_and_refresh(TemplateExercise(**fields))
