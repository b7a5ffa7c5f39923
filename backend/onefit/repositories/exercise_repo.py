from __future__ import annotations
from typing import Optional
from sqlalchemy import select, func, or_, and_
from onefit.models import Exercise, TemplateExercise, SessionExercise
from onefit.repositories.base import BaseRepository

def _contains(value: str) -> str:
    """LIKE pattern matching value literally anywhere in the column."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise

    def visible(self, user_id: Optional[int]):
        """Built-ins, plus the caller's own customs when a caller is known."""
        builtin = Exercise.is_custom.is_(False)
        if user_id is None:
            return self.live().where(builtin)
        return self.live().where(
            or_(builtin, and_(Exercise.is_custom.is_(True), Exercise.created_by_user_id == user_id))
        )

    def list(
        self,
        user_id: Optional[int],
        *,
        muscle_group: str | None = None,
        equipment: str | None = None,
        search: str | None = None,
        include_custom: bool = True,
    ) -> list[Exercise]:
        stmt = self.visible(user_id if include_custom else None)
        if muscle_group:
            stmt = stmt.where(Exercise.muscle_groups.ilike(_contains(muscle_group), escape="\\"))
        if equipment:
            stmt = stmt.where(Exercise.equipment.ilike(_contains(equipment), escape="\\"))
        if search:
            stmt = stmt.where(Exercise.name.ilike(_contains(search), escape="\\"))
        stmt = stmt.order_by(Exercise.is_custom.asc(), Exercise.name.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_visible(self, exercise_id: int, user_id: Optional[int]) -> Optional[Exercise]:
        stmt = self.visible(user_id).where(Exercise.id == exercise_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_owned_custom(self, exercise_id: int, user_id: int) -> Optional[Exercise]:
        stmt = self.live().where(
            Exercise.id == exercise_id,
            Exercise.is_custom.is_(True),
            Exercise.created_by_user_id == user_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def custom_name_taken(self, user_id: int, name: str, *, exclude_id: int | None = None) -> bool:
        stmt = self.live().where(Exercise.created_by_user_id == user_id, Exercise.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Exercise.id != exclude_id)
        return self.db.execute(stmt.limit(1)).first() is not None

    def reference_count(self, exercise_id: int) -> int:
        in_templates = self.db.execute(
            select(func.count()).select_from(TemplateExercise).where(
                TemplateExercise.exercise_id == exercise_id, TemplateExercise.deleted_at.is_(None)
            )
        ).scalar_one()
        in_sessions = self.db.execute(
            select(func.count()).select_from(SessionExercise).where(
                SessionExercise.exercise_id == exercise_id, SessionExercise.deleted_at.is_(None)
            )
        ).scalar_one()
        return in_templates + in_sessions

    def muscle_group_values(self, user_id: Optional[int]) -> list[str]:
        stmt = self.visible(user_id).with_only_columns(Exercise.muscle_groups).where(Exercise.muscle_groups != "")
        return list(self.db.execute(stmt.distinct()).scalars().all())

    def equipment_values(self, user_id: Optional[int]) -> list[str]:
        stmt = self.visible(user_id).with_only_columns(Exercise.equipment).where(Exercise.equipment != "")
        return list(self.db.execute(stmt.distinct().order_by(Exercise.equipment)).scalars().all())

    def count_builtin(self) -> int:
        stmt = select(func.count()).select_from(Exercise).where(Exercise.is_custom.is_(False))
        return self.db.execute(stmt).scalar_one()

    def create(self, **fields) -> Exercise:
        return self.add_and_refresh(Exercise(**fields))
