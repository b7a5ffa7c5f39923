from __future__ import annotations
import logging
from typing import Optional

from sqlalchemy.orm import Session

from onefit.db import transaction
from onefit.errors import ConflictError, NotFoundOrForbidden, ValidationError
from onefit.models import Exercise
from onefit.repositories.exercise_repo import ExerciseRepository

log = logging.getLogger(__name__)

EDITABLE_FIELDS = ("muscle_groups", "equipment", "instructions")

class ExerciseCatalog:
    """Built-in exercises plus each user's custom ones."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ExerciseRepository(db)

    def list(
        self,
        user_id: Optional[int],
        *,
        muscle_group: str | None = None,
        equipment: str | None = None,
        search: str | None = None,
        include_custom: bool = True,
    ) -> list[Exercise]:
        return self.repo.list(
            user_id,
            muscle_group=muscle_group,
            equipment=equipment,
            search=search,
            include_custom=include_custom,
        )

    def get(self, exercise_id: int, user_id: Optional[int]) -> Exercise:
        exercise = self.repo.get_visible(exercise_id, user_id)
        if exercise is None:
            raise NotFoundOrForbidden("Exercise not found")
        return exercise

    def create_custom(
        self, user_id: int, *, name: str, muscle_groups: str = "", equipment: str = "", instructions: str = ""
    ) -> Exercise:
        name = (name or "").strip()
        if not name:
            raise ValidationError("exercise name is required")
        if self.repo.custom_name_taken(user_id, name):
            raise ConflictError(f"exercise with name '{name}' already exists")
        with transaction(self.db):
            exercise = self.repo.create(
                name=name,
                muscle_groups=muscle_groups.strip(),
                equipment=equipment.strip(),
                instructions=instructions.strip(),
                is_custom=True,
                created_by_user_id=user_id,
            )
        return exercise

    def update_custom(self, exercise_id: int, user_id: int, changes: dict) -> Exercise:
        exercise = self.repo.get_owned_custom(exercise_id, user_id)
        if exercise is None:
            raise NotFoundOrForbidden("Exercise not found")

        if "name" in changes:
            name = (changes["name"] or "").strip()
            if not name:
                raise ValidationError("exercise name cannot be blank")
            if self.repo.custom_name_taken(user_id, name, exclude_id=exercise.id):
                raise ConflictError(f"exercise with name '{name}' already exists")
            exercise.name = name
        for key in EDITABLE_FIELDS:
            if key in changes:
                setattr(exercise, key, (changes[key] or "").strip())

        with transaction(self.db):
            self.db.flush()
        return exercise

    def delete_custom(self, exercise_id: int, user_id: int) -> None:
        exercise = self.repo.get_owned_custom(exercise_id, user_id)
        if exercise is None:
            raise NotFoundOrForbidden("Exercise not found")
        if self.repo.reference_count(exercise.id):
            raise ConflictError("cannot delete exercise: it is used in workout templates or sessions")
        with transaction(self.db):
            exercise.soft_delete()
        log.info("custom exercise %s deleted by user %s", exercise_id, user_id)

    def muscle_groups(self, user_id: Optional[int]) -> list[str]:
        groups = set()
        for value in self.repo.muscle_group_values(user_id):
            groups.update(part.strip().lower() for part in value.split(",") if part.strip())
        return sorted(groups)

    def equipment_types(self, user_id: Optional[int]) -> list[str]:
        return self.repo.equipment_values(user_id)
