from __future__ import annotations
import logging

from sqlalchemy.orm import Session

from onefit.clock import utcnow
from onefit.db import transaction
from onefit.errors import ConflictError, NotFoundOrForbidden, ValidationError
from onefit.models import WorkoutTemplate, TemplateExercise
from onefit.repositories.exercise_repo import ExerciseRepository
from onefit.repositories.template_repo import TemplateRepository
from onefit.services import derived
from onefit.services.ownership import owned_template

log = logging.getLogger(__name__)

TARGET_FIELDS = ("order_index", "target_sets", "target_reps", "target_weight", "rest_seconds")

class TemplateService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TemplateRepository(db)
        self.exercises = ExerciseRepository(db)

    # Templates

    def list(self, user_id: int, *, category: str | None = None, include_public: bool = False) -> list[WorkoutTemplate]:
        return self.repo.list_for_user(user_id, category=category, include_public=include_public)

    def get(self, template_id: int, user_id: int) -> WorkoutTemplate:
        """Own or public templates."""
        template = self.repo.get_readable(template_id, user_id)
        if template is None:
            raise NotFoundOrForbidden("Template not found")
        return template

    def categories(self, user_id: int) -> list[str]:
        return self.repo.categories(user_id)

    def create(
        self, user_id: int, *, name: str, description: str = "", category: str = "", is_public: bool = False
    ) -> WorkoutTemplate:
        name = self._unique_name(user_id, name)
        with transaction(self.db):
            template = self.repo.create(
                user_id=user_id,
                name=name,
                description=(description or "").strip(),
                category=(category or "").strip(),
                is_public=is_public,
            )
        return template

    def update(self, template_id: int, user_id: int, changes: dict) -> WorkoutTemplate:
        template = owned_template(self.db, template_id, user_id)
        if "name" in changes:
            template.name = self._unique_name(user_id, changes["name"], exclude_id=template.id)
        if "description" in changes:
            template.description = (changes["description"] or "").strip()
        if "category" in changes:
            template.category = (changes["category"] or "").strip()
        if changes.get("is_public") is not None:
            template.is_public = changes["is_public"]
        with transaction(self.db):
            self.db.flush()
        return template

    def delete(self, template_id: int, user_id: int) -> None:
        template = owned_template(self.db, template_id, user_id)
        with transaction(self.db):
            now = utcnow()
            for entry in self.repo.entries(template.id):
                entry.soft_delete(now)
            template.soft_delete(now)

    def duplicate(self, template_id: int, user_id: int, *, name: str | None = None) -> WorkoutTemplate:
        source = self.get(template_id, user_id)
        new_name = (name or "").strip() or derived.copy_name(source.name)
        new_name = self._unique_name(user_id, new_name)
        entries = self.repo.entries(source.id)
        with transaction(self.db):
            copy = self.repo.create(
                user_id=user_id,
                name=new_name,
                description=source.description,
                category=source.category,
                is_public=False,
            )
            for entry in entries:
                self.repo.add_entry(
                    template_id=copy.id,
                    exercise_id=entry.exercise_id,
                    order_index=entry.order_index,
                    target_sets=entry.target_sets,
                    target_reps=entry.target_reps,
                    target_weight=entry.target_weight,
                    rest_seconds=entry.rest_seconds,
                )
        log.info("template %s duplicated as %s for user %s", source.id, copy.id, user_id)
        return self.get(copy.id, user_id)

    # Template exercises, keyed by (template_id, exercise_id)

    def add_exercise(
        self,
        template_id: int,
        user_id: int,
        *,
        exercise_id: int,
        order_index: int = 0,
        target_sets: int = 0,
        target_reps: str = "",
        target_weight: float | None = None,
        rest_seconds: int = 0,
    ) -> TemplateExercise:
        template = owned_template(self.db, template_id, user_id)
        if self.exercises.get_visible(exercise_id, user_id) is None:
            raise NotFoundOrForbidden("Exercise not found")
        if self.repo.get_entry(template.id, exercise_id) is not None:
            raise ConflictError("exercise is already in this template")
        with transaction(self.db):
            entry = self.repo.add_entry(
                template_id=template.id,
                exercise_id=exercise_id,
                order_index=derived.resolve_order_index(order_index, self.repo.max_order_index(template.id)),
                target_sets=target_sets,
                target_reps=(target_reps or "").strip(),
                target_weight=target_weight,
                rest_seconds=rest_seconds,
            )
        return entry

    def update_exercise(self, template_id: int, user_id: int, exercise_id: int, changes: dict) -> TemplateExercise:
        template = owned_template(self.db, template_id, user_id)
        entry = self._entry(template.id, exercise_id)
        for key in TARGET_FIELDS:
            if key not in changes:
                continue
            value = changes[key]
            if key == "target_reps":
                value = (value or "").strip()
            elif value is None and key != "target_weight":
                raise ValidationError(f"{key} cannot be null")
            setattr(entry, key, value)
        with transaction(self.db):
            self.db.flush()
        return entry

    def remove_exercise(self, template_id: int, user_id: int, exercise_id: int) -> None:
        template = owned_template(self.db, template_id, user_id)
        entry = self._entry(template.id, exercise_id)
        with transaction(self.db):
            entry.soft_delete()

    # helpers

    def _entry(self, template_id: int, exercise_id: int) -> TemplateExercise:
        entry = self.repo.get_entry(template_id, exercise_id)
        if entry is None:
            raise NotFoundOrForbidden("Template exercise not found")
        return entry

    def _unique_name(self, user_id: int, name: str | None, *, exclude_id: int | None = None) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("template name is required")
        if self.repo.name_taken(user_id, name, exclude_id=exclude_id):
            raise ConflictError(f"template with name '{name}' already exists")
        return name
