"""Built-in catalog rows created at startup."""
import logging

from sqlalchemy.orm import Session

from onefit.db import transaction
from onefit.repositories.exercise_repo import ExerciseRepository
from onefit.repositories.fasting_repo import FastingRepository

log = logging.getLogger(__name__)

DEFAULT_EXERCISES = [
    {
        "name": "Push-ups",
        "muscle_groups": "chest,shoulders,triceps",
        "equipment": "bodyweight",
        "instructions": "Start in plank position, lower body until chest nearly touches floor, push back up.",
    },
    {
        "name": "Squats",
        "muscle_groups": "legs,glutes",
        "equipment": "bodyweight",
        "instructions": "Stand with feet shoulder-width apart, lower hips until thighs parallel to floor, stand back up.",
    },
    {
        "name": "Pull-ups",
        "muscle_groups": "back,biceps",
        "equipment": "pull-up bar",
        "instructions": "Hang from bar with palms facing away, pull body up until chin over bar, lower with control.",
    },
    {
        "name": "Plank",
        "muscle_groups": "core,shoulders",
        "equipment": "bodyweight",
        "instructions": "Hold push-up position with forearms on ground, keep body straight from head to heels.",
    },
    {
        "name": "Deadlift",
        "muscle_groups": "back,legs,glutes",
        "equipment": "barbell",
        "instructions": "Stand with feet hip-width apart, bend at hips and knees to lift barbell from floor to standing.",
    },
]

DEFAULT_FAST_TYPES = [
    ("16:8 Intermittent Fast", "16 hours of fasting followed by 8-hour eating window", 16),
    ("18:6 Intermittent Fast", "18 hours of fasting followed by 6-hour eating window", 18),
    ("20:4 Intermittent Fast", "20 hours of fasting followed by 4-hour eating window", 20),
    ("24-Hour Fast", "Full day fast from dinner to dinner", 24),
]


def seed_default_exercises(db: Session) -> int:
    repo = ExerciseRepository(db)
    if repo.count_builtin():
        return 0
    with transaction(db):
        for fields in DEFAULT_EXERCISES:
            repo.create(is_custom=False, created_by_user_id=None, **fields)
    log.info("seeded %d built-in exercises", len(DEFAULT_EXERCISES))
    return len(DEFAULT_EXERCISES)


def seed_default_fast_types(db: Session) -> int:
    repo = FastingRepository(db)
    created = 0
    with transaction(db):
        for name, description, hours in DEFAULT_FAST_TYPES:
            if repo.builtin_by_name(name) is None:
                repo.add_type(name=name, description=description, target_hours=hours, is_custom=False)
                created += 1
    if created:
        log.info("seeded %d fast types", created)
    return created


def seed_defaults(db: Session) -> None:
    seed_default_exercises(db)
    seed_default_fast_types(db)
