from onefit.models.user import User
from onefit.models.exercise import Exercise
from onefit.models.template import WorkoutTemplate, TemplateExercise
from onefit.models.exercise_set import ExerciseSet
from onefit.models.workout import WorkoutSession, SessionExercise
from onefit.models.fasting import FastType, FastSession, FastingStatus
from onefit.models.water import WaterLog

__all__ = [
    "User",
    "Exercise",
    "WorkoutTemplate",
    "TemplateExercise",
    "WorkoutSession",
    "SessionExercise",
    "ExerciseSet",
    "FastType",
    "FastSession",
    "FastingStatus",
    "WaterLog",
]
