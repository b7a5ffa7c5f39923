from typing import Annotated
from pydantic import BaseModel, Field, StringConstraints
from onefit.schemas.common import UtcDateTime
from onefit.schemas.exercise import ExerciseRead

WorkoutName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
NonNegInt = Annotated[int, Field(ge=0)]
NonNegFloat = Annotated[float, Field(ge=0, allow_inf_nan=False)]
Rpe = Annotated[int, Field(ge=1, le=10)]

class WorkoutStart(BaseModel):
    name: WorkoutName
    template_id: int | None = None
    notes: str | None = None

class WorkoutUpdate(BaseModel):
    name: WorkoutName | None = None
    notes: str | None = None
    # Either of these finishes the workout
    ended_at: UtcDateTime | None = None
    is_active: bool | None = None

class SessionExerciseCreate(BaseModel):
    exercise_id: int
    order_index: NonNegInt = 0
    notes: str | None = None

class SessionExerciseUpdate(BaseModel):
    order_index: NonNegInt | None = None
    notes: str | None = None
    completed_at: UtcDateTime | None = None

class SetCreate(BaseModel):
    reps: NonNegInt | None = None
    weight: NonNegFloat | None = None
    duration_seconds: NonNegInt | None = None
    distance_meters: NonNegFloat | None = None
    rpe: Rpe | None = None

class SetUpdate(SetCreate):
    pass

class SetRead(BaseModel):
    id: int
    session_exercise_id: int
    set_number: int
    reps: int | None = None
    weight: float | None = None
    duration_seconds: int | None = None
    distance_meters: float | None = None
    rpe: int | None = None
    completed_at: UtcDateTime
    model_config = {"from_attributes": True}

class SessionExerciseRead(BaseModel):
    id: int
    session_id: int
    exercise_id: int
    order_index: int
    notes: str | None = None
    completed_at: UtcDateTime | None = None
    exercise: ExerciseRead
    sets: list[SetRead] = []
    model_config = {"from_attributes": True}

class WorkoutRead(BaseModel):
    id: int
    user_id: int
    template_id: int | None = None
    name: str
    started_at: UtcDateTime
    ended_at: UtcDateTime | None = None
    duration_minutes: int | None = None
    notes: str | None = None
    is_active: bool
    exercises: list[SessionExerciseRead] = []
    model_config = {"from_attributes": True}

class WorkoutPage(BaseModel):
    workouts: list[WorkoutRead]
    count: int
    total: int
    limit: int
    offset: int

class ActiveWorkout(BaseModel):
    workout: WorkoutRead | None = None

class WorkoutStatsRead(BaseModel):
    total_workouts: int
    total_minutes: int
    total_sets: int
    average_duration_minutes: float
    period_days: int
    model_config = {"from_attributes": True}
