from typing import Annotated
from pydantic import BaseModel, Field, StringConstraints
from onefit.schemas.common import UtcDateTime
from onefit.schemas.exercise import ExerciseRead

TemplateName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
Category = Annotated[str, StringConstraints(strip_whitespace=True, max_length=60)]
NonNegInt = Annotated[int, Field(ge=0)]
TargetReps = Annotated[str, Field(max_length=40)]  # "8-12", "AMRAP", "60 sec"
Weight = Annotated[float, Field(ge=0, le=10000, allow_inf_nan=False)]

class TemplateCreate(BaseModel):
    name: TemplateName
    description: str = ""
    category: Category = ""
    is_public: bool = False

class TemplateUpdate(BaseModel):
    name: TemplateName | None = None
    description: str | None = None
    category: Category | None = None
    is_public: bool | None = None

class TemplateDuplicate(BaseModel):
    name: Annotated[str, Field(max_length=120)] | None = None

class TemplateExerciseCreate(BaseModel):
    exercise_id: int
    # 0 appends after the last entry
    order_index: NonNegInt = 0
    target_sets: NonNegInt = 0
    target_reps: TargetReps = ""
    target_weight: Weight | None = None
    rest_seconds: NonNegInt = 0

class TemplateExerciseUpdate(BaseModel):
    order_index: NonNegInt | None = None
    target_sets: NonNegInt | None = None
    target_reps: TargetReps | None = None
    target_weight: Weight | None = None
    rest_seconds: NonNegInt | None = None

class TemplateExerciseRead(BaseModel):
    id: int
    template_id: int
    exercise_id: int
    order_index: int
    target_sets: int
    target_reps: str
    target_weight: float | None = None
    rest_seconds: int
    exercise: ExerciseRead
    model_config = {"from_attributes": True}

class TemplateRead(BaseModel):
    id: int
    user_id: int
    name: str
    description: str
    category: str
    is_public: bool
    created_at: UtcDateTime
    updated_at: UtcDateTime
    exercises: list[TemplateExerciseRead] = []
    model_config = {"from_attributes": True}

class TemplateList(BaseModel):
    templates: list[TemplateRead]
    count: int

class CategoryList(BaseModel):
    categories: list[str]
    count: int
