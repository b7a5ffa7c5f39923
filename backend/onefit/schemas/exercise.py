from typing import Annotated
from pydantic import BaseModel, Field, StringConstraints
from onefit.schemas.common import UtcDateTime

ExerciseName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]

class ExerciseCreate(BaseModel):
    name: ExerciseName
    muscle_groups: Annotated[str, Field(max_length=255)] = ""
    equipment: Annotated[str, Field(max_length=120)] = ""
    instructions: str = ""

class ExerciseUpdate(BaseModel):
    name: ExerciseName | None = None
    muscle_groups: Annotated[str, Field(max_length=255)] | None = None
    equipment: Annotated[str, Field(max_length=120)] | None = None
    instructions: str | None = None

class ExerciseRead(BaseModel):
    id: int
    name: str
    muscle_groups: str
    equipment: str
    instructions: str
    is_custom: bool
    created_by_user_id: int | None = None
    created_at: UtcDateTime
    model_config = {"from_attributes": True}

class ExerciseList(BaseModel):
    exercises: list[ExerciseRead]
    count: int

class MuscleGroupList(BaseModel):
    muscle_groups: list[str]
    count: int

class EquipmentList(BaseModel):
    equipment: list[str]
    count: int
