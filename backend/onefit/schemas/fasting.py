from pydantic import BaseModel
from onefit.models.fasting import FastingStatus
from onefit.schemas.common import EpochMs, UtcDateTime

class FastTypeRead(BaseModel):
    id: int
    name: str
    description: str
    target_hours: int
    is_custom: bool
    model_config = {"from_attributes": True}

class FastTypeList(BaseModel):
    fast_types: list[FastTypeRead]
    count: int

class FastStart(BaseModel):
    fast_type_id: int
    notes: str | None = None

class FastEnd(BaseModel):
    cancel: bool = False
    notes: str | None = None

class FastCompleted(BaseModel):
    start_time: EpochMs
    end_time: EpochMs
    actual_duration_seconds: int
    goal_duration_seconds: int
    notes: str | None = None

class FastRead(BaseModel):
    id: int
    user_id: int
    fast_type_id: int | None = None
    start_time: UtcDateTime
    end_time: UtcDateTime | None = None
    target_minutes: int
    duration_minutes: int | None = None
    type: str
    status: FastingStatus
    notes: str | None = None
    model_config = {"from_attributes": True}

class FastList(BaseModel):
    fasts: list[FastRead]
    count: int

class CurrentFast(BaseModel):
    fast: FastRead | None = None
