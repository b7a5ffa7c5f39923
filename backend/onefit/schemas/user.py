from typing import Annotated
from pydantic import BaseModel, Field, StringConstraints
from onefit.schemas.common import UtcDateTime

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
# cm / kg
BodyMetric = Annotated[float, Field(gt=0, le=1000)]

class ProfileRead(BaseModel):
    id: int
    email: str | None = None
    name: str
    height: float | None = None
    weight: float | None = None
    goals: str | None = None
    settings: str | None = None
    created_at: UtcDateTime
    model_config = {"from_attributes": True}

class ProfileUpdate(BaseModel):
    # Only the fields sent are applied
    name: NameStr | None = None
    height: BodyMetric | None = None
    weight: BodyMetric | None = None

class SettingsUpdate(BaseModel):
    goals: str | None = None
    settings: str | None = None
