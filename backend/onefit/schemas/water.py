from typing import Annotated
from pydantic import BaseModel, Field
from onefit.schemas.common import EpochMs, UtcDateTime

class WaterCreate(BaseModel):
    amount: Annotated[float, Field(gt=0, allow_inf_nan=False)]  # mL
    logged_at: EpochMs | None = None  # defaults to now

class WaterRead(BaseModel):
    id: int
    user_id: int
    amount: float
    logged_at: UtcDateTime
    created_at: UtcDateTime
    model_config = {"from_attributes": True}

class WaterList(BaseModel):
    logs: list[WaterRead]
    count: int
    total_amount: float
