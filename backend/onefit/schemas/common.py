from typing import Annotated
from datetime import datetime
from pydantic import AfterValidator, BaseModel, Field
from onefit.clock import as_utc

# SQLite hands datetimes back naive; everything stored is UTC
UtcDateTime = Annotated[datetime, AfterValidator(as_utc)]

# Client clocks send epoch milliseconds; upper bound is the end of year 9999
EpochMs = Annotated[int, Field(gt=0, le=253402300799999)]

class Message(BaseModel):
    message: str
