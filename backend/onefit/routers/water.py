from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from onefit.db import get_db
from onefit.models import User
from onefit.schemas.common import Message
from onefit.schemas.water import WaterCreate, WaterRead, WaterList
from onefit.services.water_service import WaterService
from onefit.deps.auth import get_current_user

router = APIRouter(prefix="/water", tags=["water"])

@router.post("", response_model=WaterRead, status_code=status.HTTP_201_CREATED)
def log_water(payload: WaterCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return WaterService(db).log(current.id, amount=payload.amount, logged_at=payload.logged_at)

@router.get("", response_model=WaterList)
def list_water(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    day: Optional[date] = Query(None, alias="date"),
):
    logs = WaterService(db).list(current.id, day=day)
    return {"logs": logs, "count": len(logs), "total_amount": sum(entry.amount for entry in logs)}

@router.delete("/latest", response_model=Message)
def delete_latest_water(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    WaterService(db).delete_latest(current.id)
    return {"message": "Latest water log deleted"}

@router.delete("/{log_id}", response_model=Message)
def delete_water(log_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    WaterService(db).delete(log_id, current.id)
    return {"message": "Water log deleted"}
