from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from onefit.db import get_db
from onefit.models import User
from onefit.schemas.fasting import (
    FastTypeList, FastStart, FastEnd, FastCompleted, FastRead, FastList, CurrentFast,
)
from onefit.services.fasting_service import FastingService
from onefit.deps.auth import get_current_user

router = APIRouter(prefix="/fasts", tags=["fasting"])

@router.get("/types", response_model=FastTypeList)
def list_fast_types(db: Session = Depends(get_db)):
    types = FastingService(db).list_types()
    return {"fast_types": types, "count": len(types)}

@router.get("", response_model=FastList)
def fast_history(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    fasts = FastingService(db).history(current.id)
    return {"fasts": fasts, "count": len(fasts)}

@router.post("", response_model=FastRead, status_code=status.HTTP_201_CREATED)
def start_fast(payload: FastStart, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return FastingService(db).start(current.id, fast_type_id=payload.fast_type_id, notes=payload.notes)

@router.get("/current", response_model=CurrentFast)
def current_fast(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return {"fast": FastingService(db).current(current.id)}

@router.put("/{fast_id}/end", response_model=FastRead)
def end_fast(
    fast_id: int,
    payload: Optional[FastEnd] = None,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    payload = payload or FastEnd()
    return FastingService(db).end(fast_id, current.id, cancel=payload.cancel, notes=payload.notes)

@router.post("/completed", response_model=FastRead, status_code=status.HTTP_201_CREATED)
def save_completed_fast(
    payload: FastCompleted, db: Session = Depends(get_db), current: User = Depends(get_current_user)
):
    return FastingService(db).save_completed(current.id, **payload.model_dump())
