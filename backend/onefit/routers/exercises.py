from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from onefit.db import get_db
from onefit.models import User
from onefit.schemas.common import Message
from onefit.schemas.exercise import (
    ExerciseCreate, ExerciseUpdate, ExerciseRead, ExerciseList, MuscleGroupList, EquipmentList,
)
from onefit.services.exercise_service import ExerciseCatalog
from onefit.deps.auth import get_current_user, get_optional_user

router = APIRouter(prefix="/exercises", tags=["exercises"])

def _uid(user: Optional[User]) -> Optional[int]:
    return user.id if user else None

@router.get("", response_model=ExerciseList)
def list_exercises(
    db: Session = Depends(get_db),
    current: Optional[User] = Depends(get_optional_user),
    muscle_group: Optional[str] = Query(None, max_length=60),
    equipment: Optional[str] = Query(None, max_length=120),
    search: Optional[str] = Query(None, max_length=120),
    include_custom: bool = True,
):
    exercises = ExerciseCatalog(db).list(
        _uid(current), muscle_group=muscle_group, equipment=equipment, search=search, include_custom=include_custom
    )
    return {"exercises": exercises, "count": len(exercises)}

# Static paths before /{exercise_id}
@router.get("/muscle-groups", response_model=MuscleGroupList)
def list_muscle_groups(db: Session = Depends(get_db), current: Optional[User] = Depends(get_optional_user)):
    groups = ExerciseCatalog(db).muscle_groups(_uid(current))
    return {"muscle_groups": groups, "count": len(groups)}

@router.get("/equipment", response_model=EquipmentList)
def list_equipment(db: Session = Depends(get_db), current: Optional[User] = Depends(get_optional_user)):
    equipment = ExerciseCatalog(db).equipment_types(_uid(current))
    return {"equipment": equipment, "count": len(equipment)}

@router.get("/{exercise_id}", response_model=ExerciseRead)
def get_exercise(exercise_id: int, db: Session = Depends(get_db), current: Optional[User] = Depends(get_optional_user)):
    return ExerciseCatalog(db).get(exercise_id, _uid(current))

@router.post("", response_model=ExerciseRead, status_code=status.HTTP_201_CREATED)
def create_exercise(payload: ExerciseCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return ExerciseCatalog(db).create_custom(current.id, **payload.model_dump())

@router.put("/{exercise_id}", response_model=ExerciseRead)
def update_exercise(
    exercise_id: int,
    payload: ExerciseUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return ExerciseCatalog(db).update_custom(exercise_id, current.id, payload.model_dump(exclude_unset=True))

@router.delete("/{exercise_id}", response_model=Message)
def delete_exercise(exercise_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    ExerciseCatalog(db).delete_custom(exercise_id, current.id)
    return {"message": "Exercise deleted successfully"}
