from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from onefit.db import get_db
from onefit.models import User
from onefit.schemas.common import Message
from onefit.schemas.workout import (
    WorkoutStart, WorkoutUpdate, WorkoutRead, WorkoutPage, ActiveWorkout, WorkoutStatsRead,
    SessionExerciseCreate, SessionExerciseUpdate, SessionExerciseRead, SetCreate, SetUpdate, SetRead,
)
from onefit.services.workout_service import WorkoutService
from onefit.deps.auth import get_current_user

router = APIRouter(prefix="/workouts", tags=["workouts"])

@router.get("", response_model=WorkoutPage)
def list_workouts(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
):
    page = WorkoutService(db).history(
        current.id, limit=limit, offset=offset, start_date=start_date, end_date=end_date
    )
    return {
        "workouts": page.items,
        "count": len(page.items),
        "total": page.total,
        "limit": page.limit,
        "offset": page.offset,
    }

@router.post("", response_model=WorkoutRead, status_code=status.HTTP_201_CREATED)
def start_workout(payload: WorkoutStart, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return WorkoutService(db).start(current.id, **payload.model_dump())

# Static paths before /{workout_id}
@router.get("/active", response_model=ActiveWorkout)
def active_workout(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return {"workout": WorkoutService(db).get_active(current.id)}

@router.get("/stats", response_model=WorkoutStatsRead)
def workout_stats(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    days: int = Query(30, ge=1, le=365),
):
    return WorkoutService(db).stats(current.id, days=days)

@router.get("/{workout_id}", response_model=WorkoutRead)
def get_workout(workout_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return WorkoutService(db).get(workout_id, current.id)

@router.put("/{workout_id}", response_model=WorkoutRead)
def update_workout(
    workout_id: int,
    payload: WorkoutUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return WorkoutService(db).update(workout_id, current.id, payload.model_dump(exclude_unset=True))

@router.delete("/{workout_id}", response_model=Message)
def delete_workout(workout_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    WorkoutService(db).delete(workout_id, current.id)
    return {"message": "Workout deleted successfully"}

# Session exercises
@router.post("/{workout_id}/exercises", response_model=SessionExerciseRead, status_code=status.HTTP_201_CREATED)
def add_workout_exercise(
    workout_id: int,
    payload: SessionExerciseCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return WorkoutService(db).add_exercise(workout_id, current.id, **payload.model_dump())

@router.put("/{workout_id}/exercises/{session_exercise_id}", response_model=SessionExerciseRead)
def update_workout_exercise(
    workout_id: int,
    session_exercise_id: int,
    payload: SessionExerciseUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return WorkoutService(db).update_exercise(
        workout_id, current.id, session_exercise_id, payload.model_dump(exclude_unset=True)
    )

@router.delete("/{workout_id}/exercises/{session_exercise_id}", response_model=Message)
def remove_workout_exercise(
    workout_id: int,
    session_exercise_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    WorkoutService(db).remove_exercise(workout_id, current.id, session_exercise_id)
    return {"message": "Exercise removed from workout"}

# Sets
@router.post(
    "/{workout_id}/exercises/{session_exercise_id}/sets",
    response_model=SetRead,
    status_code=status.HTTP_201_CREATED,
)
def log_set(
    workout_id: int,
    session_exercise_id: int,
    payload: SetCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return WorkoutService(db).log_set(workout_id, current.id, session_exercise_id, payload.model_dump())

@router.put("/{workout_id}/sets/{set_id}", response_model=SetRead)
def update_set(
    workout_id: int,
    set_id: int,
    payload: SetUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return WorkoutService(db).update_set(workout_id, current.id, set_id, payload.model_dump(exclude_unset=True))

@router.delete("/{workout_id}/sets/{set_id}", response_model=Message)
def delete_set(
    workout_id: int,
    set_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    WorkoutService(db).delete_set(workout_id, current.id, set_id)
    return {"message": "Set deleted successfully"}
