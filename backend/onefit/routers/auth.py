from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from onefit.db import get_db, transaction
from onefit.models import User
from onefit.schemas.user import ProfileRead, ProfileUpdate, SettingsUpdate
from onefit.deps.auth import get_current_user
from onefit.repositories.user_repo import UserRepository, PROFILE_FIELDS, SETTINGS_FIELDS

router = APIRouter(prefix="/auth", tags=["auth"])

@router.get("/me", response_model=ProfileRead)
def me(current_user: User = Depends(get_current_user)):
    return current_user

@router.put("/me", response_model=ProfileRead)
def update_me(payload: ProfileUpdate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    with transaction(db):
        user = UserRepository(db).apply(current, payload.model_dump(exclude_unset=True), fields=PROFILE_FIELDS)
    return user

@router.patch("/me/settings", response_model=ProfileRead)
def update_settings(payload: SettingsUpdate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    with transaction(db):
        user = UserRepository(db).apply(current, payload.model_dump(exclude_unset=True), fields=SETTINGS_FIELDS)
    return user
