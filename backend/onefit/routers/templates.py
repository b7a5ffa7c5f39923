from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from onefit.db import get_db
from onefit.models import User
from onefit.schemas.common import Message
from onefit.schemas.template import (
    TemplateCreate, TemplateUpdate, TemplateRead, TemplateList, TemplateDuplicate,
    TemplateExerciseCreate, TemplateExerciseUpdate, TemplateExerciseRead, CategoryList,
)
from onefit.services.template_service import TemplateService
from onefit.deps.auth import get_current_user

router = APIRouter(prefix="/templates", tags=["templates"])

@router.get("", response_model=TemplateList)
def list_templates(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    category: Optional[str] = Query(None, max_length=60),
    include_public: bool = False,
):
    templates = TemplateService(db).list(current.id, category=category, include_public=include_public)
    return {"templates": templates, "count": len(templates)}

@router.get("/categories", response_model=CategoryList)
def list_categories(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    categories = TemplateService(db).categories(current.id)
    return {"categories": categories, "count": len(categories)}

@router.post("", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
def create_template(payload: TemplateCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return TemplateService(db).create(current.id, **payload.model_dump())

@router.get("/{template_id}", response_model=TemplateRead)
def get_template(template_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return TemplateService(db).get(template_id, current.id)

@router.put("/{template_id}", response_model=TemplateRead)
def update_template(
    template_id: int,
    payload: TemplateUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return TemplateService(db).update(template_id, current.id, payload.model_dump(exclude_unset=True))

@router.delete("/{template_id}", response_model=Message)
def delete_template(template_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    TemplateService(db).delete(template_id, current.id)
    return {"message": "Template deleted successfully"}

@router.post("/{template_id}/duplicate", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
def duplicate_template(
    template_id: int,
    payload: Optional[TemplateDuplicate] = None,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return TemplateService(db).duplicate(template_id, current.id, name=payload.name if payload else None)

# Template exercises are addressed by the exercise id they reference
@router.post("/{template_id}/exercises", response_model=TemplateExerciseRead, status_code=status.HTTP_201_CREATED)
def add_template_exercise(
    template_id: int,
    payload: TemplateExerciseCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return TemplateService(db).add_exercise(template_id, current.id, **payload.model_dump())

@router.put("/{template_id}/exercises/{exercise_id}", response_model=TemplateExerciseRead)
def update_template_exercise(
    template_id: int,
    exercise_id: int,
    payload: TemplateExerciseUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return TemplateService(db).update_exercise(
        template_id, current.id, exercise_id, payload.model_dump(exclude_unset=True)
    )

@router.delete("/{template_id}/exercises/{exercise_id}", response_model=Message)
def remove_template_exercise(
    template_id: int,
    exercise_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    TemplateService(db).remove_exercise(template_id, current.id, exercise_id)
    return {"message": "Exercise removed from template"}
