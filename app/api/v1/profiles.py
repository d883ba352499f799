# app/api/v1/profiles.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.core.config import settings
from app.crud.profile import profile_crud
from app.crud.user import user_crud
from app.models.profile import Profile as ProfileModel
from app.models.user import User
from app.schemas.profile import Profile, ProfileCreate, ProfileOrg, ProfileUpdate

router = APIRouter()

def _to_schema(p: ProfileModel, owner: User) -> Profile:
    org = p.organization
    return Profile(
        user_id=owner.user_id,
        first_name=p.first_name,
        last_name=p.last_name,
        title=p.title,
        email=p.email,
        phone=p.phone,
        is_available=p.is_available,
        profile_image_url=p.profile_image_url or settings.DEFAULT_PROFILE_IMAGE_URL,
        org=ProfileOrg(org_id=org.org_id, name=org.name) if org else None,
        created_at=p.created_at,
        updated_at=p.updated_at,
    )

def _owned_profile(db: Session, user_id: str, current: User) -> ProfileModel:
    if current.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Cannot modify another user profile")
    p = profile_crud.get_by_owner(db, current.id)
    if not p:
        raise HTTPException(status_code=404, detail="Profile not found")
    return p

@router.get("/{user_id}", response_model=Profile)
def get_profile(user_id: str, db: Session = Depends(get_db)):
    owner = user_crud.get_by_public_id(db, user_id)
    p = profile_crud.get_by_owner(db, owner.id) if owner else None
    if not p:
        raise HTTPException(status_code=404, detail="Profile not found")
    return _to_schema(p, owner)

@router.post("/", response_model=Profile, status_code=status.HTTP_201_CREATED)
def create_profile(
    body: ProfileCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    if profile_crud.get_by_owner(db, current.id):
        raise HTTPException(status_code=409, detail="Profile already exists for this user")
    p = profile_crud.create_for_owner(db, current.id, body)
    return _to_schema(p, current)

@router.patch("/{user_id}", response_model=Profile)
def update_profile(
    user_id: str,
    body: ProfileUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    p = _owned_profile(db, user_id, current)
    p = profile_crud.update_fields(db, p, body)
    return _to_schema(p, current)

@router.delete("/{user_id}")
def delete_profile(
    user_id: str,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    p = _owned_profile(db, user_id, current)
    profile_crud.remove(db, p)
    return {"deleted": True}
