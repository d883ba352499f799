from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.core.config import settings
from app.crud.organization import organization_crud
from app.models.organization import Organization as OrganizationModel
from app.models.user import User
from app.schemas.organization import Organization, OrganizationCreate, OrganizationUpdate
from app.schemas.specialty import Specialty

router = APIRouter()

def _to_out(o: OrganizationModel) -> Organization:
    return Organization(
        org_id=o.org_id,
        owner_user_id=o.owner_user_id,
        name=o.name,
        org_image_url=o.org_image_url or settings.DEFAULT_ORG_IMAGE_URL,
        phone=o.phone,
        address=o.address,
        city=o.city,
        state=o.state,
        zipcode=o.zipcode,
        is_open=o.is_open,
        donations_needed=o.donations_needed,
        donations_acquired=o.donations_acquired,
        specialties=[Specialty.model_validate(s) for s in o.specialties],
        created_at=o.created_at,
        updated_at=o.updated_at,
    )

def _owned_org(db: Session, org_id: str, current: User) -> OrganizationModel:
    o = organization_crud.get_by_public_id(db, org_id)
    if not o:
        raise HTTPException(status_code=404, detail="Org not found")
    if o.owner_id != current.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Cannot modify org you do not own")
    return o

@router.get("/", response_model=List[Organization])
def list_orgs(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return [_to_out(o) for o in organization_crud.get_multi(db, skip=skip, limit=limit)]

@router.get("/{org_id}", response_model=Organization)
def get_org(org_id: str, db: Session = Depends(get_db)):
    o = organization_crud.get_by_public_id(db, org_id)
    if not o:
        raise HTTPException(status_code=404, detail="Org not found")
    return _to_out(o)

@router.post("/", response_model=Organization, status_code=status.HTTP_201_CREATED)
def create_org(
    body: OrganizationCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    o = organization_crud.create_for_owner(db, current, body)
    return _to_out(o)

@router.patch("/{org_id}", response_model=Organization)
def update_org(
    org_id: str,
    body: OrganizationUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    o = _owned_org(db, org_id, current)
    o = organization_crud.update_fields(db, o, body)
    return _to_out(o)

@router.delete("/{org_id}")
def delete_org(
    org_id: str,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    o = _owned_org(db, org_id, current)
    organization_crud.remove_with_links(db, o)
    return {"deleted": True}
