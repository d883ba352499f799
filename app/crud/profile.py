from typing import Any, Dict, Optional
from fastapi import HTTPException
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.crud.organization import organization_crud
from app.models.profile import Profile
from app.schemas.profile import ProfileCreate, ProfileUpdate

class CRUDProfile(CRUDBase[Profile, ProfileCreate, ProfileUpdate]):
    def get_by_owner(self, db: Session, owner_id: int) -> Optional[Profile]:
        return self.get_by(db, owner_id=owner_id)

    def _resolve_org(self, db: Session, data: Dict[str, Any]) -> None:
        # org_id público -> FK interna
        if "org_id" not in data:
            return
        public = data.pop("org_id")
        if public is None:
            data["organization_id"] = None
            return
        org = organization_crud.get_by_public_id(db, public)
        if not org:
            raise HTTPException(status_code=400, detail="Organization not found")
        data["organization_id"] = org.id

    def create_for_owner(self, db: Session, owner_id: int, obj_in: ProfileCreate) -> Profile:
        data = obj_in.model_dump()
        self._resolve_org(db, data)
        data["owner_id"] = owner_id
        obj = Profile(**data)
        db.add(obj); db.commit(); db.refresh(obj)
        return obj

    def update_fields(self, db: Session, db_obj: Profile, obj_in: ProfileUpdate) -> Profile:
        data = obj_in.model_dump(exclude_unset=True)
        self._resolve_org(db, data)
        return self.update(db, db_obj, data)

profile_crud = CRUDProfile(Profile)
