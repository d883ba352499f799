from typing import List, Optional
from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.core.public_id import allocate_public_id
from app.models.organization import Organization
from app.models.specialty import Specialty
from app.models.user import User
from app.schemas.organization import OrganizationCreate, OrganizationUpdate

class CRUDOrganization(CRUDBase[Organization, OrganizationCreate, OrganizationUpdate]):
    def get_by_public_id(self, db: Session, org_id: str) -> Optional[Organization]:
        return self.get_by(db, org_id=org_id)

    def _specialties(self, db: Session, ids: List[int]) -> List[Specialty]:
        """Garante que todas as especialidades existam."""
        wanted = set(ids or [])
        if not wanted:
            return []
        rows = list(db.scalars(select(Specialty).where(Specialty.id.in_(wanted))).all())
        if len(rows) != len(wanted):
            raise HTTPException(status_code=400, detail="One or more specialties not found")
        return rows

    def create_for_owner(self, db: Session, owner: User, obj_in: OrganizationCreate) -> Organization:
        data = obj_in.model_dump()
        specialties = self._specialties(db, data.pop("specialties", []))
        org = Organization(**data, owner_id=owner.id, owner_user_id=owner.user_id)
        org.specialties = specialties
        org = allocate_public_id(db, org, "org_id")

        # vincula a org ao dono se ele ainda não tiver uma
        if not owner.org_id:
            owner.org_id = org.org_id
            db.add(owner); db.commit(); db.refresh(org)
        return org

    def update_fields(self, db: Session, db_obj: Organization, obj_in: OrganizationUpdate) -> Organization:
        data = obj_in.model_dump(exclude_unset=True)
        if "specialties" in data:
            db_obj.specialties = self._specialties(db, data.pop("specialties") or [])
        return self.update(db, db_obj, data)

    def remove_with_links(self, db: Session, db_obj: Organization) -> None:
        # desfaz o vínculo users.org_id; o dono passa para outra org sua, se houver
        fallback = db.scalars(
            select(Organization)
            .where(Organization.owner_id == db_obj.owner_id, Organization.id != db_obj.id)
            .order_by(Organization.id)
            .limit(1)
        ).first()
        for u in db.scalars(select(User).where(User.org_id == db_obj.org_id)).all():
            u.org_id = fallback.org_id if fallback is not None and u.id == db_obj.owner_id else None
            db.add(u)
        self.remove(db, db_obj)

organization_crud = CRUDOrganization(Organization)
