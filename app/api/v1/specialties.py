from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.api.deps import get_db
from app.crud.specialty import list_specialties
from app.schemas.specialty import Specialty

router = APIRouter()

@router.get("/", response_model=List[Specialty])
def get_specialties(db: Session = Depends(get_db)):
    return [Specialty.model_validate(s) for s in list_specialties(db)]
