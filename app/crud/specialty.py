from typing import List
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.models.specialty import Specialty

DEFAULT_SPECIALTIES = [
    ("Grant", 1),
    ("Housing", 2),
    ("Case Management", 3),
    ("Food", 4),
    ("Spiritual", 5),
]

def list_specialties(db: Session) -> List[Specialty]:
    return list(db.scalars(select(Specialty).order_by(Specialty.code, Specialty.id)).all())

def ensure_default_specialties(db: Session) -> int:
    """Cria as especialidades padrão que faltarem (por código ou nome)."""
    created = 0
    for name, code in DEFAULT_SPECIALTIES:
        exists = db.scalar(select(Specialty).where((Specialty.code == code) | (Specialty.name == name)))
        if not exists:
            db.add(Specialty(name=name, code=code)); db.flush()
            created += 1
    db.commit()
    return created
