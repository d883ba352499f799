from typing import Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.core.public_id import allocate_public_id
from app.models.user import User
from app.schemas.user import RegisterIn, UserBase


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class CRUDUser(CRUDBase[User, RegisterIn, UserBase]):
    def create_with_public_id(self, db: Session, *, email: str, hashed_password: str) -> User:
        """Cria a conta já com user_id público; nada é gravado sem ele."""
        user = User(email=normalize_email(email), hashed_password=hashed_password)
        return allocate_public_id(db, user, "user_id")

    def ensure_public_id(self, db: Session, user: User) -> User:
        # contas legadas (anteriores ao user_id) recebem um no primeiro login
        if user.user_id:
            return user
        return allocate_public_id(db, user, "user_id")

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return self.get_by(db, email=normalize_email(email))

    def get_by_public_id(self, db: Session, public_id: str) -> Optional[User]:
        return self.get_by(db, user_id=public_id)

    def set_password_hash(self, db: Session, user: User, hashed: str) -> None:
        user.hashed_password = hashed
        db.add(user); db.commit()

user_crud = CRUDUser(User)
