# app/models/__init__.py
# Carrega módulos para registrar tabelas no metadata (Alembic / create_all):
from app.models.user import User                                # noqa: F401
from app.models.refresh_token import RefreshToken               # noqa: F401
from app.models.org_specialty import organization_specialties   # noqa: F401
from app.models.specialty import Specialty                      # noqa: F401
from app.models.organization import Organization                # noqa: F401
from app.models.profile import Profile                          # noqa: F401

__all__ = ["User", "RefreshToken", "Specialty", "Organization", "Profile", "organization_specialties"]
