# app/core/config.py
import os
from typing import ClassVar, List
from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}

def _default_database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url and url.strip():
        return url
    data_dir = os.path.abspath(os.getenv("DATA_DIR", "./data"))
    os.makedirs(data_dir, exist_ok=True)
    return f"sqlite:///{os.path.join(data_dir, 'directory.db')}"

def _is_production() -> bool:
    return os.getenv("ENVIRONMENT", "development").lower() == "production"

class Settings(BaseModel):
    # alfabeto dos identificadores públicos (não vira campo Pydantic)
    PUBLIC_ID_ALPHABET: ClassVar[str] = (
        "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
    )
    PUBLIC_ID_LENGTH: ClassVar[int] = 8

    ENVIRONMENT: str = Field(default_factory=lambda: os.getenv("ENVIRONMENT", "development"))
    DATABASE_URL: str = Field(default_factory=_default_database_url)

    # JWT
    SECRET_KEY: str = Field(
        default_factory=lambda: os.getenv("SECRET_KEY") or os.getenv("JWT_SECRET") or "CHANGE_ME_SUPER_SECRET"
    )
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = Field(default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", "7")))
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default_factory=lambda: int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "30")))

    # senhas / identificadores
    BCRYPT_ROUNDS: int = Field(default_factory=lambda: int(os.getenv("BCRYPT_ROUNDS", "10")))
    PUBLIC_ID_MAX_ATTEMPTS: int = Field(default_factory=lambda: int(os.getenv("PUBLIC_ID_MAX_ATTEMPTS", "10")))

    # cookies TOKEN / REFRESH_TOKEN
    COOKIE_SECURE: bool = Field(default_factory=lambda: _env_bool("COOKIE_SECURE", _is_production()))
    COOKIE_SAMESITE: str = Field(
        default_factory=lambda: os.getenv("COOKIE_SAMESITE", "none" if _is_production() else "lax").lower()
    )

    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    )
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    RUN_MIGRATIONS_ON_STARTUP: bool = Field(default_factory=lambda: _env_bool("RUN_MIGRATIONS_ON_STARTUP", True))

    # formatação de respostas
    DEFAULT_PROFILE_IMAGE_URL: str = Field(
        default_factory=lambda: os.getenv("DEFAULT_PROFILE_IMAGE_URL", "https://via.placeholder.com/150")
    )
    DEFAULT_ORG_IMAGE_URL: str = Field(
        default_factory=lambda: os.getenv("DEFAULT_ORG_IMAGE_URL", "https://via.placeholder.com/300x200")
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

settings = Settings()
