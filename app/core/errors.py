# app/core/errors.py
from __future__ import annotations
from typing import Optional


class ServiceError(Exception):
    """Base dos erros de domínio; o handler em app.main devolve {code, message}."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    message: str = "Internal error."

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class BadCredentials(ServiceError):
    status_code = 400
    code = "BAD_CREDENTIALS"
    message = "Password does not match"


class NotFound(ServiceError):
    status_code = 404
    code = "NOT_FOUND"
    message = "Not found"


class Unauthorized(ServiceError):
    status_code = 401
    code = "UNAUTHORIZED"
    message = "Unauthorized"


class TokenInvalid(Unauthorized):
    """Assinatura, estrutura ou expiração inválidas (sem distinguir qual)."""

    code = "TOKEN_INVALID"
    message = "invalid or expired token"


class Conflict(ServiceError):
    status_code = 409
    code = "CONFLICT"
    message = "Duplicate record."


class EmailTaken(Conflict):
    code = "EMAIL_TAKEN"
    message = "Email already registered"


class AllocationExhausted(ServiceError):
    code = "ALLOCATION_EXHAUSTED"
    message = "Internal error."


class InternalFailure(ServiceError):
    code = "INTERNAL_ERROR"
    message = "Internal error."


# erros que viram alerta operacional no log
OPERATIONAL_ALERTS = (AllocationExhausted, InternalFailure)
