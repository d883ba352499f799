# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1 import (
    health,
    auth,
    profiles,
    orgs,
    specialties,
)

api_router = APIRouter()

# -------- rotas públicas / sessão --------
api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# -------- registros (GET público, escrita só do dono) --------
api_router.include_router(profiles.router,    prefix="/profiles",    tags=["profiles"])
api_router.include_router(orgs.router,        prefix="/orgs",        tags=["orgs"])
api_router.include_router(specialties.router, prefix="/specialties", tags=["specialties"])
