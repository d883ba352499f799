import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.errors import OPERATIONAL_ALERTS, ServiceError
from app.core.logging import setup_logging
from app.db.bootstrap import run_migrations_and_seed

setup_logging()
logger = logging.getLogger("app")

api = FastAPI(
    title="Service Directory API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    swagger_ui_parameters={"displayRequestDuration": True, "persistAuthorization": True},
)

api.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Origin", "X-Requested-With", "Content", "Accept", "Content-Type", "Authorization"],
)

# métricas /metrics (Prometheus)
Instrumentator().instrument(api).expose(api, include_in_schema=False, should_gzip=True)

api.include_router(api_router, prefix="/api/v1")

@api.get("/healthz", tags=["health"])
def healthz():
    return {"status": "ok"}

@api.on_event("startup")
def startup():
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        run_migrations_and_seed()

@api.exception_handler(ServiceError)
def handle_service_error(request: Request, exc: ServiceError):
    message = exc.message
    if isinstance(exc, OPERATIONAL_ALERTS):
        # detalhe fica só no log; o cliente recebe a mensagem fixa
        logger.error("%s on %s %s: %s", exc.code, request.method, request.url.path, exc)
        message = type(exc).message
    return JSONResponse(status_code=exc.status_code, content={"code": exc.code, "message": message})

@api.exception_handler(StarletteHTTPException)
def handle_http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": "HTTP_ERROR", "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )

@api.exception_handler(IntegrityError)
def handle_integrity_error(request: Request, exc: IntegrityError):
    logger.warning("integrity error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=409, content={"code": "UNIQUE_VIOLATION", "message": "Duplicate record."})

@api.exception_handler(Exception)
def handle_unexpected(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"code": "INTERNAL_ERROR", "message": "Internal error."})

app = api
