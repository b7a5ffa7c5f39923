# onefit/main.py
import os
import time
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from onefit.routers.auth import router as auth_router
from onefit.routers.exercises import router as exercises_router
from onefit.routers.templates import router as templates_router
from onefit.routers.workouts import router as workouts_router
from onefit.routers.fasting import router as fasting_router
from onefit.routers.water import router as water_router
from onefit import db as onefit_db
from onefit.errors import DomainError
from onefit.security import TokenVerifier
from onefit.seed import seed_defaults
from onefit.settings import get_settings

log = logging.getLogger("uvicorn")

@asynccontextmanager
async def lifespan(app: FastAPI):
    if get_settings().SEED_DEFAULTS:
        with onefit_db.SessionLocal() as db:
            seed_defaults(db)
    yield

def create_app(token_verifier: Optional[TokenVerifier] = None) -> FastAPI:
    app = FastAPI(
        title="OneFit API",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Caller profile & settings"},
            {"name": "exercises", "description": "Exercise catalog (built-in & custom)"},
            {"name": "templates", "description": "Workout templates & their exercises"},
            {"name": "workouts", "description": "Workout sessions, exercises and sets"},
            {"name": "fasting", "description": "Intermittent fasting sessions"},
            {"name": "water", "description": "Water intake log"},
        ],
    )
    app.state.token_verifier = token_verifier or TokenVerifier.from_settings()

    # CORS (relax for local dev; tighten origins in prod via env)
    allow_origins = os.getenv("ALLOW_ORIGINS", "*").split(",")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_id_and_log(request: Request, call_next):
        req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-ID"] = req_id
        log.info("rid=%s %s %s -> %s in %.1fms",
                 req_id, request.method, request.url.path, response.status_code, duration_ms)
        return response

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Malformed input is a plain 400 here, not FastAPI's 422
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        log.error("unhandled storage error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": "Internal storage error"})

    @app.get("/")
    def root():
        return {"ok": True, "name": "OneFit API"}

    @app.get("/ping")
    def ping():
        return {"pong": True}

    @app.get("/healthz")
    def healthz():
        # Quick DB sanity check
        try:
            with SessionLocal() as db:
                db.execute(text("SELECT 1"))
            return {"status": "ok"}
        except SQLAlchemyError as e:
            return {"status": "degraded", "error": str(e)}

    @app.get("/version")
    def version():
        return {"version": os.getenv("API_VERSION", "dev")}

    # Routers
    app.include_router(auth_router)
    app.include_router(exercises_router)
    app.include_router(templates_router)
    app.include_router(workouts_router)
    app.include_router(fasting_router)
    app.include_router(water_router)
    return app

SessionLocal = onefit_db.SessionLocal  # for healthz DB check; tests swap it

app = create_app()
