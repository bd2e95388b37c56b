# app/main.py
"""
FastAPI application entry point.
Builds the Database at startup, registers domain error handlers, request
timing and all routers.
"""

import time
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.database import Database
from app.routers import auth, cars, health, matches, salespersons, stats, users
from app.services.errors import LifecycleError
from app.utils.logger import get_logger

logger = get_logger(__name__)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Pass a Database to run against another store (tests use in-memory SQLite)."""
    app = FastAPI(
        title="Allocation Tracker API",
        description="Dealership car allocation, stock, matching and sales tracking.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.db = database

    # ── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Request Timing Middleware ────────────────────────────────────────────
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        duration = round((time.time() - start) * 1000, 2)
        logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
        return response

    # ── Domain Errors ────────────────────────────────────────────────────────
    @app.exception_handler(LifecycleError)
    async def lifecycle_error_handler(request: Request, exc: LifecycleError):
        logger.warning(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    # ── Global Exception Handler ─────────────────────────────────────────────
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # ── Routers ──────────────────────────────────────────────────────────────
    app.include_router(auth.router,         prefix="/api/v1", tags=["Auth"])
    app.include_router(cars.router,         prefix="/api/v1", tags=["Cars"])
    app.include_router(matches.router,      prefix="/api/v1", tags=["Matches"])
    app.include_router(salespersons.router, prefix="/api/v1", tags=["Salespersons"])
    app.include_router(users.router,        prefix="/api/v1", tags=["Users"])
    app.include_router(stats.router,        prefix="/api/v1", tags=["Statistics"])
    app.include_router(health.router,       prefix="/api/v1", tags=["Health"])

    # ── Startup / Shutdown ───────────────────────────────────────────────────
    @app.on_event("startup")
    async def startup():
        logger.info("Allocation Tracker starting up...")
        if app.state.db is None:
            app.state.db = Database(settings.DATABASE_URL)
        app.state.db.create_tables()
        logger.info("Database tables ready")
        logger.info(f"Stock locations: {settings.STOCK_LOCATIONS}")
        logger.info(f"Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")

    @app.on_event("shutdown")
    async def shutdown():
        logger.info("Allocation Tracker shutting down...")
        if app.state.db is not None:
            app.state.db.dispose()

    return app


app = create_app()
