from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from app.schemas.health import HealthResponse

APP_TITLE = "Inventory Import API"
APP_VERSION = "1.0.0"


def _validate_env() -> None:
    """
    Validate required environment variables at startup.

    Runs before any database connection is initialised.
    Raises RuntimeError listing every missing or invalid variable so the
    operator can fix all problems in one restart cycle.

    Rules:
    - A database URL must be configured; no SQLite fallback is permitted.
    - Inventory import limits, when set, must be positive integers.
    """

    from db.config import DatabaseConfigError, load_env_files, resolve_database_url

    load_env_files()

    errors: list[str] = []

    # --- Database URL ---------------------------------------------------
    try:
        resolve_database_url()
    except DatabaseConfigError as exc:
        errors.append(str(exc))

    # --- Import limits --------------------------------------------------
    for name in ("INVENTORY_IMPORT_MAX_ROWS", "INVENTORY_IMPORT_MAX_UPLOAD_BYTES"):
        raw_value = os.getenv(name)
        if raw_value is None:
            continue
        raw_value = raw_value.strip()
        if not raw_value.isdigit() or int(raw_value) < 1:
            errors.append(f"{name}='{raw_value}' is not a positive integer.")

    if errors:
        raise RuntimeError(
            "Startup validation failed; missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _check_db() -> None:
    """Open a session and run SELECT 1. Raises RuntimeError if the DB is unreachable."""
    from sqlalchemy import text
    from sqlalchemy.exc import SQLAlchemyError

    from db.session import SessionLocal

    try:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
    except SQLAlchemyError as exc:
        raise RuntimeError("Database unavailable.") from exc


def _check_schema() -> None:
    """
    Compare Base.metadata table names against the live DB schema.

    Every inventory table must exist before traffic is served.
    Does NOT auto-migrate.
    """
    from sqlalchemy import inspect as sa_inspect

    import db.models  # noqa: F401  registers ORM models on Base.metadata
    from db.base import Base
    from db.session import get_engine

    inspector = sa_inspect(get_engine())
    actual: set[str] = set(inspector.get_table_names())
    expected: set[str] = set(Base.metadata.tables.keys())
    missing = expected - actual

    if missing:
        log = logging.getLogger(__name__)
        log.critical(
            "Schema mismatch: %d table(s) defined in ORM metadata are absent from "
            "the database: %s. Run 'alembic upgrade head' and restart.",
            len(missing),
            ", ".join(sorted(missing)),
        )
        raise RuntimeError(
            f"Schema mismatch: {len(missing)} table(s) missing from the database "
            f"({', '.join(sorted(missing))}). Run migrations and restart."
        )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Validate DB connectivity and schema on boot."""
    _check_db()
    logging.getLogger(__name__).info("Database connectivity confirmed")
    _check_schema()
    logging.getLogger(__name__).info("Database schema validated")
    yield


def register_routes(application: FastAPI) -> None:
    """
    Attach inventory routers and the health check to an application.
    """

    from app.api.routers import inventory_export_router, inventory_import_router

    application.include_router(inventory_import_router)
    application.include_router(inventory_export_router)

    @application.get("/health")
    def healthcheck() -> HealthResponse:
        return HealthResponse(status="ok", service=APP_TITLE, version=APP_VERSION)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title=APP_TITLE,
        version=APP_VERSION,
        lifespan=_lifespan,
    )
    register_routes(application)
    return application


app = create_app()
