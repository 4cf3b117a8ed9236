"""
db/config.py

Database settings for the inventory service.

Values come from the process environment, with `.env` and `.env.local` at
the project root filling in anything the environment leaves unset. The
service runs on PostgreSQL only; every accepted URL is rewritten to the
psycopg driver.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_FILENAMES = (".env", ".env.local")

# Checked in order; the first non-empty value wins.
DATABASE_URL_VARIABLES = ("DATABASE_URL", "CLOUD_DATABASE_URL", "LOCAL_DATABASE_URL")

_PSYCOPG_PREFIX = "postgresql+psycopg://"
_POSTGRES_PREFIXES = ("postgres://", "postgresql://")


class DatabaseConfigError(RuntimeError):
    """Raised when no usable PostgreSQL URL is configured."""


def load_env_files(project_root: Path | None = None) -> None:
    """
    Load KEY=VALUE pairs from the project's env files.
    Existing process environment variables are not overwritten.
    """

    root = project_root or PROJECT_ROOT
    for filename in ENV_FILENAMES:
        env_path = root / filename
        if not env_path.exists():
            continue
        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            pair = _parse_env_line(raw_line)
            if pair is not None and pair[0] not in os.environ:
                os.environ[pair[0]] = pair[1]


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = line.split("=", 1)
    key = key.strip()
    if not key:
        return None
    return key, value.strip().strip('"').strip("'")


def get_bool_env(name: str, default: bool) -> bool:
    load_env_files()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def get_int_env(name: str, default: int) -> int:
    load_env_files()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def normalize_postgres_url(url: str) -> str:
    """
    Rewrite a PostgreSQL URL to the psycopg driver form.

    Raises DatabaseConfigError for any other database.
    """

    url = url.strip()
    if url.startswith(_PSYCOPG_PREFIX):
        return url
    for prefix in _POSTGRES_PREFIXES:
        if url.startswith(prefix):
            return _PSYCOPG_PREFIX + url[len(prefix):]
    scheme = url.split("://", 1)[0] or "<empty>"
    raise DatabaseConfigError(
        f"Unsupported database URL scheme '{scheme}'. Only PostgreSQL is supported."
    )


def resolve_database_url(override: str | None = None) -> str:
    """
    Return the normalized database URL.

    ``override`` wins when given (used by migrations); otherwise the first
    non-empty variable of DATABASE_URL_VARIABLES is used.
    """

    if override and override.strip():
        return normalize_postgres_url(override)

    load_env_files()
    for name in DATABASE_URL_VARIABLES:
        value = os.getenv(name, "").strip()
        if value:
            return normalize_postgres_url(value)

    raise DatabaseConfigError(
        "No database URL configured. Set one of: " + ", ".join(DATABASE_URL_VARIABLES) + "."
    )


@dataclass(frozen=True)
class DatabaseSettings:
    """
    Engine and pool settings for the inventory database.
    """

    url: str
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_recycle: int = 1800
    pool_timeout: int = 30


@lru_cache(maxsize=1)
def get_database_settings() -> DatabaseSettings:
    return DatabaseSettings(
        url=resolve_database_url(),
        echo=get_bool_env("SQL_ECHO", False),
        pool_size=get_int_env("DB_POOL_SIZE", 5),
        max_overflow=get_int_env("DB_MAX_OVERFLOW", 10),
        pool_recycle=get_int_env("DB_POOL_RECYCLE", 1800),
        pool_timeout=get_int_env("DB_POOL_TIMEOUT", 30),
    )
