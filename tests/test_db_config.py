"""
tests/test_db_config.py

Pytest tests for database URL resolution and env file loading.
"""

from __future__ import annotations

import os

import pytest

from db.config import (
    DATABASE_URL_VARIABLES,
    DatabaseConfigError,
    load_env_files,
    normalize_postgres_url,
    resolve_database_url,
)


@pytest.fixture()
def no_database_env(monkeypatch):
    for name in DATABASE_URL_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.parametrize(
    "raw",
    [
        "postgres://u:p@db:5432/inventory",
        "postgresql://u:p@db:5432/inventory",
        "postgresql+psycopg://u:p@db:5432/inventory",
    ],
)
def test_postgres_urls_use_the_psycopg_driver(raw) -> None:
    assert normalize_postgres_url(raw) == "postgresql+psycopg://u:p@db:5432/inventory"


def test_non_postgres_url_is_rejected() -> None:
    with pytest.raises(DatabaseConfigError):
        normalize_postgres_url("sqlite:///inventory.db")


def test_first_configured_variable_wins(no_database_env) -> None:
    no_database_env.setenv("CLOUD_DATABASE_URL", "postgres://cloud/inventory")
    no_database_env.setenv("LOCAL_DATABASE_URL", "postgres://local/inventory")

    assert resolve_database_url() == "postgresql+psycopg://cloud/inventory"


def test_override_beats_environment(no_database_env) -> None:
    no_database_env.setenv("DATABASE_URL", "postgres://app/inventory")

    assert resolve_database_url("postgres://migrations/inventory") == (
        "postgresql+psycopg://migrations/inventory"
    )


def test_missing_url_names_every_variable(no_database_env, tmp_path) -> None:
    no_database_env.setattr("db.config.PROJECT_ROOT", tmp_path)

    with pytest.raises(DatabaseConfigError) as exc_info:
        resolve_database_url()

    for name in DATABASE_URL_VARIABLES:
        assert name in str(exc_info.value)


def test_env_files_fill_only_unset_variables(monkeypatch, tmp_path) -> None:
    (tmp_path / ".env").write_text(
        "# comment\nINVENTORY_TEST_A='from-file'\nINVENTORY_TEST_B=from-file\nnot a pair\n",
        encoding="utf-8",
    )
    monkeypatch.delenv("INVENTORY_TEST_A", raising=False)
    monkeypatch.setenv("INVENTORY_TEST_B", "from-env")

    load_env_files(tmp_path)

    assert os.environ["INVENTORY_TEST_A"] == "from-file"
    assert os.environ["INVENTORY_TEST_B"] == "from-env"
    monkeypatch.delenv("INVENTORY_TEST_A")
