import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from lawpaw.config.settings import Settings
from lawpaw.database.connection import close_pool, get_connection, init_pool
from lawpaw.database.repositories.legal_documents_repository import LegalDocumentsRepository


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "lawpaw_test")
    os.environ.setdefault("DB_POOL_TIMEOUT_SECONDS", "3")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        # the pool connects in the background; force a round trip
        with get_connection() as conn:
            conn.execute("SELECT 1")
        LegalDocumentsRepository().ensure_table()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run these tests")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[int], None, None]:
    """Collects legal_documents ids created by a test and deletes them afterwards."""
    record_ids: list[int] = []
    yield record_ids
    if not record_ids:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM legal_documents WHERE id = ANY(%s)", (record_ids,))
        conn.commit()
