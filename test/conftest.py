"""
Test Configuration and Fixtures

This module provides:
- A throwaway SQLite database (aiosqlite) per pytest worker, created at session start
- Per-test table cleanup for integration tests
- The FastAPI TestClient and user fixtures

Architecture:
- Unit tests (@pytest.mark.unit): in-memory fakes, no database, no TestClient
- Integration tests: real unit of work / HTTP API against the SQLite database
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path


_TEST_DIR = Path(__file__).parent
_WORKER_ID = os.environ.get('PYTEST_XDIST_WORKER', 'master')
_TEST_DB_PATH = _TEST_DIR / f'test_db_{_WORKER_ID}.sqlite3'


def _early_setup_test_environment() -> None:
    test_log_dir = _TEST_DIR / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{_TEST_DB_PATH}'
    os.environ['CREATE_TABLES_ON_STARTUP'] = 'false'
    os.environ['DEBUG'] = 'true'
    os.environ.setdefault('SHOWTIME_GUARD_TIMEOUT_SECONDS', '5')
    os.environ.setdefault('CANCELLATION_LEAD_TIME_MINUTES', '120')


_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator, Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import create_engine, update  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from test.shared.utils import create_user  # noqa: E402
from test.util_constant import (  # noqa: E402
    ADMIN_EMAIL,
    ADMIN_NAME,
    ANOTHER_USER_EMAIL,
    ANOTHER_USER_NAME,
    DEFAULT_PASSWORD,
    TEST_USER_EMAIL,
    TEST_USER_NAME,
)


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_sessionstart(session: pytest.Session) -> None:
    asyncio.run(_setup_test_database())


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    _TEST_DB_PATH.unlink(missing_ok=True)


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            # First, so tables are empty before any user or showtime fixture runs
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
def _get_test_database_url() -> str:
    return os.environ['DATABASE_URL']


async def _setup_test_database() -> None:
    from src.platform.database.db_setting import Base
    import src.service.cinema.driven_adapter.model  # noqa: F401

    _TEST_DB_PATH.unlink(missing_ok=True)
    engine = create_async_engine(_get_test_database_url(), poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


async def _clean_all_tables() -> None:
    from src.platform.database.db_setting import Base

    engine = create_async_engine(_get_test_database_url(), poolclass=NullPool)
    try:
        async with engine.begin() as conn:
            # Children first
            for table in reversed(Base.metadata.sorted_tables):
                await conn.execute(table.delete())
    finally:
        await engine.dispose()


@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    await _clean_all_tables()
    yield

    from src.platform.database.db_setting import dispose_engine

    await dispose_engine()


# =============================================================================
# HTTP Client Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clear_client_cookies(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    # Skip for unit tests - they don't use the HTTP client
    if 'unit' in [m.name for m in request.node.iter_markers()]:
        yield
        return
    client = request.getfixturevalue('client')
    client.cookies.clear()
    yield
    client.cookies.clear()


def promote_to_admin(email: str) -> None:
    """Sign-up never grants admin, so test admins are promoted in the database."""
    from src.service.cinema.driven_adapter.model.user_model import UserModel

    engine = create_engine(f'sqlite:///{_TEST_DB_PATH}', poolclass=NullPool)
    try:
        with engine.begin() as conn:
            conn.execute(update(UserModel).where(UserModel.email == email).values(role='admin'))
    finally:
        engine.dispose()


@pytest.fixture
def admin_user(client: TestClient) -> dict[str, Any]:
    user = create_user(client, ADMIN_EMAIL, DEFAULT_PASSWORD, ADMIN_NAME, 'user')
    promote_to_admin(ADMIN_EMAIL)
    return {**user, 'role': 'admin'}


@pytest.fixture
def normal_user(client: TestClient) -> dict[str, Any]:
    return create_user(client, TEST_USER_EMAIL, DEFAULT_PASSWORD, TEST_USER_NAME, 'user')


@pytest.fixture
def another_user(client: TestClient) -> dict[str, Any]:
    return create_user(client, ANOTHER_USER_EMAIL, DEFAULT_PASSWORD, ANOTHER_USER_NAME, 'user')
