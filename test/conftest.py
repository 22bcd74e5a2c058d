"""
Test Configuration and Fixtures

This module provides:
- Environment setup before any application module reads settings
- A TestClient over the test app with a fresh container per test
- Users, tokens and a tour created through the public API

Architecture:
- Unit tests (marked `unit`): construct use cases and adapters directly with mocks
- Integration tests (marked `integration`): drive the FastAPI app end to end
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time by core_setting.py
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['DEBUG'] = 'False'
    os.environ['SECRET_KEY'] = 'holidays_test_secret_key'
    os.environ['DOCUMENT_STORE'] = 'memory'
    os.environ['MAIL_BACKEND'] = 'mock'
    os.environ['PAYMENT_BACKEND'] = 'mock'
    os.environ['ENFORCE_SEAT_CAPACITY'] = 'False'
    os.environ['BCRYPT_ROUNDS'] = '4'
    os.environ['FIRST_ADMIN_EMAIL'] = 'admin@holidays-planner.com'
    os.environ['FIRST_ADMIN_PASSWORD'] = 'AdminP@ss1'
    os.environ['FIRST_ADMIN_NAME'] = 'Holidays Admin'


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import Iterator  # noqa: E402
from typing import Any, Dict  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.config.di import container  # noqa: E402
from test.shared.utils import auth_header, create_tour, create_user, login_user  # noqa: E402
from test.test_main import app  # noqa: E402
from test.util_constant import (  # noqa: E402
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    ANOTHER_TRAVELLER_EMAIL,
    ANOTHER_TRAVELLER_NAME,
    DEFAULT_PASSWORD,
    TRAVELLER_EMAIL,
    TRAVELLER_NAME,
)


@pytest.fixture
def client() -> Iterator[TestClient]:
    # Fresh store, notifier and gateway for every test
    container.reset_singletons()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_token(client: TestClient) -> str:
    return login_user(client, ADMIN_EMAIL, ADMIN_PASSWORD)['token']


@pytest.fixture
def admin_headers(admin_token: str) -> Dict[str, str]:
    return auth_header(admin_token)


@pytest.fixture
def traveller(client: TestClient) -> Dict[str, Any]:
    return create_user(client, TRAVELLER_EMAIL, DEFAULT_PASSWORD, TRAVELLER_NAME)


@pytest.fixture
def traveller_headers(client: TestClient, traveller: Dict[str, Any]) -> Dict[str, str]:
    return auth_header(login_user(client, TRAVELLER_EMAIL, DEFAULT_PASSWORD)['token'])


@pytest.fixture
def another_traveller(client: TestClient) -> Dict[str, Any]:
    return create_user(client, ANOTHER_TRAVELLER_EMAIL, DEFAULT_PASSWORD, ANOTHER_TRAVELLER_NAME)


@pytest.fixture
def another_traveller_headers(
    client: TestClient, another_traveller: Dict[str, Any]
) -> Dict[str, str]:
    return auth_header(login_user(client, ANOTHER_TRAVELLER_EMAIL, DEFAULT_PASSWORD)['token'])


@pytest.fixture
def tour(client: TestClient, admin_headers: Dict[str, str]) -> Dict[str, Any]:
    return create_tour(client, admin_headers)
