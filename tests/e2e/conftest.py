"""Fixtures for end-to-end API tests.

Each test gets its own app and container; in-memory repositories are
shared by every request the test makes.
"""

import pytest
from fastapi.testclient import TestClient

from blog.domain.model.user import User
from blog.domain.value import Role
from blog.interface.api.app import create_app
from blog.util.jwt import create_token
from tests.conftest import make_user
from tests.di import MockPersistenceProvider, build_test_container, make_test_settings
from tests.di.core import TEST_ADMIN_KEY


@pytest.fixture
def accounts() -> dict[str, User]:
    """Seeded accounts. None of them is the admin-key account."""
    return {
        "alice": make_user("alice"),
        "bob": make_user("bob"),
        "root": make_user("root", role=Role.ADMIN, email="root@example.com"),
    }


@pytest.fixture
def client(accounts):
    """Create test client with test container."""
    test_container = build_test_container(
        overrides=[MockPersistenceProvider(users=accounts.values())]
    )
    return TestClient(create_app(test_container))


@pytest.fixture
def auth(accounts):
    """Bearer headers for a seeded account, by username."""
    auth_settings = make_test_settings().auth

    def _headers(username: str) -> dict[str, str]:
        token = create_token(str(accounts[username].id), auth_settings)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def admin_key_headers() -> dict[str, str]:
    return {"X-Admin-Key": TEST_ADMIN_KEY}
