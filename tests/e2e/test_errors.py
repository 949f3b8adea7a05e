"""End-to-end tests for store failures."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from blog.domain.error import StoreUnavailableError
from blog.interface.api.app import create_app
from blog.persistence.repository.inmemory import InMemoryPostRepository
from tests.di import MockPersistenceProvider, build_test_container


class UnavailablePostRepository(InMemoryPostRepository):
    """Post repository whose store is down."""

    async def find_by_id(self, post_id):
        raise StoreUnavailableError("find_by_id")

    async def find_all(self, query=None, category=None, limit=10, offset=0):
        raise StoreUnavailableError("find_all")


@pytest.fixture
def down_client():
    test_container = build_test_container(
        overrides=[MockPersistenceProvider(post_repository=UnavailablePostRepository())]
    )
    return TestClient(create_app(test_container))


class TestStoreUnavailable:
    """Store failures surface as retryable errors."""

    def test_get_post_unavailable(self, down_client):
        """Store failures map to 500 with the unavailable kind."""
        # Act
        response = down_client.get(f"/posts/{uuid4()}")

        # Assert
        assert response.status_code == 500
        assert response.json()["kind"] == "unavailable"

    def test_list_posts_unavailable(self, down_client):
        """Listing never silently returns an empty page."""
        # Act
        response = down_client.get("/posts")

        # Assert
        assert response.status_code == 500
        assert response.json()["kind"] == "unavailable"
