"""Unit tests for ListPostsUseCase."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from blog.application.usecase.post import ListPostsRequest, ListPostsUseCase
from blog.domain.model.post import Post
from blog.domain.repository import PostRepository
from blog.domain.value import PostId, UserId
from tests.conftest import identity_for, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _seed(post_repo: PostRepository, count: int) -> list[Post]:
    base = datetime(2026, 3, 1, tzinfo=timezone.utc)
    posts = []
    for i in range(count):
        created = base + timedelta(minutes=i)
        posts.append(
            await post_repo.create(
                Post(
                    id=PostId(uuid4()),
                    title=f"Post {i}",
                    content="Body",
                    author_id=UserId(uuid4()),
                    author_name="author",
                    created_at=created,
                    updated_at=created,
                )
            )
        )
    return posts


class TestListPosts:
    """Tests for ListPostsUseCase."""

    @pytest.mark.asyncio
    async def test_default_page_size(self, unit_env):
        """Without a limit the configured default page size is used."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        await _seed(post_repo, 12)

        # Act
        response = await use_case.execute(ListPostsRequest())

        # Assert
        assert response.limit == 10
        assert len(response.posts) == 10
        assert response.total == 12
        assert response.pages == 2
        assert response.posts[0].title == "Post 11"

    @pytest.mark.asyncio
    async def test_second_page(self, unit_env):
        """Pages are 1-based."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        await _seed(post_repo, 5)

        # Act
        response = await use_case.execute(ListPostsRequest(page=2, limit=2))

        # Assert
        assert [p.title for p in response.posts] == ["Post 2", "Post 1"]
        assert response.page == 2
        assert response.pages == 3

    @pytest.mark.asyncio
    async def test_limit_is_capped(self, unit_env):
        """Oversized page sizes are capped at the configured maximum."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)

        # Act
        response = await use_case.execute(ListPostsRequest(limit=1000))

        # Assert
        assert response.limit == 100
        assert response.total == 0
        assert response.pages == 0

    @pytest.mark.asyncio
    async def test_liked_flag_follows_viewer(self, unit_env):
        """Summaries report whether the viewer likes each post."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        viewer = identity_for(make_user("alice"))
        posts = await _seed(post_repo, 2)
        await post_repo.toggle_like(posts[0].id, viewer.user_id)

        # Act
        as_viewer = await use_case.execute(ListPostsRequest(identity=viewer))
        as_anonymous = await use_case.execute(ListPostsRequest())

        # Assert
        liked = {p.post_id: p.liked for p in as_viewer.posts}
        assert liked == {str(posts[0].id): True, str(posts[1].id): False}
        assert not any(p.liked for p in as_anonymous.posts)
        assert as_anonymous.posts[1].like_count == 1
