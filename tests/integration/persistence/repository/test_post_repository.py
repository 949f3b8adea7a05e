"""Integration tests for the PostgreSQL repositories.

Run against a migrated database:

    DATABASE__URL=postgresql+asyncpg://... pytest tests/integration
"""

import os
from uuid import uuid4

import pytest

from blog.domain.error import ConflictError
from blog.domain.model.comment import Comment
from blog.domain.model.post import Post
from blog.domain.repository import (
    PostRepository,
    UserRepository,
    ViewHistoryRepository,
)
from blog.domain.value import CommentId, PostId, Slug
from tests.conftest import make_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"), reason="DATABASE__URL not set"
)

# Integration test fixture - real persistence, assumes postgres running
integration_env = create_env_fixture(unmock={"persistence"})


async def _author_and_post(env, **post_fields):
    user_repo = await env.get(UserRepository)
    post_repo = await env.get(PostRepository)
    author = await user_repo.save(make_user(f"user-{uuid4().hex[:8]}"))
    post = Post(
        id=PostId(uuid4()),
        title=post_fields.pop("title", "Hello"),
        content=post_fields.pop("content", "World"),
        author_id=author.id,
        author_name=author.username,
        **post_fields,
    )
    return author, await post_repo.create(post)


class TestPostgresPostRepository:
    """Round trips through PostgresPostRepository."""

    @pytest.mark.asyncio
    async def test_create_and_find(self, integration_env):
        """A created post reads back with categories and slug."""
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        slug = Slug(f"post-{uuid4().hex[:12]}")
        _, post = await _author_and_post(
            integration_env, categories=["python", "db"], slug=slug
        )

        # Act
        found = await post_repo.find_by_id(post.id)

        # Assert
        assert found is not None
        assert found.categories == ["python", "db"]
        assert found.slug == slug
        assert found.views == 0
        assert found.likes == frozenset()

    @pytest.mark.asyncio
    async def test_duplicate_slug_conflicts(self, integration_env):
        """The unique index turns a duplicate slug into a conflict."""
        # Arrange
        slug = Slug(f"dup-{uuid4().hex[:12]}")
        await _author_and_post(integration_env, slug=slug)

        # Act & Assert
        with pytest.raises(ConflictError):
            await _author_and_post(integration_env, slug=slug)

    @pytest.mark.asyncio
    async def test_toggle_like_round_trip(self, integration_env):
        """Toggling twice restores the original state."""
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        author, post = await _author_and_post(integration_env)

        # Act
        first = await post_repo.toggle_like(post.id, author.id)
        second = await post_repo.toggle_like(post.id, author.id)

        # Assert
        assert (first.like_count, first.liked) == (1, True)
        assert (second.like_count, second.liked) == (0, False)

    @pytest.mark.asyncio
    async def test_comments_keep_order_and_cascade(self, integration_env):
        """Comments come back in append order and go with their post."""
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        author, post = await _author_and_post(integration_env)
        comment_ids = []
        for text in ("one", "two", "three"):
            comment = Comment(
                id=CommentId(uuid4()),
                author_id=author.id,
                author_name=author.username,
                content=text,
            )
            comment_ids.append((await post_repo.append_comment(post.id, comment)).id)

        # Act
        await post_repo.delete_comment(post.id, comment_ids[1])
        stored = await post_repo.find_by_id(post.id)
        await post_repo.delete(post.id)

        # Assert
        assert [c.content for c in stored.comments] == ["one", "three"]
        assert await post_repo.find_comment(post.id, comment_ids[0]) is None

    @pytest.mark.asyncio
    async def test_increment_views_is_atomic(self, integration_env):
        """Sequential increments are all applied."""
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        _, post = await _author_and_post(integration_env)

        # Act
        for _ in range(3):
            await post_repo.increment_views(post.id)

        # Assert
        assert await post_repo.get_views(post.id) == 3


class TestPostgresUserRepository:
    """Profile updates and account deletion."""

    @pytest.mark.asyncio
    async def test_update_profile_fields(self, integration_env):
        """Only the given columns change."""
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        user = await user_repo.save(make_user(f"user-{uuid4().hex[:8]}"))

        # Act
        updated = await user_repo.update_profile(
            user.id, {"bio": "Hi", "github": "https://github.com/someone"}
        )

        # Assert
        assert updated.username == user.username
        assert updated.bio == "Hi"
        assert updated.github == "https://github.com/someone"
        assert updated.linkedin is None

    @pytest.mark.asyncio
    async def test_update_profile_username_conflict(self, integration_env):
        """Renaming onto a taken username raises ConflictError."""
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        taken = await user_repo.save(make_user(f"user-{uuid4().hex[:8]}"))
        user = await user_repo.save(make_user(f"user-{uuid4().hex[:8]}"))

        # Act & Assert
        with pytest.raises(ConflictError):
            await user_repo.update_profile(user.id, {"username": taken.username})

    @pytest.mark.asyncio
    async def test_delete_after_detach_keeps_content(self, integration_env):
        """Posts and comments outlive their author; likes do not."""
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        post_repo = await integration_env.get(PostRepository)
        author, post = await _author_and_post(integration_env)
        reader = await user_repo.save(make_user(f"user-{uuid4().hex[:8]}"))
        await post_repo.toggle_like(post.id, reader.id)
        await post_repo.append_comment(
            post.id,
            Comment(
                id=CommentId(uuid4()),
                author_id=reader.id,
                author_name=reader.username,
                content="First",
            ),
        )

        # Act
        await post_repo.detach_user(reader.id)
        deleted = await user_repo.delete(reader.id)

        # Assert
        assert deleted is True
        assert await user_repo.find_by_id(reader.id) is None
        stored = await post_repo.find_by_id(post.id)
        assert stored.like_count == 0
        assert stored.comments[0].author_id is None
        assert stored.comments[0].author_name == reader.username
        assert stored.author_id == author.id


class TestPostgresViewHistoryRepository:
    """Bounded per-client view window."""

    @pytest.mark.asyncio
    async def test_window_evicts_oldest(self, integration_env):
        """Only the newest entries survive past the limit."""
        # Arrange
        history = await integration_env.get(ViewHistoryRepository)
        client_token = uuid4().hex
        post_ids = []
        for _ in range(4):
            _, post = await _author_and_post(integration_env)
            post_ids.append(post.id)

        # Act
        results = [
            await history.record_if_absent(client_token, post_id, limit=3)
            for post_id in post_ids
        ]
        repeat = await history.record_if_absent(client_token, post_ids[-1], limit=3)

        # Assert
        assert results == [True, True, True, True]
        assert repeat is False
        for post_id in post_ids[1:]:
            assert not await history.record_if_absent(client_token, post_id, limit=3)
        assert await history.record_if_absent(client_token, post_ids[0], limit=3)


@pytest.mark.asyncio
async def test_view_windows_are_per_client(integration_env):
    """Windows of different clients never interfere."""
    # Arrange
    history = await integration_env.get(ViewHistoryRepository)
    _, post = await _author_and_post(integration_env)

    # Act
    first = await history.record_if_absent(uuid4().hex, post.id, limit=100)
    second = await history.record_if_absent(uuid4().hex, post.id, limit=100)

    # Assert
    assert first and second
