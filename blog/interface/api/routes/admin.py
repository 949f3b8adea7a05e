"""Admin routes.

Every route requires the admin role, through either an admin account's
token or the admin key.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query

from blog.application.usecase.admin import (
    AdminDeletePostUseCase,
    AdminDeleteUserUseCase,
    AdminListPostsUseCase,
    DeleteUserRequest,
    DeleteUserResponse,
    ListUsersRequest,
    ListUsersResponse,
    ListUsersUseCase,
)
from blog.application.usecase.auth import (
    ResolveIdentityRequest,
    ResolveIdentityUseCase,
)
from blog.application.usecase.post import (
    DeletePostRequest,
    DeletePostResponse,
    ListPostsRequest,
    ListPostsResponse,
)
from blog.domain.value import Credentials
from blog.interface.api.auth import get_credentials

router = APIRouter(prefix="/admin", tags=["admin"], route_class=DishkaRoute)


@router.get("/users", response_model=ListUsersResponse)
async def list_users(
    list_users_use_case: FromDishka[ListUsersUseCase],
    resolve_identity_use_case: FromDishka[ResolveIdentityUseCase],
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    credentials: Credentials = Depends(get_credentials),
) -> ListUsersResponse:
    """List all user accounts."""
    identity = await resolve_identity_use_case.execute(
        ResolveIdentityRequest(credentials=credentials)
    )
    return await list_users_use_case.execute(
        ListUsersRequest(identity=identity, limit=limit, offset=offset)
    )


@router.get("/posts", response_model=ListPostsResponse)
async def list_posts(
    admin_list_posts_use_case: FromDishka[AdminListPostsUseCase],
    resolve_identity_use_case: FromDishka[ResolveIdentityUseCase],
    q: str | None = None,
    category: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    credentials: Credentials = Depends(get_credentials),
) -> ListPostsResponse:
    """List all posts for moderation."""
    identity = await resolve_identity_use_case.execute(
        ResolveIdentityRequest(credentials=credentials)
    )
    return await admin_list_posts_use_case.execute(
        ListPostsRequest(
            query=q, category=category, page=page, limit=limit, identity=identity
        )
    )


@router.delete("/posts/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: UUID,
    admin_delete_post_use_case: FromDishka[AdminDeletePostUseCase],
    resolve_identity_use_case: FromDishka[ResolveIdentityUseCase],
    credentials: Credentials = Depends(get_credentials),
) -> DeletePostResponse:
    """Delete any post."""
    identity = await resolve_identity_use_case.execute(
        ResolveIdentityRequest(credentials=credentials)
    )
    return await admin_delete_post_use_case.execute(
        DeletePostRequest(post_id=str(post_id), identity=identity)
    )


@router.delete("/users/{user_id}", response_model=DeleteUserResponse)
async def delete_user(
    user_id: UUID,
    admin_delete_user_use_case: FromDishka[AdminDeleteUserUseCase],
    resolve_identity_use_case: FromDishka[ResolveIdentityUseCase],
    credentials: Credentials = Depends(get_credentials),
) -> DeleteUserResponse:
    """Delete an account. Its posts and comments are kept."""
    identity = await resolve_identity_use_case.execute(
        ResolveIdentityRequest(credentials=credentials)
    )
    return await admin_delete_user_use_case.execute(
        DeleteUserRequest(user_id=str(user_id), identity=identity)
    )
