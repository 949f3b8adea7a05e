"""Post routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, Request, Response, status
from pydantic import BaseModel, Field

from blog.application.usecase.auth import (
    ResolveIdentityRequest,
    ResolveIdentityUseCase,
)
from blog.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    RecordViewRequest,
    RecordViewUseCase,
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
    UpdatePostRequest,
    UpdatePostResponse,
    UpdatePostUseCase,
)
from blog.config import ViewSettings
from blog.domain.value import Credentials
from blog.interface.api.auth import get_credentials

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str
    content: str
    categories: list[str] = Field(default_factory=list)
    slug: str | None = None


class UpdatePostAPIRequest(BaseModel):
    """API request for updating a post. Omitted fields stay unchanged."""

    title: str | None = None
    content: str | None = None
    categories: list[str] | None = None
    slug: str | None = None  # "" clears the slug


class RecordViewAPIResponse(BaseModel):
    """API response for a recorded view."""

    views: int


@router.post("", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    resolve_identity_use_case: FromDishka[ResolveIdentityUseCase],
    credentials: Credentials = Depends(get_credentials),
) -> CreatePostResponse:
    """Create a new post.

    Requires authentication.
    """
    identity = await resolve_identity_use_case.execute(
        ResolveIdentityRequest(credentials=credentials)
    )
    return await create_post_use_case.execute(
        CreatePostRequest(
            identity=identity,
            title=request.title,
            content=request.content,
            categories=request.categories,
            slug=request.slug,
        )
    )


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    resolve_identity_use_case: FromDishka[ResolveIdentityUseCase],
    q: str | None = None,
    category: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    credentials: Credentials = Depends(get_credentials),
) -> ListPostsResponse:
    """List posts, newest first, with optional search and category filter.

    Public. Credentials only affect the per-post ``liked`` flag.
    """
    identity = await resolve_identity_use_case.execute(
        ResolveIdentityRequest(credentials=credentials, optional=True)
    )
    return await list_posts_use_case.execute(
        ListPostsRequest(
            query=q, category=category, page=page, limit=limit, identity=identity
        )
    )


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: UUID,
    get_post_use_case: FromDishka[GetPostUseCase],
    resolve_identity_use_case: FromDishka[ResolveIdentityUseCase],
    credentials: Credentials = Depends(get_credentials),
) -> GetPostResponse:
    """Get a single post with its comments."""
    identity = await resolve_identity_use_case.execute(
        ResolveIdentityRequest(credentials=credentials, optional=True)
    )
    return await get_post_use_case.execute(
        GetPostRequest(post_id=str(post_id), identity=identity)
    )


@router.patch("/{post_id}", response_model=UpdatePostResponse)
async def update_post(
    post_id: UUID,
    request: UpdatePostAPIRequest,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    resolve_identity_use_case: FromDishka[ResolveIdentityUseCase],
    credentials: Credentials = Depends(get_credentials),
) -> UpdatePostResponse:
    """Update a post.

    Only the author or an admin may update it.
    """
    identity = await resolve_identity_use_case.execute(
        ResolveIdentityRequest(credentials=credentials)
    )
    return await update_post_use_case.execute(
        UpdatePostRequest(
            post_id=str(post_id),
            identity=identity,
            title=request.title,
            content=request.content,
            categories=request.categories,
            slug=request.slug,
        )
    )


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: UUID,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    resolve_identity_use_case: FromDishka[ResolveIdentityUseCase],
    credentials: Credentials = Depends(get_credentials),
) -> DeletePostResponse:
    """Delete a post with its comments and likes.

    Only the author or an admin may delete it.
    """
    identity = await resolve_identity_use_case.execute(
        ResolveIdentityRequest(credentials=credentials)
    )
    return await delete_post_use_case.execute(
        DeletePostRequest(post_id=str(post_id), identity=identity)
    )


@router.post("/{post_id}/like", response_model=ToggleLikeResponse)
async def toggle_like(
    post_id: UUID,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    resolve_identity_use_case: FromDishka[ResolveIdentityUseCase],
    credentials: Credentials = Depends(get_credentials),
) -> ToggleLikeResponse:
    """Like the post, or remove the like if already present."""
    identity = await resolve_identity_use_case.execute(
        ResolveIdentityRequest(credentials=credentials)
    )
    return await toggle_like_use_case.execute(
        ToggleLikeRequest(post_id=str(post_id), identity=identity)
    )


@router.post("/{post_id}/view", response_model=RecordViewAPIResponse)
async def record_view(
    post_id: UUID,
    http_request: Request,
    response: Response,
    record_view_use_case: FromDishka[RecordViewUseCase],
    view_settings: FromDishka[ViewSettings],
) -> RecordViewAPIResponse:
    """Count a view of the post, once per viewer cookie.

    No authentication. A viewer cookie is issued on the first view.
    """
    result = await record_view_use_case.execute(
        RecordViewRequest(
            post_id=str(post_id),
            client_token=http_request.cookies.get(view_settings.cookie_name),
        )
    )
    response.set_cookie(
        key=view_settings.cookie_name,
        value=result.client_token,
        max_age=view_settings.cookie_max_age_days * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
    )
    return RecordViewAPIResponse(views=result.views)
