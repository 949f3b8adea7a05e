"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from blog.application.usecase.auth import (
    ResolveIdentityRequest,
    ResolveIdentityUseCase,
)
from blog.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from blog.domain.value import Credentials
from blog.interface.api.auth import get_credentials

router = APIRouter(
    prefix="/posts/{post_id}/comments", tags=["comments"], route_class=DishkaRoute
)


class CommentAPIRequest(BaseModel):
    """API request carrying comment content."""

    content: str


@router.post(
    "", response_model=CreateCommentResponse, status_code=status.HTTP_201_CREATED
)
async def create_comment(
    post_id: UUID,
    request: CommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    resolve_identity_use_case: FromDishka[ResolveIdentityUseCase],
    credentials: Credentials = Depends(get_credentials),
) -> CreateCommentResponse:
    """Add a comment at the end of the post's comment list."""
    identity = await resolve_identity_use_case.execute(
        ResolveIdentityRequest(credentials=credentials)
    )
    return await create_comment_use_case.execute(
        CreateCommentRequest(
            post_id=str(post_id), identity=identity, content=request.content
        )
    )


@router.patch("/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    post_id: UUID,
    comment_id: UUID,
    request: CommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    resolve_identity_use_case: FromDishka[ResolveIdentityUseCase],
    credentials: Credentials = Depends(get_credentials),
) -> UpdateCommentResponse:
    """Edit a comment. Only its author or an admin may edit it."""
    identity = await resolve_identity_use_case.execute(
        ResolveIdentityRequest(credentials=credentials)
    )
    return await update_comment_use_case.execute(
        UpdateCommentRequest(
            post_id=str(post_id),
            comment_id=str(comment_id),
            identity=identity,
            content=request.content,
        )
    )


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    post_id: UUID,
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    resolve_identity_use_case: FromDishka[ResolveIdentityUseCase],
    credentials: Credentials = Depends(get_credentials),
) -> DeleteCommentResponse:
    """Delete a comment. Only its author or an admin may delete it."""
    identity = await resolve_identity_use_case.execute(
        ResolveIdentityRequest(credentials=credentials)
    )
    return await delete_comment_use_case.execute(
        DeleteCommentRequest(
            post_id=str(post_id), comment_id=str(comment_id), identity=identity
        )
    )
