"""User routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from blog.application.usecase.auth import (
    ResolveIdentityRequest,
    ResolveIdentityUseCase,
)
from blog.application.usecase.user import (
    GetUserProfileRequest,
    GetUserProfileResponse,
    GetUserProfileUseCase,
    UpdateUserProfileRequest,
    UpdateUserProfileResponse,
    UpdateUserProfileUseCase,
)
from blog.domain.value import Credentials
from blog.interface.api.auth import get_credentials

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpdateProfileAPIRequest(BaseModel):
    """API request for editing the current user's profile."""

    username: str | None = None
    bio: str | None = None
    linkedin: str | None = None
    github: str | None = None


@router.get("/me", response_model=GetUserProfileResponse)
async def get_me(
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
    resolve_identity_use_case: FromDishka[ResolveIdentityUseCase],
    credentials: Credentials = Depends(get_credentials),
) -> GetUserProfileResponse:
    """Get the current user's profile, authored posts and statistics."""
    identity = await resolve_identity_use_case.execute(
        ResolveIdentityRequest(credentials=credentials)
    )
    return await get_user_profile_use_case.execute(
        GetUserProfileRequest(identity=identity)
    )


@router.patch("/me", response_model=UpdateUserProfileResponse)
async def update_me(
    request: UpdateProfileAPIRequest,
    update_user_profile_use_case: FromDishka[UpdateUserProfileUseCase],
    resolve_identity_use_case: FromDishka[ResolveIdentityUseCase],
    credentials: Credentials = Depends(get_credentials),
) -> UpdateUserProfileResponse:
    """Edit the current user's profile.

    Existing posts and comments keep the name they were written under.
    """
    identity = await resolve_identity_use_case.execute(
        ResolveIdentityRequest(credentials=credentials)
    )
    return await update_user_profile_use_case.execute(
        UpdateUserProfileRequest(identity=identity, **request.model_dump())
    )
