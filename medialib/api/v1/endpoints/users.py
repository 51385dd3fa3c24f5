"""User API: listing, current user, profile, preferences and recent items."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request

from medialib.api.v1.dependencies import get_user_service, simulate
from medialib.application.use_cases import UserService
from medialib.schemas.envelope import ApiResponse, ok
from medialib.schemas.user import ProfileUpdate, RecentItemRequest, UserResponse

router = APIRouter()

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.get(
    "",
    response_model=ApiResponse[list[UserResponse]],
    dependencies=[Depends(simulate("getUsers"))],
)
async def list_users(request: Request, service: UserServiceDep, role: str | None = None):
    return ok(request, [UserResponse.model_validate(u) for u in service.list_users(role)])


@router.get(
    "/me",
    response_model=ApiResponse[UserResponse],
    dependencies=[Depends(simulate("getCurrentUser"))],
)
async def get_current_user(request: Request, service: UserServiceDep):
    return ok(request, UserResponse.model_validate(service.get_current_user()))


@router.patch(
    "/me",
    response_model=ApiResponse[UserResponse],
    dependencies=[Depends(simulate("updateProfile"))],
)
async def update_profile(request: Request, body: ProfileUpdate, service: UserServiceDep):
    user = service.update_profile(body.model_dump(exclude_unset=True))
    return ok(request, UserResponse.model_validate(user), "Profile updated successfully")


@router.patch(
    "/me/preferences",
    response_model=ApiResponse[UserResponse],
    dependencies=[Depends(simulate("updatePreferences"))],
)
async def update_preferences(
    request: Request,
    preferences: Annotated[dict[str, Any], Body()],
    service: UserServiceDep,
):
    """Deep-merge the body into the current user's preferences."""
    user = service.update_preferences(preferences)
    return ok(request, UserResponse.model_validate(user), "Preferences updated successfully")


@router.post(
    "/me/recent",
    response_model=ApiResponse[dict[str, list[str]]],
    dependencies=[Depends(simulate("updateRecentItems"))],
)
async def record_recent(request: Request, body: RecentItemRequest, service: UserServiceDep):
    """Push a folder or file to the front of the current user's recent list."""
    result = service.record_recent(body.type.value, body.id)
    return ok(request, result.as_dict())


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    dependencies=[Depends(simulate("getUser"))],
)
async def get_user(request: Request, user_id: str, service: UserServiceDep):
    return ok(request, UserResponse.model_validate(service.get_user(user_id)))
