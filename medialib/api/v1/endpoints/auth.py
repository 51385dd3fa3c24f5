"""Auth API: login with the demo credential pair, logout."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from medialib.api.v1.dependencies import get_auth_service, get_token_subject, simulate
from medialib.application.use_cases import AuthService
from medialib.schemas.auth import LoginRequest, LoginResponse
from medialib.schemas.envelope import ApiResponse, ok
from medialib.schemas.user import UserResponse

router = APIRouter()

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


@router.post(
    "/login",
    response_model=ApiResponse[LoginResponse],
    dependencies=[Depends(simulate("login", failure_code="authentication_failed"))],
)
async def login(request: Request, body: LoginRequest, service: AuthServiceDep):
    """Return the current user and a signed bearer token (expiresIn in seconds)."""
    result = service.login(body.email, body.password)
    payload = LoginResponse(
        user=UserResponse.model_validate(result.user),
        token=result.token,
        expires_in=result.expires_in,
        token_type=result.token_type,
    )
    return ok(request, payload, "Login successful")


@router.post(
    "/logout",
    response_model=ApiResponse[None],
    dependencies=[Depends(simulate("logout"))],
)
async def logout(
    request: Request,
    service: AuthServiceDep,
    subject: Annotated[str | None, Depends(get_token_subject)],
):
    service.logout(subject)
    return ok(request, None, "Logout successful")
