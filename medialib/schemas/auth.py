"""Auth API schemas."""

from pydantic import EmailStr, Field

from medialib.schemas.common import CamelModel
from medialib.schemas.user import UserResponse


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    """Signed bearer token for the logged-in user."""

    user: UserResponse
    token: str
    expires_in: int
    token_type: str = "bearer"
