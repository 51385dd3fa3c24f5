"""User API schemas."""

from typing import Any

from pydantic import EmailStr, Field

from medialib.domain.enums import RecentKind, UserRole
from medialib.schemas.common import CamelModel, IsoDatetime


class UserResponse(CamelModel):
    """User response (no password)."""

    id: str
    name: str
    email: str
    role: UserRole
    avatar: str | None = None
    preferences: dict[str, Any]
    recent_folders: list[str]
    recent_files: list[str]
    created: IsoDatetime
    last_active: IsoDatetime | None = None


class ProfileUpdate(CamelModel):
    """Profile changes for the current user; id, role and created are not editable."""

    name: str | None = Field(default=None, min_length=1)
    email: EmailStr | None = None
    avatar: str | None = None


class RecentItemRequest(CamelModel):
    type: RecentKind
    id: str = Field(..., min_length=1)
