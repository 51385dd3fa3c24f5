"""User use cases: listing, current user, profile, preferences, recent items."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from medialib.application.dtos.results import RecentItems
from medialib.application.services.integrity import IntegrityCoordinator
from medialib.domain.entities import UserEntity
from medialib.domain.enums import RecentKind, UserRole
from medialib.domain.exceptions import ValidationException
from medialib.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from medialib.application.interfaces.repositories import IRecordStore

logger = logging.getLogger(__name__)

# id, role, created and password are never changed through a profile update.
_PROFILE_FIELDS = frozenset({"name", "email", "avatar"})


def merge_preferences(current: Mapping[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``current`` deep-merged with ``updates`` (nested dicts merge, other values replace)."""
    merged = dict(current)
    for key, value in updates.items():
        existing = merged.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_preferences(existing, value)
        else:
            merged[key] = value
    return merged


class UserService:
    """User operations; the acting user is identified by ``current_user_id``."""

    def __init__(
        self,
        store: IRecordStore,
        current_user_id: str = "current",
        recent_capacity: int = 10,
    ) -> None:
        self.store = store
        self.integrity = IntegrityCoordinator(store)
        self.current_user_id = current_user_id
        self.recent_capacity = recent_capacity

    def list_users(self, role: str | None = None) -> list[UserEntity]:
        users = self.store.users.all()
        if role:
            if role not in UserRole.values():
                raise ValidationException(
                    f"Invalid role '{role}'. Must be one of: {', '.join(UserRole.values())}",
                    field="role",
                )
            users = [u for u in users if u.role == role]
        return users

    def get_user(self, user_id: str) -> UserEntity:
        return self.integrity.require_user(user_id)

    def get_current_user(self) -> UserEntity:
        return self.integrity.require_user(self.current_user_id)

    def find_by_email(self, email: str) -> UserEntity | None:
        wanted = email.casefold()
        return next((u for u in self.store.users.all() if u.email.casefold() == wanted), None)

    def update_profile(self, changes: Mapping[str, Any], user_id: str | None = None) -> UserEntity:
        """Update name, email or avatar of a user (the current user by default)."""
        updates = {k: v for k, v in changes.items() if k in _PROFILE_FIELDS}
        if "name" in updates and not updates["name"]:
            raise ValidationException("User name is required", field="name")
        if "email" in updates and not updates["email"]:
            raise ValidationException("User email is required", field="email")
        with self.store.lock:
            user = self.integrity.require_user(user_id or self.current_user_id)
            for key, value in updates.items():
                setattr(user, key, value)
            user.last_active = utc_now()
            return self.store.users.replace(user)

    def update_preferences(
        self, preferences: Mapping[str, Any], user_id: str | None = None
    ) -> UserEntity:
        """Merge ``preferences`` into the user's nested preference map."""
        if not isinstance(preferences, Mapping):
            raise ValidationException("Preferences must be an object", field="preferences")
        with self.store.lock:
            user = self.integrity.require_user(user_id or self.current_user_id)
            user.preferences = merge_preferences(user.preferences, preferences)
            user.last_active = utc_now()
            return self.store.users.replace(user)

    def record_recent(
        self, kind: str, item_id: str | None, user_id: str | None = None
    ) -> RecentItems:
        """Push a visited folder or file to the front of the user's recent list.

        Raises:
            ValidationException: Unknown kind or missing id.
            ResourceNotFoundException: The folder or file does not exist.
        """
        if kind not in RecentKind.values():
            raise ValidationException(
                f"Invalid type '{kind}'. Must be one of: {', '.join(RecentKind.values())}",
                field="type",
            )
        if not item_id:
            raise ValidationException("Item id is required", field="id")
        recent_kind = RecentKind(kind)
        with self.store.lock:
            if recent_kind == RecentKind.FOLDERS:
                self.integrity.require_folder(item_id)
            else:
                self.integrity.require_media(item_id)
            user = self.integrity.require_user(user_id or self.current_user_id)
            items = user.push_recent(recent_kind, item_id, self.recent_capacity)
            user.last_active = utc_now()
            self.store.users.replace(user)
        return RecentItems(kind=recent_kind.value, items=items)
