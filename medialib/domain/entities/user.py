"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from medialib.domain.enums import RecentKind, UserRole
from medialib.domain.exceptions import ValidationException


@dataclass
class UserEntity:
    """Domain entity for a user.

    ``recent_folders`` and ``recent_files`` are bounded most-recent-first
    lists without duplicates; see ``push_recent``.
    """

    id: str
    name: str
    email: str
    role: UserRole
    created: datetime
    last_active: datetime | None = None
    avatar: str | None = None
    preferences: dict[str, Any] = field(default_factory=dict)
    recent_folders: list[str] = field(default_factory=list)
    recent_files: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.role, str) and not isinstance(self.role, UserRole):
            if self.role not in UserRole.values():
                raise ValidationException(
                    f"Invalid role '{self.role}'. Must be one of: {', '.join(UserRole.values())}",
                    field="role",
                )
            self.role = UserRole(self.role)
        if not self.id:
            raise ValidationException("User ID is required", field="id")
        if not self.email:
            raise ValidationException("User email is required", field="email")

    def recent(self, kind: RecentKind) -> list[str]:
        """Return the recent list for ``kind`` (the stored list, not a copy)."""
        return self.recent_folders if kind == RecentKind.FOLDERS else self.recent_files

    def push_recent(self, kind: RecentKind, item_id: str, capacity: int) -> list[str]:
        """Move ``item_id`` to the front of the recent list, keeping at most ``capacity``.

        Args:
            kind: Which list to update.
            item_id: Folder or media id just visited.
            capacity: Maximum list length.

        Returns:
            The updated list.
        """
        updated = [item_id] + [i for i in self.recent(kind) if i != item_id]
        updated = updated[:capacity]
        if kind == RecentKind.FOLDERS:
            self.recent_folders = updated
        else:
            self.recent_files = updated
        return updated
