"""Domain enumerations for the media library.

Enums represent fixed sets of domain values (e.g. user role).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class UserRole(_ValuesMixin, str, Enum):
    """Fixed set of user roles."""

    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"


class RecentKind(_ValuesMixin, str, Enum):
    """Which bounded recent-items list a user operation targets."""

    FOLDERS = "folders"
    FILES = "files"


class SortOrder(_ValuesMixin, str, Enum):
    """Sort direction accepted by list queries."""

    ASC = "asc"
    DESC = "desc"
