"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from medialib.domain.entities import (
    CollectionEntity,
    FolderEntity,
    MediaItemEntity,
    TagCategoryEntity,
    TagEntity,
    UserEntity,
)
from medialib.domain.enums import RecentKind, SortOrder, UserRole
from medialib.domain.exceptions import (
    AuthenticationException,
    ConflictException,
    HierarchyCycleException,
    InvalidReferencesException,
    MediaLibraryException,
    ResourceNotFoundException,
    ServiceUnavailableException,
    ValidationException,
)

__all__ = [
    # Entities
    "CollectionEntity",
    "FolderEntity",
    "MediaItemEntity",
    "TagCategoryEntity",
    "TagEntity",
    "UserEntity",
    # Enums
    "RecentKind",
    "SortOrder",
    "UserRole",
    # Exceptions
    "AuthenticationException",
    "ConflictException",
    "HierarchyCycleException",
    "InvalidReferencesException",
    "MediaLibraryException",
    "ResourceNotFoundException",
    "ServiceUnavailableException",
    "ValidationException",
]
