"""Domain entities.

Pure domain models; no transport or persistence concerns.
"""

from medialib.domain.entities.collection import CollectionEntity
from medialib.domain.entities.folder import FolderEntity
from medialib.domain.entities.media import MediaItemEntity
from medialib.domain.entities.tag import TagCategoryEntity, TagEntity
from medialib.domain.entities.user import UserEntity

__all__ = [
    "CollectionEntity",
    "FolderEntity",
    "MediaItemEntity",
    "TagCategoryEntity",
    "TagEntity",
    "UserEntity",
]
