"""Application use cases: one service per entity."""

from medialib.application.use_cases.auth import AuthService
from medialib.application.use_cases.collections import CollectionService
from medialib.application.use_cases.folders import FolderService
from medialib.application.use_cases.media import MediaService
from medialib.application.use_cases.tags import TagService
from medialib.application.use_cases.users import UserService

__all__ = [
    "AuthService",
    "CollectionService",
    "FolderService",
    "MediaService",
    "TagService",
    "UserService",
]
