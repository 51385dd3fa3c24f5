"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from medialib.api.v1.dependencies.
"""

from fastapi import APIRouter

from medialib.api.v1.endpoints import (
    auth,
    collections,
    folders,
    health,
    media,
    tag_categories,
    tags,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(folders.router, prefix="/folders", tags=["folders"])
api_router.include_router(media.router, prefix="/media", tags=["media"])
api_router.include_router(collections.router, prefix="/collections", tags=["collections"])
api_router.include_router(tags.router, prefix="/tags", tags=["tags"])
api_router.include_router(
    tag_categories.router, prefix="/tag-categories", tags=["tag-categories"]
)
api_router.include_router(users.router, prefix="/users", tags=["users"])
