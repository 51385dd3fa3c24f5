"""Tag and tag category API schemas."""

from pydantic import Field

from medialib.schemas.common import CamelModel, PaginatedResponse
from medialib.schemas.media import MediaResponse


class TagCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    color: str | None = None
    category_id: str | None = None


class TagUpdate(CamelModel):
    """Partial update; ``count`` is maintained by the service and cannot be set."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    color: str | None = None
    category_id: str | None = None


class TagRenameRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)


class TagResponse(CamelModel):
    id: str
    name: str
    color: str | None = None
    count: int
    category_id: str | None = None


class TagMediaResponse(CamelModel):
    tag: TagResponse
    media: PaginatedResponse[MediaResponse]


class TagCategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class TagCategoryUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None


class TagCategoryResponse(CamelModel):
    id: str
    name: str
    description: str | None = None
