"""Media API schemas."""

from pydantic import Field

from medialib.schemas.common import BatchFailureResponse, CamelModel, IsoDatetime


class MediaResponse(CamelModel):
    id: str
    name: str
    type: str
    folder: str
    path: str
    size: str | None = None
    status: str
    tags: list[str]
    ai_tags: list[str]
    used: bool
    starred: bool
    favorited: bool
    used_in: list[str]
    dimensions: str | None = None
    url: str | None = None
    thumbnail: str | None = None
    description: str | None = None
    created: IsoDatetime
    modified: IsoDatetime


class MediaCreate(CamelModel):
    """Request body for creating a media item (metadata only)."""

    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    folder: str = Field(..., min_length=1)
    size: str | None = None
    status: str | None = None
    tags: list[str] = Field(default_factory=list)
    ai_tags: list[str] = Field(default_factory=list)
    used: bool = False
    starred: bool = False
    favorited: bool = False
    used_in: list[str] = Field(default_factory=list)
    dimensions: str | None = None
    url: str | None = None
    thumbnail: str | None = None
    description: str | None = None


class MediaUpdate(CamelModel):
    """Partial update; unknown and protected fields (id, created) are ignored."""

    name: str | None = Field(default=None, min_length=1)
    type: str | None = Field(default=None, min_length=1)
    folder: str | None = Field(default=None, min_length=1)
    size: str | None = None
    status: str | None = None
    tags: list[str] | None = None
    ai_tags: list[str] | None = None
    used: bool | None = None
    starred: bool | None = None
    favorited: bool | None = None
    used_in: list[str] | None = None
    dimensions: str | None = None
    url: str | None = None
    thumbnail: str | None = None
    description: str | None = None


class MediaBatchUpdateRequest(CamelModel):
    ids: list[str]
    updates: MediaUpdate


class MediaTransferRequest(CamelModel):
    """Move or copy media items into a folder."""

    ids: list[str]
    target_folder_id: str = Field(..., min_length=1)


class TagBatchRequest(CamelModel):
    """Add and/or remove tag names on many media items."""

    media_ids: list[str]
    add: list[str] = Field(default_factory=list)
    remove: list[str] = Field(default_factory=list)


class BatchUpdateResponse(CamelModel):
    updated: list[MediaResponse]
    failed: list[BatchFailureResponse]
    total_updated: int
    total_failed: int


class BatchDeleteResponse(CamelModel):
    deleted: list[str]
    failed: list[BatchFailureResponse]
    total_deleted: int
    total_failed: int


class BatchCopyResponse(CamelModel):
    copied: list[MediaResponse]
    failed: list[BatchFailureResponse]


class TagBatchResponse(CamelModel):
    updated_count: int
    updated_ids: list[str]
    failed: list[BatchFailureResponse]
    added: list[str]
    removed: list[str]


class MediaStatsResponse(CamelModel):
    total_count: int
    type_count: dict[str, int]
    used_count: int
    unused_count: int
    total_size: str
    latest_upload: MediaResponse | None = None
