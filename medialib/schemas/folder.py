"""Folder API schemas."""

from pydantic import Field

from medialib.schemas.common import CamelModel, PaginatedResponse
from medialib.schemas.media import MediaResponse


class FolderCreate(CamelModel):
    """Request body for creating a folder."""

    name: str = Field(..., min_length=1, max_length=255)
    parent: str | None = None
    color: str | None = None


class FolderUpdate(CamelModel):
    """Partial update; an explicit ``parent: null`` moves the folder to the root."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    parent: str | None = None
    color: str | None = None


class FolderResponse(CamelModel):
    id: str
    name: str
    parent: str | None = None
    path: str
    color: str | None = None


class FolderTreeNode(FolderResponse):
    children: list["FolderTreeNode"] = Field(default_factory=list)


class FolderContentsResponse(CamelModel):
    folder: FolderResponse
    contents: PaginatedResponse[MediaResponse]


class FolderDeleteResponse(CamelModel):
    """Ids removed by a delete (with ``force``, descendants and their media too)."""

    folder_ids: list[str]
    media_ids: list[str]
