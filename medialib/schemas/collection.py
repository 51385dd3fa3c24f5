"""Collection API schemas."""

from pydantic import Field

from medialib.schemas.common import CamelModel, IsoDatetime, PaginatedResponse
from medialib.schemas.media import MediaResponse


class CollectionCreate(CamelModel):
    """Request body for creating a collection; items and sharedWith must resolve."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    items: list[str] = Field(default_factory=list)
    color: str | None = None
    created_by: str | None = None
    is_shared: bool | None = None
    shared_with: list[str] = Field(default_factory=list)
    parent_id: str | None = None


class CollectionUpdate(CamelModel):
    """Partial update; ``parentId: null`` moves the collection to the top level."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    items: list[str] | None = None
    color: str | None = None
    is_shared: bool | None = None
    shared_with: list[str] | None = None
    parent_id: str | None = None


class CollectionItemsRequest(CamelModel):
    item_ids: list[str]


class ShareCollectionRequest(CamelModel):
    user_ids: list[str]


class CollectionResponse(CamelModel):
    id: str
    name: str
    description: str | None = None
    items: list[str]
    color: str | None = None
    created_by: str | None = None
    is_shared: bool
    shared_with: list[str]
    parent_id: str | None = None
    created: IsoDatetime
    modified: IsoDatetime


class CollectionTreeNode(CollectionResponse):
    children: list["CollectionTreeNode"] = Field(default_factory=list)


class CollectionContentsResponse(CamelModel):
    collection: CollectionResponse
    contents: PaginatedResponse[MediaResponse]


class ChildCollectionsResponse(CamelModel):
    parent: CollectionResponse
    children: PaginatedResponse[CollectionResponse]


class CollectionDeleteResponse(CamelModel):
    collection_ids: list[str]
