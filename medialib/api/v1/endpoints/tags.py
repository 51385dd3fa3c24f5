"""Tag API: list, popular, media with tag, CRUD, rename and batch tagging."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from medialib.api.v1.dependencies import (
    get_media_service,
    get_tag_service,
    page_size_param,
    simulate,
)
from medialib.application.use_cases import MediaService, TagService
from medialib.core.constants import DEFAULT_POPULAR_TAGS_LIMIT
from medialib.schemas.common import PaginatedResponse
from medialib.schemas.envelope import ApiResponse, ok
from medialib.schemas.media import MediaResponse, TagBatchRequest, TagBatchResponse
from medialib.schemas.tag import (
    TagCreate,
    TagMediaResponse,
    TagRenameRequest,
    TagResponse,
    TagUpdate,
)

router = APIRouter()

TagServiceDep = Annotated[TagService, Depends(get_tag_service)]


@router.get(
    "",
    response_model=ApiResponse[list[TagResponse]],
    dependencies=[Depends(simulate("getTags"))],
)
async def list_tags(
    request: Request,
    service: TagServiceDep,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    limit: int | None = None,
    category_id: Annotated[str | None, Query(alias="categoryId")] = None,
    search: str | None = None,
):
    """Tags in store order, by name (``sortBy=name``) or most used first (``sortBy=count``)."""
    tags = service.list_tags(sort_by=sort_by, limit=limit, category_id=category_id, search=search)
    return ok(request, [TagResponse.model_validate(t) for t in tags])


@router.get(
    "/popular",
    response_model=ApiResponse[list[TagResponse]],
    dependencies=[Depends(simulate("getPopularTags"))],
)
async def get_popular_tags(
    request: Request, service: TagServiceDep, limit: int = DEFAULT_POPULAR_TAGS_LIMIT
):
    return ok(request, [TagResponse.model_validate(t) for t in service.get_popular_tags(limit)])


@router.post(
    "/batch",
    response_model=ApiResponse[TagBatchResponse],
    dependencies=[Depends(simulate("batchUpdateTags"))],
)
async def batch_update_tags(
    request: Request,
    body: TagBatchRequest,
    service: Annotated[MediaService, Depends(get_media_service)],
):
    """Add/remove tag names on many media items; unknown media ids are reported, not fatal."""
    result = service.batch_update_tags(body.media_ids, add=body.add, remove=body.remove)
    return ok(
        request,
        TagBatchResponse.model_validate(result),
        f"Updated tags on {result.updated_count} items",
    )


@router.get(
    "/{tag_id}",
    response_model=ApiResponse[TagResponse],
    dependencies=[Depends(simulate("getTag"))],
)
async def get_tag(request: Request, tag_id: str, service: TagServiceDep):
    return ok(request, TagResponse.model_validate(service.get_tag(tag_id)))


@router.get(
    "/{tag_id}/media",
    response_model=ApiResponse[TagMediaResponse],
    dependencies=[Depends(simulate("getMediaWithTag"))],
)
async def get_media_with_tag(
    request: Request,
    tag_id: str,
    service: TagServiceDep,
    page_size: Annotated[int, Depends(page_size_param)],
    page: int = 1,
):
    result = service.get_media_with_tag(tag_id, page, page_size)
    return ok(
        request,
        TagMediaResponse(
            tag=TagResponse.model_validate(result.tag),
            media=PaginatedResponse[MediaResponse].from_page(result.media),
        ),
    )


@router.post(
    "",
    response_model=ApiResponse[TagResponse],
    status_code=201,
    dependencies=[Depends(simulate("createTag"))],
)
async def create_tag(request: Request, body: TagCreate, service: TagServiceDep):
    tag = service.create_tag(body.name, color=body.color, category_id=body.category_id)
    return ok(request, TagResponse.model_validate(tag), "Tag created successfully")


@router.patch(
    "/{tag_id}",
    response_model=ApiResponse[TagResponse],
    dependencies=[Depends(simulate("updateTag"))],
)
async def update_tag(request: Request, tag_id: str, body: TagUpdate, service: TagServiceDep):
    """Update a tag; a new name is propagated to every media item carrying the old one."""
    tag = service.update_tag(tag_id, body.model_dump(exclude_unset=True))
    return ok(request, TagResponse.model_validate(tag), "Tag updated successfully")


@router.post(
    "/{tag_id}/rename",
    response_model=ApiResponse[TagResponse],
    dependencies=[Depends(simulate("renameTag"))],
)
async def rename_tag(
    request: Request, tag_id: str, body: TagRenameRequest, service: TagServiceDep
):
    tag = service.rename_tag(tag_id, body.name)
    return ok(request, TagResponse.model_validate(tag), "Tag renamed successfully")


@router.delete(
    "/{tag_id}",
    response_model=ApiResponse[TagResponse],
    dependencies=[Depends(simulate("deleteTag"))],
)
async def delete_tag(request: Request, tag_id: str, service: TagServiceDep):
    tag = service.delete_tag(tag_id)
    return ok(request, TagResponse.model_validate(tag), "Tag deleted successfully")
